"""
Demo data seeding

Fills empty recipe and customer tables with a small demo set so a fresh
install has something to assemble and bill. Tables that already hold rows
are left alone.
"""
from typing import Dict

from sqlalchemy.orm import Session

from conrodworks.core.settings import settings
from conrodworks.logging_config import get_logger
from conrodworks.models.conrod import Conrod
from conrodworks.models.customer import Customer

logger = get_logger(__name__)

# (serial, name, variant, size, small end, big end, center distance,
#  pin name, pin size, bearing name, bearing variant, bearing size)
DEMO_RECIPES = [
    ("CR001", "Honda CB150R Conrod", "Standard", "Standard", 15.5, 42.0, 110.5,
     "PIN-CB150-001", "Standard", "BB-6201-2RS", "Standard", "Standard"),
    ("CR002", "Yamaha YZF-R15 Conrod", "NRB", "7", 14.8, 40.5, 108.2,
     "PIN-YZF-002", "7", "BB-6200-2RS", "NRB", "7"),
    ("CR003", "Bajaj Pulsar 200NS Conrod", "Standard", "5", 16.0, 44.0, 115.0,
     "PIN-P200-003", "5", "BB-6202-2RS", "Standard", "5"),
    ("CR004", "KTM Duke 200 Conrod", "NRB", "3", 15.2, 41.8, 112.3,
     "PIN-KTM-004", "3", "BB-6201-Z", "NRB", "3"),
    ("CR005", "Royal Enfield Classic 350 Conrod", "Standard", "6", 18.0, 48.0, 125.5,
     "PIN-RE350-005", "6", "BB-6203-2RS", "Standard", "6"),
]

DEMO_CUSTOMERS = [
    ("John Smith", "123 Main St, New York, NY 10001", "(555) 123-4567", "GST123456789"),
    ("Sarah Johnson", "456 Oak Ave, Los Angeles, CA 90210", "(555) 987-6543", "GST987654321"),
    ("Mike Davis", "789 Pine Rd, Chicago, IL 60601", "(555) 456-7890", "GST456789123"),
    ("Emily Wilson", "321 Elm St, Houston, TX 77001", "(555) 234-5678", "GST234567890"),
    ("David Brown", "654 Maple Dr, Phoenix, AZ 85001", "(555) 345-6789", "GST345678901"),
]


def seed_demo_data(db: Session) -> Dict[str, int]:
    """
    Insert demo recipes and customers into empty tables, then commit.

    Returns:
        Number of rows inserted per table
    """
    created = {"conrods": 0, "customers": 0}

    if db.query(Conrod.id).first() is None:
        for row in DEMO_RECIPES:
            (serial, name, variant, size, small_end, big_end, center,
             pin_name, pin_size, bb_name, bb_variant, bb_size) = row
            db.add(Conrod(
                serial_number=serial,
                conrod_name=name,
                conrod_variant=variant,
                conrod_size=size,
                small_end_diameter=small_end,
                big_end_diameter=big_end,
                center_distance=center,
                pin_name=pin_name,
                pin_size=pin_size,
                ball_bearing_name=bb_name,
                ball_bearing_variant=bb_variant,
                ball_bearing_size=bb_size,
                amount=settings.DEMO_RECIPE_STOCK,
            ))
        created["conrods"] = len(DEMO_RECIPES)

    if db.query(Customer.id).first() is None:
        for name, address, phone, gst in DEMO_CUSTOMERS:
            db.add(Customer(name=name, address=address, phone_number=phone, gst_no=gst))
        created["customers"] = len(DEMO_CUSTOMERS)

    if any(created.values()):
        db.commit()
        logger.info("Demo data seeded", extra=created)

    return created
