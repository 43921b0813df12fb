"""
Pre-production inventory model
"""
from sqlalchemy import Column, Integer, String, Date, DateTime
from datetime import datetime, date

from conrodworks.db.base import Base

# Item types
ITEM_TYPE_PIN = "pin"
ITEM_TYPE_BALL_BEARING = "ballBearing"
ITEM_TYPE_CONROD = "conrod"
ITEM_TYPES = (ITEM_TYPE_PIN, ITEM_TYPE_BALL_BEARING, ITEM_TYPE_CONROD)


class PreProductionItem(Base):
    """
    Stock row for a pin, a ball bearing, or an assembled conrod.

    Rows with type 'conrod' are finished assemblies; they are what invoices
    draw down. Pins and ball bearings are consumed by assembly.
    """
    __tablename__ = "pre_production"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    type = Column(String(20), nullable=False, index=True)  # pin, ballBearing, conrod
    size = Column(String(50), nullable=True)
    variant = Column(String(100), nullable=True)
    quantity = Column(Integer, nullable=False, default=0)

    # Business date of the last stock change, distinct from created_at
    date_updated = Column(Date, nullable=False, default=date.today)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<PreProductionItem {self.type}: {self.name} ({self.quantity})>"
