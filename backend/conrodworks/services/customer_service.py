"""
Customer Service - Billing customers

Updates and deletes are logged under the billing module.
"""
from decimal import Decimal
from typing import Any, Dict, List

from sqlalchemy import func
from sqlalchemy.orm import Session

from conrodworks.exceptions import NotFoundError, ConflictError
from conrodworks.logging_config import get_logger
from conrodworks.models.activity_log import ACTION_UPDATE, ACTION_DELETE, MODULE_BILLING
from conrodworks.models.customer import Customer
from conrodworks.models.invoice import Invoice
from conrodworks.services.activity_log_service import record_activity, describe_changes

logger = get_logger(__name__)

CUSTOMER_CHANGE_LABELS = {
    "name": "Name",
    "address": "Address",
    "phone_number": "Phone",
    "gst_no": "GST No",
}


def customer_to_dict(db: Session, customer: Customer) -> Dict[str, Any]:
    """Customer fields plus invoice count and billed total (cancelled excluded)."""
    count, total = (
        db.query(func.count(Invoice.id), func.coalesce(func.sum(Invoice.total_amount), 0))
        .filter(Invoice.customer_id == customer.id, Invoice.status != "cancelled")
        .one()
    )
    return {
        "id": customer.id,
        "name": customer.name,
        "address": customer.address,
        "phone_number": customer.phone_number,
        "gst_no": customer.gst_no,
        "created_at": customer.created_at,
        "invoice_count": count or 0,
        "total_billed": Decimal(str(total or 0)),
    }


def list_customers(db: Session) -> List[Customer]:
    return db.query(Customer).order_by(Customer.created_at.desc(), Customer.id.desc()).all()


def get_customer(db: Session, customer_id: int) -> Customer:
    customer = db.query(Customer).filter(Customer.id == customer_id).first()
    if not customer:
        raise NotFoundError("Customer", customer_id)
    return customer


def create_customer(db: Session, data: Dict[str, Any]) -> Customer:
    customer = Customer(**data)
    db.add(customer)
    db.flush()
    logger.info("Customer created", extra={"customer_id": customer.id})
    return customer


def update_customer(db: Session, customer_id: int, data: Dict[str, Any]) -> Customer:
    """Replace a customer's details and log what changed."""
    customer = get_customer(db, customer_id)
    original = {field: getattr(customer, field) for field in CUSTOMER_CHANGE_LABELS}

    for key, value in data.items():
        setattr(customer, key, value)
    db.flush()

    record_activity(
        db,
        action=ACTION_UPDATE,
        module=MODULE_BILLING,
        entity_id=customer.id,
        entity_name=customer.name,
        description=f"Updated customer: {customer.name}",
        details=describe_changes(original, data, CUSTOMER_CHANGE_LABELS),
    )
    return customer


def delete_customer(db: Session, customer_id: int) -> None:
    """
    Delete a customer.

    Raises:
        NotFoundError: Unknown customer
        ConflictError: Customer still has invoices
    """
    customer = get_customer(db, customer_id)

    invoice_count = db.query(Invoice).filter(Invoice.customer_id == customer_id).count()
    if invoice_count:
        raise ConflictError(
            f"Cannot delete customer '{customer.name}': {invoice_count} invoice(s) reference it",
            details={"customer_id": customer_id, "invoice_count": invoice_count},
        )

    details = f"Address: {customer.address}"
    if customer.phone_number:
        details += f", Phone: {customer.phone_number}"
    if customer.gst_no:
        details += f", GST No: {customer.gst_no}"
    name = customer.name

    db.delete(customer)
    db.flush()

    record_activity(
        db,
        action=ACTION_DELETE,
        module=MODULE_BILLING,
        entity_id=customer_id,
        entity_name=name,
        description=f"Deleted customer: {name}",
        details=details,
    )
    logger.info("Customer deleted", extra={"customer_id": customer_id})
