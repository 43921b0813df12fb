"""
Inventory Service - Pre-production stock rows

Pins, ball bearings and assembled conrods all live in the pre_production
table. Manual edits here are logged under the pre-production module;
assembly and billing change stock through their own services.
"""
from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from conrodworks.exceptions import NotFoundError
from conrodworks.logging_config import get_logger
from conrodworks.models.activity_log import (
    ACTION_CREATE,
    ACTION_UPDATE,
    ACTION_DELETE,
    MODULE_PRE_PRODUCTION,
)
from conrodworks.models.pre_production import PreProductionItem
from conrodworks.services.activity_log_service import record_activity, describe_changes

logger = get_logger(__name__)

ITEM_CHANGE_LABELS = {
    "name": "Name",
    "type": "Type",
    "quantity": "Quantity",
    "size": "Size",
    "variant": "Variant",
}


def list_items(db: Session, item_type: Optional[str] = None) -> List[PreProductionItem]:
    query = db.query(PreProductionItem)
    if item_type:
        query = query.filter(PreProductionItem.type == item_type)
    return query.order_by(PreProductionItem.created_at.desc(), PreProductionItem.id.desc()).all()


def get_item(db: Session, item_id: int) -> PreProductionItem:
    item = db.query(PreProductionItem).filter(PreProductionItem.id == item_id).first()
    if not item:
        raise NotFoundError("Pre-production item", item_id)
    return item


def create_item(
    db: Session,
    *,
    name: str,
    type: str,
    quantity: int,
    size: Optional[str] = None,
    variant: Optional[str] = None,
    date_updated: Optional[date] = None,
) -> PreProductionItem:
    """Add a stock row and log it."""
    item = PreProductionItem(
        name=name,
        type=type,
        size=size,
        variant=variant,
        quantity=quantity,
        date_updated=date_updated or date.today(),
    )
    db.add(item)
    db.flush()

    record_activity(
        db,
        action=ACTION_CREATE,
        module=MODULE_PRE_PRODUCTION,
        entity_id=item.id,
        entity_name=item.name,
        description=f"Added pre-production item: {item.name}",
        details=(
            f"Type: {item.type}, Size: {item.size or 'N/A'}, "
            f"Variant: {item.variant or 'N/A'}, Quantity: {item.quantity}"
        ),
    )
    logger.info(
        "Pre-production item created",
        extra={"item_id": item.id, "item_type": item.type, "quantity": item.quantity},
    )
    return item


def update_item(db: Session, item_id: int, updates: Dict[str, Any]) -> PreProductionItem:
    """
    Partial update of a stock row.

    date_updated is always stamped with today; the UPDATE log lists each
    changed field as "Field: old → new".
    """
    item = get_item(db, item_id)
    original = {field: getattr(item, field) for field in ITEM_CHANGE_LABELS}

    for key, value in updates.items():
        setattr(item, key, value)
    item.date_updated = date.today()
    db.flush()

    record_activity(
        db,
        action=ACTION_UPDATE,
        module=MODULE_PRE_PRODUCTION,
        entity_id=item.id,
        entity_name=item.name,
        description=f"Updated pre-production item: {item.name}",
        details=describe_changes(original, updates, ITEM_CHANGE_LABELS),
    )
    return item


def delete_item(db: Session, item_id: int) -> None:
    item = get_item(db, item_id)
    name, item_type, quantity = item.name, item.type, item.quantity
    db.delete(item)
    db.flush()

    record_activity(
        db,
        action=ACTION_DELETE,
        module=MODULE_PRE_PRODUCTION,
        entity_id=item_id,
        entity_name=name,
        description=f"Deleted pre-production item: {name}",
        details=f"Type: {item_type}, Quantity: {quantity}",
    )
    logger.info("Pre-production item deleted", extra={"item_id": item_id, "item_type": item_type})
