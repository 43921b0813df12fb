"""
Assembly Service - Build finished conrods from pins and ball bearings

Assembling Q conrods of a recipe consumes Q of the recipe's pin and Q of its
ball bearing (1:1), and adds a new pre-production row of type 'conrod' with
quantity Q. Stock checks for both components happen before anything is
written, so a rejected request leaves inventory untouched.

Usage:
    with unit_of_work(db):
        result = create_assembly(db, "Yamaha YZF-R15 Conrod", "NRB", "7", quantity=10)
    # result.assembly, result.pin, result.ball_bearing, result.recipe

This service does NOT commit. Caller is responsible for commit/rollback.
"""
from datetime import date
from typing import Any, Dict, List, NamedTuple, Optional

from sqlalchemy.orm import Session

from conrodworks.exceptions import (
    NotFoundError,
    InsufficientInventoryError,
    MissingComponentError,
)
from conrodworks.logging_config import get_logger
from conrodworks.models.activity_log import (
    ACTION_CREATE,
    ACTION_UPDATE,
    ACTION_DELETE,
    ACTION_DEDUCT,
    MODULE_CONROD_ASSEMBLY,
)
from conrodworks.models.conrod import Conrod
from conrodworks.models.pre_production import (
    PreProductionItem,
    ITEM_TYPE_PIN,
    ITEM_TYPE_BALL_BEARING,
    ITEM_TYPE_CONROD,
)
from conrodworks.services.activity_log_service import record_activity, describe_changes
from conrodworks.services.recipe_service import find_recipe

logger = get_logger(__name__)

ASSEMBLY_CHANGE_LABELS = {
    "name": "Name",
    "quantity": "Quantity",
    "size": "Size",
    "variant": "Variant",
}


class AssemblyResult(NamedTuple):
    """Outcome of one assembly run"""
    assembly: PreProductionItem
    pin: PreProductionItem
    ball_bearing: PreProductionItem
    recipe: Conrod
    quantity: int

    def inventory_deducted(self) -> Dict[str, Dict[str, Any]]:
        """Per-component deduction summary for the API response."""
        return {
            "pin": {
                "id": self.pin.id,
                "name": self.pin.name,
                "size": self.pin.size,
                "quantity": self.quantity,
                "remaining": self.pin.quantity,
            },
            "ball_bearing": {
                "id": self.ball_bearing.id,
                "name": self.ball_bearing.name,
                "variant": self.ball_bearing.variant,
                "size": self.ball_bearing.size,
                "quantity": self.quantity,
                "remaining": self.ball_bearing.quantity,
            },
        }


# =============================================================================
# Component resolution
# =============================================================================

def _find_pin(db: Session, recipe: Conrod) -> Optional[PreProductionItem]:
    return (
        db.query(PreProductionItem)
        .filter(
            PreProductionItem.type == ITEM_TYPE_PIN,
            PreProductionItem.name == recipe.pin_name,
            PreProductionItem.size == recipe.pin_size,
        )
        .order_by(PreProductionItem.id)
        .with_for_update()
        .first()
    )


def _find_ball_bearing(db: Session, recipe: Conrod) -> Optional[PreProductionItem]:
    return (
        db.query(PreProductionItem)
        .filter(
            PreProductionItem.type == ITEM_TYPE_BALL_BEARING,
            PreProductionItem.name == recipe.ball_bearing_name,
            PreProductionItem.variant == recipe.ball_bearing_variant,
            PreProductionItem.size == recipe.ball_bearing_size,
        )
        .order_by(PreProductionItem.id)
        .with_for_update()
        .first()
    )


def _pin_label(recipe: Conrod) -> str:
    return f"pin {recipe.pin_name} ({recipe.pin_size})"


def _ball_bearing_label(recipe: Conrod) -> str:
    return (
        f"ball bearing {recipe.ball_bearing_name} "
        f"({recipe.ball_bearing_variant}, {recipe.ball_bearing_size})"
    )


# =============================================================================
# Assembly creation
# =============================================================================

def create_assembly(
    db: Session,
    conrod_type: str,
    variant: str,
    size: str,
    quantity: int,
    date_updated: Optional[date] = None,
) -> AssemblyResult:
    """
    Assemble `quantity` conrods of the recipe matching (conrod_type, variant, size).

    Steps:
    1. Resolve the recipe by the exact triple
    2. Resolve the pin (name + size) and ball bearing (name + variant + size)
    3. Check both have at least `quantity` on hand
    4. Deduct both, insert the assembly row, log CREATE + two DEDUCTs

    Raises:
        NotFoundError: No recipe for the triple
        MissingComponentError: A required component has no stock row
        InsufficientInventoryError: A component has less than `quantity` on hand
    """
    stamp = date_updated or date.today()
    recipe = find_recipe(db, conrod_type, variant, size)

    pin = _find_pin(db, recipe)
    ball_bearing = _find_ball_bearing(db, recipe)

    if pin is None:
        raise MissingComponentError(
            _pin_label(recipe),
            details={"type": ITEM_TYPE_PIN, "name": recipe.pin_name, "size": recipe.pin_size},
        )
    if ball_bearing is None:
        raise MissingComponentError(
            _ball_bearing_label(recipe),
            details={
                "type": ITEM_TYPE_BALL_BEARING,
                "name": recipe.ball_bearing_name,
                "variant": recipe.ball_bearing_variant,
                "size": recipe.ball_bearing_size,
            },
        )
    if pin.quantity < quantity:
        raise InsufficientInventoryError(
            _pin_label(recipe), requested=quantity, available=pin.quantity
        )
    if ball_bearing.quantity < quantity:
        raise InsufficientInventoryError(
            _ball_bearing_label(recipe), requested=quantity, available=ball_bearing.quantity
        )

    # Deduct components (1:1)
    pin.quantity -= quantity
    pin.date_updated = stamp
    ball_bearing.quantity -= quantity
    ball_bearing.date_updated = stamp

    assembly = PreProductionItem(
        name=conrod_type,
        type=ITEM_TYPE_CONROD,
        size=size,
        variant=variant,
        quantity=quantity,
        date_updated=stamp,
    )
    db.add(assembly)
    db.flush()

    record_activity(
        db,
        action=ACTION_CREATE,
        module=MODULE_CONROD_ASSEMBLY,
        entity_id=assembly.id,
        entity_name=conrod_type,
        description=f"Created conrod assembly: {conrod_type}",
        details=(
            f"Variant: {variant}, Size: {size}, Quantity: {quantity}. "
            f"Components used: {quantity}x {recipe.pin_name} ({recipe.pin_size}), "
            f"{quantity}x {recipe.ball_bearing_name} "
            f"({recipe.ball_bearing_variant}, {recipe.ball_bearing_size})"
        ),
    )
    record_activity(
        db,
        action=ACTION_DEDUCT,
        module=MODULE_CONROD_ASSEMBLY,
        entity_id=pin.id,
        entity_name=recipe.pin_name,
        description=f"Deducted components for conrod assembly: {conrod_type}",
        details=(
            f"Pin: {recipe.pin_name} ({recipe.pin_size}) - "
            f"Deducted: {quantity}, Remaining: {pin.quantity}"
        ),
    )
    record_activity(
        db,
        action=ACTION_DEDUCT,
        module=MODULE_CONROD_ASSEMBLY,
        entity_id=ball_bearing.id,
        entity_name=recipe.ball_bearing_name,
        description=f"Deducted components for conrod assembly: {conrod_type}",
        details=(
            f"Ball Bearing: {recipe.ball_bearing_name} "
            f"({recipe.ball_bearing_variant}, {recipe.ball_bearing_size}) - "
            f"Deducted: {quantity}, Remaining: {ball_bearing.quantity}"
        ),
    )

    logger.info(
        "Conrod assembly created",
        extra={
            "assembly_id": assembly.id,
            "recipe": recipe.serial_number,
            "quantity": quantity,
            "pin_remaining": pin.quantity,
            "ball_bearing_remaining": ball_bearing.quantity,
        },
    )

    return AssemblyResult(
        assembly=assembly,
        pin=pin,
        ball_bearing=ball_bearing,
        recipe=recipe,
        quantity=quantity,
    )


# =============================================================================
# Assembly rows
# =============================================================================

def list_assemblies(db: Session) -> List[PreProductionItem]:
    return (
        db.query(PreProductionItem)
        .filter(PreProductionItem.type == ITEM_TYPE_CONROD)
        .order_by(PreProductionItem.created_at.desc(), PreProductionItem.id.desc())
        .all()
    )


def get_assembly(db: Session, assembly_id: int) -> PreProductionItem:
    """Only rows of type 'conrod' are assemblies; anything else is a 404."""
    item = (
        db.query(PreProductionItem)
        .filter(
            PreProductionItem.id == assembly_id,
            PreProductionItem.type == ITEM_TYPE_CONROD,
        )
        .first()
    )
    if not item:
        raise NotFoundError("Conrod assembly", assembly_id)
    return item


def update_assembly(db: Session, assembly_id: int, updates: Dict[str, Any]) -> PreProductionItem:
    """Edit an assembly row. Does not touch component stock."""
    item = get_assembly(db, assembly_id)
    original = {field: getattr(item, field) for field in ASSEMBLY_CHANGE_LABELS}

    for key, value in updates.items():
        setattr(item, key, value)
    item.date_updated = date.today()
    db.flush()

    record_activity(
        db,
        action=ACTION_UPDATE,
        module=MODULE_CONROD_ASSEMBLY,
        entity_id=item.id,
        entity_name=item.name,
        description=f"Updated conrod assembly: {item.name}",
        details=describe_changes(original, updates, ASSEMBLY_CHANGE_LABELS),
    )
    return item


def delete_assembly(db: Session, assembly_id: int) -> None:
    """Remove an assembly row. Consumed components are not returned to stock."""
    item = get_assembly(db, assembly_id)
    name = item.name
    details = (
        f"Variant: {item.variant or 'N/A'}, Size: {item.size or 'N/A'}, "
        f"Quantity: {item.quantity}"
    )
    db.delete(item)
    db.flush()

    record_activity(
        db,
        action=ACTION_DELETE,
        module=MODULE_CONROD_ASSEMBLY,
        entity_id=assembly_id,
        entity_name=name,
        description=f"Deleted conrod assembly: {name}",
        details=details,
    )
    logger.info("Conrod assembly deleted", extra={"assembly_id": assembly_id})
