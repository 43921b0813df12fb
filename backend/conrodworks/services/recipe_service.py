"""
Recipe Service - Conrod catalogue and bill-of-materials resolution

A recipe row maps one finished conrod (name, variant, size) to the pin and
ball bearing that a single assembled unit consumes. Assembly looks recipes up
by that exact triple.

Like the other services, nothing here commits.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy.orm import Session

from conrodworks.exceptions import NotFoundError, DuplicateError, ValidationError
from conrodworks.logging_config import get_logger
from conrodworks.models.conrod import Conrod
from conrodworks.models.pre_production import (
    ITEM_TYPE_PIN,
    ITEM_TYPE_BALL_BEARING,
    ITEM_TYPE_CONROD,
    ITEM_TYPES,
)

logger = get_logger(__name__)

# Recipe column holding the name for each kind of item
_NAME_COLUMNS = {
    ITEM_TYPE_PIN: Conrod.pin_name,
    ITEM_TYPE_BALL_BEARING: Conrod.ball_bearing_name,
    ITEM_TYPE_CONROD: Conrod.conrod_name,
}

# Bulk import: required fields, then fields that fall back to a default
_IMPORT_REQUIRED = ("serial_number", "conrod_name")
_IMPORT_DEFAULTS: Dict[str, Any] = {
    "conrod_variant": "",
    "conrod_size": "",
    "small_end_diameter": 0.0,
    "big_end_diameter": 0.0,
    "center_distance": 0.0,
    "pin_name": "",
    "pin_size": "",
    "ball_bearing_name": "",
    "ball_bearing_variant": "",
    "ball_bearing_size": "",
    "amount": 0,
}


# =============================================================================
# Recipe lookup
# =============================================================================

def find_recipe(db: Session, conrod_name: str, conrod_variant: str, conrod_size: str) -> Conrod:
    """
    Find the recipe for an exact (name, variant, size) triple.

    Raises:
        NotFoundError: No recipe matches the triple
    """
    recipe = (
        db.query(Conrod)
        .filter(
            Conrod.conrod_name == conrod_name,
            Conrod.conrod_variant == conrod_variant,
            Conrod.conrod_size == conrod_size,
        )
        .order_by(Conrod.id)
        .first()
    )
    if not recipe:
        raise NotFoundError(
            "Recipe",
            message="Recipe not found for this conrod configuration",
            details={
                "conrod_name": conrod_name,
                "conrod_variant": conrod_variant,
                "conrod_size": conrod_size,
            },
        )
    return recipe


def build_recipe(conrod: Conrod) -> Dict[str, Any]:
    """Recipe view: identity, dimensions and the components one unit consumes."""
    return {
        "conrod_name": conrod.conrod_name,
        "conrod_variant": conrod.conrod_variant,
        "conrod_size": conrod.conrod_size,
        "dimensions": {
            "small_end_diameter": conrod.small_end_diameter,
            "big_end_diameter": conrod.big_end_diameter,
            "center_distance": conrod.center_distance,
        },
        "required_components": {
            "conrod": {"name": conrod.conrod_name},
            "pin": {"name": conrod.pin_name, "size": conrod.pin_size},
            "ball_bearing": {
                "name": conrod.ball_bearing_name,
                "variant": conrod.ball_bearing_variant,
                "size": conrod.ball_bearing_size,
            },
        },
    }


def unique_names(db: Session, kind: str) -> List[str]:
    """
    Distinct non-empty names of one kind of item across all recipes, sorted.

    Used to populate pick lists when stocking pins and ball bearings.
    """
    if kind not in _NAME_COLUMNS:
        raise ValidationError(
            f"Invalid type '{kind}'. Must be one of: {', '.join(ITEM_TYPES)}",
            field="type",
            value=kind,
        )
    column = _NAME_COLUMNS[kind]
    rows = db.query(column).distinct().all()
    return sorted(name for (name,) in rows if name)


# =============================================================================
# CRUD
# =============================================================================

def list_conrods(db: Session) -> List[Conrod]:
    return db.query(Conrod).order_by(Conrod.created_at.desc(), Conrod.id.desc()).all()


def get_conrod(db: Session, conrod_id: int) -> Conrod:
    conrod = db.query(Conrod).filter(Conrod.id == conrod_id).first()
    if not conrod:
        raise NotFoundError("Conrod", conrod_id)
    return conrod


def _ensure_serial_available(db: Session, serial_number: str, exclude_id: Optional[int] = None):
    query = db.query(Conrod.id).filter(Conrod.serial_number == serial_number)
    if exclude_id is not None:
        query = query.filter(Conrod.id != exclude_id)
    if query.first():
        raise DuplicateError("Conrod", field="serial_number", value=serial_number)


def create_conrod(db: Session, data: Dict[str, Any]) -> Conrod:
    """
    Add a recipe row.

    Raises:
        DuplicateError: serial_number already used
    """
    _ensure_serial_available(db, data["serial_number"])
    conrod = Conrod(**data)
    db.add(conrod)
    db.flush()
    logger.info(
        "Conrod recipe created",
        extra={"conrod_id": conrod.id, "serial_number": conrod.serial_number},
    )
    return conrod


def update_conrod(db: Session, conrod_id: int, updates: Dict[str, Any]) -> Conrod:
    """
    Partial update. Only keys present in `updates` change.

    Raises:
        NotFoundError: Unknown conrod
        DuplicateError: New serial_number already used by another row
    """
    conrod = get_conrod(db, conrod_id)
    if "serial_number" in updates and updates["serial_number"] != conrod.serial_number:
        _ensure_serial_available(db, updates["serial_number"], exclude_id=conrod.id)

    for key, value in updates.items():
        setattr(conrod, key, value)
    db.flush()
    return conrod


def delete_conrod(db: Session, conrod_id: int) -> None:
    conrod = get_conrod(db, conrod_id)
    db.delete(conrod)
    db.flush()
    logger.info(
        "Conrod recipe deleted",
        extra={"conrod_id": conrod_id, "serial_number": conrod.serial_number},
    )


# =============================================================================
# Bulk import
# =============================================================================

@dataclass
class BulkImportResult:
    imported: List[Conrod] = field(default_factory=list)
    errors: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.imported) + len(self.errors)


def bulk_import(db: Session, rows: Sequence[Dict[str, Any]]) -> BulkImportResult:
    """
    Import recipe rows one by one.

    A bad row (missing serial number or name, serial number already in the
    table or earlier in the batch) is reported with its index and skipped;
    the remaining rows still import. Missing optional fields default to an
    empty string or zero.
    """
    result = BulkImportResult()
    seen_serials = set()

    for index, row in enumerate(rows):
        serial_number = row.get("serial_number")
        try:
            missing = [name for name in _IMPORT_REQUIRED if not row.get(name)]
            if missing:
                raise ValidationError(
                    f"Missing required field(s): {', '.join(missing)}",
                    field=missing[0],
                )
            if serial_number in seen_serials:
                raise DuplicateError("Conrod", field="serial_number", value=serial_number)
            _ensure_serial_available(db, serial_number)

            data = {name: row[name] for name in _IMPORT_REQUIRED}
            for name, default in _IMPORT_DEFAULTS.items():
                value = row.get(name)
                data[name] = value if value else default

            conrod = Conrod(**data)
            db.add(conrod)
            db.flush()
            seen_serials.add(serial_number)
            result.imported.append(conrod)
        except (ValidationError, DuplicateError) as e:
            logger.warning(
                "Bulk import row rejected",
                extra={"index": index, "serial_number": serial_number, "reason": e.message},
            )
            result.errors.append({
                "index": index,
                "serial_number": serial_number,
                "error": e.message,
            })

    logger.info(
        "Conrod bulk import finished",
        extra={"imported": len(result.imported), "failed": len(result.errors)},
    )
    return result
