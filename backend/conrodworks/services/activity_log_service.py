"""
Activity Log Service - Audit trail for stock, assembly and billing actions

Entries are added to the caller's session and committed with the change they
describe. This service never commits.

Usage:
    record_activity(
        db,
        action=ACTION_DEDUCT,
        module=MODULE_CONROD_ASSEMBLY,
        entity_id=pin.id,
        entity_name=pin.name,
        description=f"Deducted {qty} units for conrod assembly",
        details=f"Pin: {pin.name} ({pin.size}) - Deducted: {qty}, Remaining: {pin.quantity}",
    )
"""
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy.orm import Session

from conrodworks.models.activity_log import ActivityLog, ACTIONS, MODULES
from conrodworks.exceptions import ValidationError


def record_activity(
    db: Session,
    *,
    action: str,
    module: str,
    description: str,
    entity_id: Optional[int] = None,
    entity_name: Optional[str] = None,
    details: Optional[str] = None,
) -> ActivityLog:
    """
    Add an activity log row to the current unit of work.

    Raises:
        ValidationError: Unknown action or module
    """
    if action not in ACTIONS:
        raise ValidationError(f"Unknown activity action '{action}'", field="action", value=action)
    if module not in MODULES:
        raise ValidationError(f"Unknown activity module '{module}'", field="module", value=module)

    entry = ActivityLog(
        action=action,
        module=module,
        entity_id=entity_id,
        entity_name=entity_name,
        description=description,
        details=details,
    )
    db.add(entry)
    return entry


def list_activity(
    db: Session,
    module: Optional[str] = None,
    limit: Optional[int] = None,
) -> List[ActivityLog]:
    """Activity entries, newest first, optionally for one module."""
    query = db.query(ActivityLog)
    if module:
        query = query.filter(ActivityLog.module == module)
    query = query.order_by(ActivityLog.created_at.desc(), ActivityLog.id.desc())
    if limit:
        query = query.limit(limit)
    return query.all()


def _display(value: Any) -> str:
    if value is None or value == "":
        return "N/A"
    return str(value)


def describe_changes(
    original: Mapping[str, Any],
    updates: Mapping[str, Any],
    labels: Dict[str, str],
) -> str:
    """
    Build the change summary used in UPDATE log details.

    Only fields listed in `labels` that are present in `updates` and differ
    from `original` are reported, in `labels` order.

    >>> describe_changes({"name": "A"}, {"name": "B"}, {"name": "Name"})
    'Name: A → B'
    """
    changes = []
    for field, label in labels.items():
        if field not in updates:
            continue
        old, new = original.get(field), updates[field]
        if old != new:
            changes.append(f"{label}: {_display(old)} → {_display(new)}")
    return ", ".join(changes) if changes else "Minor updates"
