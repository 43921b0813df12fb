"""
Activity Log Endpoints
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from conrodworks.db.session import get_db
from conrodworks.schemas.activity_log import ActivityLogResponse, ActivityModule
from conrodworks.services import activity_log_service

router = APIRouter(prefix="/activity-logs", tags=["Activity Logs"])


@router.get("", response_model=List[ActivityLogResponse])
async def list_activity_logs(
    module: Optional[ActivityModule] = None,
    limit: Optional[int] = Query(None, ge=1, le=1000),
    db: Session = Depends(get_db),
):
    """Audit trail, newest first, optionally for one module."""
    return activity_log_service.list_activity(db, module=module, limit=limit)
