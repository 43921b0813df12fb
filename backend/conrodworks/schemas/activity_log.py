"""
Activity log schemas
"""
from pydantic import BaseModel
from typing import Optional, Literal
from datetime import datetime

ActivityModule = Literal["pre-production", "conrod-assembly", "billing"]


class ActivityLogResponse(BaseModel):
    id: int
    action: str
    module: str
    entity_id: Optional[int] = None
    entity_name: Optional[str] = None
    description: str
    details: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True
