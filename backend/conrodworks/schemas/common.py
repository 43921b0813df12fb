"""
Common API Response Schemas

Standardized error and message responses for consistent API behavior.
"""
from datetime import datetime
from typing import Any, Dict, Optional
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Standardized error response for all API errors.

    Error Codes:
        - VALIDATION_ERROR: Request validation failed (400/422)
        - NOT_FOUND: Resource not found (404)
        - CONFLICT: Resource conflict (409)
        - DUPLICATE_ERROR: Duplicate resource (409)
        - BUSINESS_RULE_ERROR: Business rule violation (422)
        - INSUFFICIENT_INVENTORY: Not enough stock (422)
        - MISSING_COMPONENT: Recipe component has no stock row (422)
        - DATABASE_ERROR: Database operation failed (500)
        - INTERNAL_ERROR: Unexpected internal error (500)

    Example:
        {
            "error": "INSUFFICIENT_INVENTORY",
            "message": "Insufficient inventory for pin PIN-YZF-002 (7): requested 10, available 4",
            "details": {"item": "pin PIN-YZF-002 (7)", "requested": 10, "available": 4},
            "timestamp": "2026-10-18T10:30:00Z"
        }
    """
    error: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(
        None,
        description="Additional error context for debugging"
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="When the error occurred (UTC)"
    )


class MessageResponse(BaseModel):
    """
    Simple message response for operations that don't return data.

    Used for operations like delete where only a confirmation is needed.
    """
    message: str = Field(..., description="Operation result message")
