"""
ConrodWorks - Custom Exception Hierarchy

Provides structured, typed exceptions with error codes for consistent
error handling across the application.

Usage:
    from conrodworks.exceptions import NotFoundError, InsufficientInventoryError

    # In a service
    raise NotFoundError("Customer", customer_id)

    # Stock check
    raise InsufficientInventoryError("PIN-YZF-002 (7)", requested=10, available=4)
"""
from typing import Any, Dict, Optional


class ConrodWorksException(Exception):
    """
    Base exception for all ConrodWorks errors.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code (e.g., "NOT_FOUND", "VALIDATION_ERROR")
        status_code: HTTP status code to return
        details: Additional context for debugging
    """

    error_code: str = "CONRODWORKS_ERROR"
    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        *,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API response."""
        result = {
            "error": self.error_code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


# ===================
# 400 Bad Request Errors
# ===================


class ValidationError(ConrodWorksException):
    """Raised when input validation fails."""

    error_code = "VALIDATION_ERROR"
    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        *,
        field: Optional[str] = None,
        value: Any = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        details = details or {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)
        super().__init__(message, details=details)


# ===================
# 404 Not Found Errors
# ===================


class NotFoundError(ConrodWorksException):
    """Raised when a resource is not found."""

    error_code = "NOT_FOUND"
    status_code = 404

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Any = None,
        *,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        details = details or {}
        details["resource"] = resource
        if resource_id is not None:
            details["resource_id"] = str(resource_id)
        if message is None:
            message = f"{resource} not found"
            if resource_id is not None:
                message = f"{resource} with ID {resource_id} not found"
        super().__init__(message, details=details)


# ===================
# 409 Conflict Errors
# ===================


class ConflictError(ConrodWorksException):
    """Raised when there's a resource conflict."""

    error_code = "CONFLICT"
    status_code = 409

    def __init__(
        self,
        message: str = "Resource conflict",
        *,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details=details)


class DuplicateError(ConflictError):
    """Raised when attempting to create a duplicate resource."""

    error_code = "DUPLICATE_ERROR"

    def __init__(
        self,
        resource: str = "Resource",
        *,
        field: Optional[str] = None,
        value: Any = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        details = details or {}
        details["resource"] = resource
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)
        message = f"{resource} already exists"
        if field and value:
            message = f"{resource} with {field}='{value}' already exists"
        super().__init__(message, details=details)


# ===================
# 422 Unprocessable Entity Errors
# ===================


class BusinessRuleError(ConrodWorksException):
    """Raised when a business rule is violated."""

    error_code = "BUSINESS_RULE_ERROR"
    status_code = 422

    def __init__(
        self,
        message: str = "Business rule violation",
        *,
        rule: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        details = details or {}
        if rule:
            details["rule"] = rule
        super().__init__(message, details=details)


class InsufficientInventoryError(BusinessRuleError):
    """Raised when there's not enough inventory."""

    error_code = "INSUFFICIENT_INVENTORY"

    def __init__(
        self,
        item_name: str,
        *,
        requested: int,
        available: int,
        details: Optional[Dict[str, Any]] = None,
    ):
        details = details or {}
        details["item"] = item_name
        details["requested"] = requested
        details["available"] = available
        message = f"Insufficient inventory for {item_name}: requested {requested}, available {available}"
        super().__init__(message, details=details)


class MissingComponentError(BusinessRuleError):
    """Raised when a recipe component has no pre-production stock row at all."""

    error_code = "MISSING_COMPONENT"

    def __init__(
        self,
        component: str,
        *,
        details: Optional[Dict[str, Any]] = None,
    ):
        details = details or {}
        details["component"] = component
        message = f"Required {component} not found in pre-production inventory"
        super().__init__(message, details=details)
