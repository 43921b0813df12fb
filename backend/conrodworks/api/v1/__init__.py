"""
API v1 Router - ConrodWorks
"""
from fastapi import APIRouter
from conrodworks.api.v1.endpoints import (
    conrods,
    pre_production,
    conrod_assemblies,
    customers,
    invoices,
    activity_logs,
)
from conrodworks.schemas.common import ErrorResponse

# Documents the error body every route can return (see exception handlers in main)
ERROR_RESPONSES = {
    404: {"model": ErrorResponse, "description": "Resource not found"},
    409: {"model": ErrorResponse, "description": "Duplicate or conflicting resource"},
    422: {"model": ErrorResponse, "description": "Invalid request or business rule violation"},
}

router = APIRouter(responses=ERROR_RESPONSES)

# Recipes (bill of materials)
router.include_router(conrods.router)

# Stock: pins, ball bearings, finished conrods
router.include_router(pre_production.router)

# Assembly
router.include_router(conrod_assemblies.router)

# Billing
router.include_router(customers.router)
router.include_router(invoices.router)

# Audit trail
router.include_router(activity_logs.router)
