"""
Invoice Pydantic Schemas
"""
from pydantic import BaseModel, Field
from typing import Optional, List, Literal
from datetime import datetime
from decimal import Decimal

InvoiceStatus = Literal["draft", "paid", "cancelled"]


# ============================================================================
# Requests
# ============================================================================

class InvoiceLineCreate(BaseModel):
    """One line: a finished conrod assembly row and its unit price"""
    product_id: int = Field(..., description="Conrod assembly (pre-production row) ID")
    product_name: str = Field(..., min_length=1, max_length=255)
    quantity: int = Field(..., ge=1)
    amount_per_unit: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)


class InvoiceCreate(BaseModel):
    invoice_no: Optional[str] = Field(
        None, min_length=1, max_length=50, description="Generated when omitted"
    )
    customer_id: int
    products: List[InvoiceLineCreate] = Field(..., min_length=1)
    transport: Optional[str] = Field(None, max_length=255)


class InvoiceStatusUpdate(BaseModel):
    status: InvoiceStatus


# ============================================================================
# Responses
# ============================================================================

class InvoiceItemResponse(BaseModel):
    id: int
    invoice_id: int
    product_id: int
    product_name: str
    quantity: int
    amount_per_unit: Decimal
    total_amount: Decimal

    class Config:
        from_attributes = True


class InvoiceItemSummary(BaseModel):
    id: int
    product_name: str
    quantity: int

    class Config:
        from_attributes = True


class InvoiceResponse(BaseModel):
    id: int
    invoice_no: str
    customer_id: int
    total_amount: Decimal
    status: str
    transport: Optional[str] = None
    created_at: datetime
    items: List[InvoiceItemResponse] = []

    class Config:
        from_attributes = True


class InvoiceListResponse(BaseModel):
    """Billing history row"""
    id: int
    invoice_no: str
    customer_id: int
    customer_name: str
    total_amount: Decimal
    status: str
    transport: Optional[str] = None
    created_at: datetime
    items: List[InvoiceItemSummary] = []


class InventoryDeduction(BaseModel):
    product_id: int
    product_name: str
    quantity_deducted: int
    remaining_quantity: int


class InvoiceCreateResponse(BaseModel):
    invoice: InvoiceResponse
    inventory_deductions: List[InventoryDeduction]
