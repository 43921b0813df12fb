"""
Customer Pydantic Schemas
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from decimal import Decimal


class CustomerBase(BaseModel):
    """Base customer fields"""
    name: str = Field(..., min_length=1, max_length=255)
    address: str = Field(..., min_length=1)
    phone_number: Optional[str] = Field(None, max_length=50)
    gst_no: Optional[str] = Field(None, max_length=50)


class CustomerCreate(CustomerBase):
    """Create a new customer"""
    pass


class CustomerUpdate(CustomerBase):
    """Replace a customer's details (name and address stay required)"""
    pass


class CustomerResponse(CustomerBase):
    """Customer with billing stats"""
    id: int
    created_at: datetime

    # Stats (cancelled invoices excluded)
    invoice_count: int = 0
    total_billed: Decimal = Decimal("0")

    class Config:
        from_attributes = True
