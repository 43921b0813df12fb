"""
Pre-production inventory and conrod assembly schemas
"""
from pydantic import BaseModel, Field, field_validator
from typing import Optional, Literal
from datetime import date, datetime

ItemType = Literal["pin", "ballBearing", "conrod"]


# ============================================================================
# Pre-production items
# ============================================================================

class PreProductionItemCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    type: ItemType
    size: Optional[str] = Field(None, max_length=50)
    variant: Optional[str] = Field(None, max_length=100)
    quantity: int = Field(..., ge=0)
    date_updated: Optional[date] = Field(None, description="Defaults to today")


class PreProductionItemUpdate(BaseModel):
    """Partial update; date_updated is always stamped with today"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    type: Optional[ItemType] = None
    size: Optional[str] = Field(None, max_length=50)
    variant: Optional[str] = Field(None, max_length=100)
    quantity: Optional[int] = Field(None, ge=0)

    @field_validator('name', 'type', 'quantity')
    @classmethod
    def reject_null(cls, v):
        """Omit a field to leave it unchanged; null is not a value for it"""
        if v is None:
            raise ValueError('Field cannot be null')
        return v


class PreProductionItemResponse(BaseModel):
    id: int
    name: str
    type: str
    size: Optional[str] = None
    variant: Optional[str] = None
    quantity: int
    date_updated: date
    created_at: datetime

    class Config:
        from_attributes = True


# ============================================================================
# Conrod assemblies
# ============================================================================

class AssemblyCreate(BaseModel):
    """Assemble `quantity` conrods of one recipe configuration"""
    conrod_type: str = Field(..., min_length=1, max_length=255, description="Recipe conrod name")
    variant: str = Field(..., min_length=1, max_length=100)
    size: str = Field(..., min_length=1, max_length=50)
    quantity: int = Field(..., ge=1)
    date_updated: Optional[date] = Field(None, description="Defaults to today")


class AssemblyUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    size: Optional[str] = Field(None, max_length=50)
    variant: Optional[str] = Field(None, max_length=100)
    quantity: Optional[int] = Field(None, ge=0)

    @field_validator('name', 'quantity')
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError('Field cannot be null')
        return v


class ComponentDeduction(BaseModel):
    id: int
    name: str
    variant: Optional[str] = None
    size: Optional[str] = None
    quantity: int
    remaining: int


class InventoryDeducted(BaseModel):
    pin: ComponentDeduction
    ball_bearing: ComponentDeduction


class AssemblyCreateResponse(BaseModel):
    assembly: PreProductionItemResponse
    inventory_deducted: InventoryDeducted
