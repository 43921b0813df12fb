"""
Conrod recipe Pydantic Schemas
"""
from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime


# ============================================================================
# Recipe CRUD
# ============================================================================

class ConrodBase(BaseModel):
    """Fields required to create a recipe"""
    serial_number: str = Field(..., min_length=1, max_length=50)
    conrod_name: str = Field(..., min_length=1, max_length=255)
    conrod_variant: str = Field(..., min_length=1, max_length=100)
    conrod_size: str = Field(..., min_length=1, max_length=50)

    small_end_diameter: float = Field(0.0, ge=0, description="mm")
    big_end_diameter: float = Field(0.0, ge=0, description="mm")
    center_distance: float = Field(0.0, ge=0, description="mm")

    pin_name: str = Field(..., min_length=1, max_length=255)
    pin_size: str = Field(..., min_length=1, max_length=50)
    ball_bearing_name: str = Field(..., min_length=1, max_length=255)
    ball_bearing_variant: str = Field(..., min_length=1, max_length=100)
    ball_bearing_size: str = Field(..., min_length=1, max_length=50)

    amount: int = Field(0, ge=0)


class ConrodCreate(ConrodBase):
    """Create a new recipe"""
    pass


class ConrodUpdate(BaseModel):
    """Partial update; omitted fields keep their value"""
    serial_number: Optional[str] = Field(None, min_length=1, max_length=50)
    conrod_name: Optional[str] = Field(None, min_length=1, max_length=255)
    conrod_variant: Optional[str] = Field(None, min_length=1, max_length=100)
    conrod_size: Optional[str] = Field(None, min_length=1, max_length=50)
    small_end_diameter: Optional[float] = Field(None, ge=0)
    big_end_diameter: Optional[float] = Field(None, ge=0)
    center_distance: Optional[float] = Field(None, ge=0)
    pin_name: Optional[str] = Field(None, min_length=1, max_length=255)
    pin_size: Optional[str] = Field(None, min_length=1, max_length=50)
    ball_bearing_name: Optional[str] = Field(None, min_length=1, max_length=255)
    ball_bearing_variant: Optional[str] = Field(None, min_length=1, max_length=100)
    ball_bearing_size: Optional[str] = Field(None, min_length=1, max_length=50)
    amount: Optional[int] = Field(None, ge=0)

    @field_validator('*')
    @classmethod
    def reject_null(cls, v):
        """Every recipe column is NOT NULL; omit a field to leave it unchanged"""
        if v is None:
            raise ValueError('Field cannot be null')
        return v


class ConrodResponse(BaseModel):
    """
    Full recipe row.

    Unconstrained: bulk-imported rows may carry empty strings and zeros
    for the fields they left out.
    """
    id: int
    serial_number: str
    conrod_name: str
    conrod_variant: str
    conrod_size: str
    small_end_diameter: float
    big_end_diameter: float
    center_distance: float
    pin_name: str
    pin_size: str
    ball_bearing_name: str
    ball_bearing_variant: str
    ball_bearing_size: str
    amount: int
    created_at: datetime

    class Config:
        from_attributes = True


# ============================================================================
# Bulk import
# ============================================================================

class ConrodImportRow(BaseModel):
    """
    One spreadsheet row. Every field is optional here; missing required
    fields are reported per row in the import response.
    """
    serial_number: Optional[str] = None
    conrod_name: Optional[str] = None
    conrod_variant: Optional[str] = None
    conrod_size: Optional[str] = None
    small_end_diameter: Optional[float] = Field(None, ge=0)
    big_end_diameter: Optional[float] = Field(None, ge=0)
    center_distance: Optional[float] = Field(None, ge=0)
    pin_name: Optional[str] = None
    pin_size: Optional[str] = None
    ball_bearing_name: Optional[str] = None
    ball_bearing_variant: Optional[str] = None
    ball_bearing_size: Optional[str] = None
    amount: Optional[int] = Field(None, ge=0)


class ConrodBulkImportRequest(BaseModel):
    conrods: List[ConrodImportRow]


class BulkImportError(BaseModel):
    index: int
    serial_number: Optional[str] = None
    error: str


class BulkImportResponse(BaseModel):
    success: bool
    message: Optional[str] = None
    error: Optional[str] = None
    imported: int = 0
    data: List[ConrodResponse] = []
    details: List[BulkImportError] = []


# ============================================================================
# Recipe view
# ============================================================================

class RecipeDimensions(BaseModel):
    small_end_diameter: float
    big_end_diameter: float
    center_distance: float


class ConrodComponent(BaseModel):
    name: str


class PinComponent(BaseModel):
    name: str
    size: str


class BallBearingComponent(BaseModel):
    name: str
    variant: str
    size: str


class RequiredComponents(BaseModel):
    conrod: ConrodComponent
    pin: PinComponent
    ball_bearing: BallBearingComponent


class RecipeResponse(BaseModel):
    """What one assembled conrod of this configuration consumes"""
    conrod_name: str
    conrod_variant: str
    conrod_size: str
    dimensions: RecipeDimensions
    required_components: RequiredComponents
