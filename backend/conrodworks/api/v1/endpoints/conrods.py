"""
Conrod Recipe Endpoints

Catalogue CRUD, spreadsheet bulk import, and the recipe lookup used when
assembling conrods.
"""
from typing import List, Literal

from fastapi import APIRouter, Depends, Query, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from conrodworks.db.session import get_db, unit_of_work
from conrodworks.logging_config import get_logger
from conrodworks.schemas.common import MessageResponse
from conrodworks.schemas.conrod import (
    ConrodCreate,
    ConrodUpdate,
    ConrodResponse,
    ConrodBulkImportRequest,
    BulkImportResponse,
    RecipeResponse,
)
from conrodworks.services import recipe_service

router = APIRouter(prefix="/conrods", tags=["Conrod Recipes"])

logger = get_logger(__name__)


# ============================================================================
# LIST & LOOKUP
# ============================================================================

@router.get("", response_model=List[ConrodResponse])
async def list_conrods(db: Session = Depends(get_db)):
    """List all recipes, newest first."""
    return recipe_service.list_conrods(db)


@router.get("/recipe", response_model=RecipeResponse)
async def get_recipe(
    conrod_name: str = Query(..., min_length=1),
    conrod_variant: str = Query(..., min_length=1),
    conrod_size: str = Query(..., min_length=1),
    db: Session = Depends(get_db),
):
    """
    Recipe for one conrod configuration: dimensions plus the pin and ball
    bearing a single unit consumes.
    """
    recipe = recipe_service.find_recipe(db, conrod_name, conrod_variant, conrod_size)
    return recipe_service.build_recipe(recipe)


@router.get("/unique", response_model=List[str])
async def get_unique_names(
    item_type: Literal["pin", "ballBearing", "conrod"] = Query(..., alias="type"),
    db: Session = Depends(get_db),
):
    """Sorted distinct names of pins, ball bearings or conrods across all recipes."""
    return recipe_service.unique_names(db, item_type)


# ============================================================================
# CRUD
# ============================================================================

@router.post("", response_model=ConrodResponse, status_code=status.HTTP_201_CREATED)
async def create_conrod(
    request: ConrodCreate,
    db: Session = Depends(get_db),
):
    with unit_of_work(db):
        conrod = recipe_service.create_conrod(db, request.model_dump())
    db.refresh(conrod)
    return conrod


@router.get("/{conrod_id}", response_model=ConrodResponse)
async def get_conrod(conrod_id: int, db: Session = Depends(get_db)):
    return recipe_service.get_conrod(db, conrod_id)


@router.put("/{conrod_id}", response_model=ConrodResponse)
async def update_conrod(
    conrod_id: int,
    request: ConrodUpdate,
    db: Session = Depends(get_db),
):
    """Update only the fields sent in the body."""
    with unit_of_work(db):
        conrod = recipe_service.update_conrod(db, conrod_id, request.model_dump(exclude_unset=True))
    db.refresh(conrod)
    return conrod


@router.delete("/{conrod_id}", response_model=MessageResponse)
async def delete_conrod(conrod_id: int, db: Session = Depends(get_db)):
    with unit_of_work(db):
        recipe_service.delete_conrod(db, conrod_id)
    return {"message": "Conrod deleted"}


# ============================================================================
# BULK IMPORT
# ============================================================================

@router.post("/bulk-import", response_model=BulkImportResponse)
async def bulk_import_conrods(
    request: ConrodBulkImportRequest,
    db: Session = Depends(get_db),
):
    """
    Import recipe rows (e.g. from a spreadsheet).

    Returns 200 when every row imported, 207 Multi-Status with per-row
    errors when some rows were rejected. Rejected rows do not block the rest.
    """
    rows = [row.model_dump() for row in request.conrods]
    with unit_of_work(db):
        result = recipe_service.bulk_import(db, rows)

    imported = [ConrodResponse.model_validate(c) for c in result.imported]

    if result.errors:
        body = BulkImportResponse(
            success=False,
            error=f"Failed to import {len(result.errors)} out of {result.total} conrods",
            imported=len(imported),
            data=imported,
            details=result.errors,
        )
        return JSONResponse(status_code=207, content=jsonable_encoder(body))

    return BulkImportResponse(
        success=True,
        message=f"Successfully imported {len(imported)} conrods",
        imported=len(imported),
        data=imported,
    )
