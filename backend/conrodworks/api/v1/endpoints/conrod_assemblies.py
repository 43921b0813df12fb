"""
Conrod Assembly Endpoints

POST builds finished conrods from pin and ball bearing stock. The other
routes manage existing assembly rows (pre-production rows of type 'conrod').
"""
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from conrodworks.db.session import get_db, unit_of_work
from conrodworks.schemas.common import MessageResponse
from conrodworks.schemas.pre_production import (
    AssemblyCreate,
    AssemblyUpdate,
    AssemblyCreateResponse,
    PreProductionItemResponse,
)
from conrodworks.services import assembly_service

router = APIRouter(prefix="/conrod-assemblies", tags=["Conrod Assembly"])


@router.get("", response_model=List[PreProductionItemResponse])
async def list_assemblies(db: Session = Depends(get_db)):
    return assembly_service.list_assemblies(db)


@router.post("", response_model=AssemblyCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_assembly(
    request: AssemblyCreate,
    db: Session = Depends(get_db),
):
    """
    Assemble conrods.

    Looks up the recipe for (conrod_type, variant, size), deducts `quantity`
    of its pin and ball bearing, and records a new assembly row. Fails with
    404 when no recipe matches and 422 when a component is missing or short;
    in both cases stock is unchanged.
    """
    with unit_of_work(db):
        result = assembly_service.create_assembly(
            db,
            conrod_type=request.conrod_type,
            variant=request.variant,
            size=request.size,
            quantity=request.quantity,
            date_updated=request.date_updated,
        )
        response = {
            "assembly": PreProductionItemResponse.model_validate(result.assembly),
            "inventory_deducted": result.inventory_deducted(),
        }
    return response


@router.get("/{assembly_id}", response_model=PreProductionItemResponse)
async def get_assembly(assembly_id: int, db: Session = Depends(get_db)):
    return assembly_service.get_assembly(db, assembly_id)


async def _update(assembly_id: int, request: AssemblyUpdate, db: Session):
    with unit_of_work(db):
        item = assembly_service.update_assembly(
            db, assembly_id, request.model_dump(exclude_unset=True)
        )
    db.refresh(item)
    return item


@router.put("/{assembly_id}", response_model=PreProductionItemResponse)
async def update_assembly(
    assembly_id: int,
    request: AssemblyUpdate,
    db: Session = Depends(get_db),
):
    return await _update(assembly_id, request, db)


@router.patch("/{assembly_id}", response_model=PreProductionItemResponse)
async def patch_assembly(
    assembly_id: int,
    request: AssemblyUpdate,
    db: Session = Depends(get_db),
):
    return await _update(assembly_id, request, db)


@router.delete("/{assembly_id}", response_model=MessageResponse)
async def delete_assembly(assembly_id: int, db: Session = Depends(get_db)):
    with unit_of_work(db):
        assembly_service.delete_assembly(db, assembly_id)
    return {"message": "Conrod assembly deleted"}
