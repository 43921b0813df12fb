"""
Pre-production Inventory Endpoints

Stock rows for pins, ball bearings and assembled conrods.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from conrodworks.db.session import get_db, unit_of_work
from conrodworks.schemas.common import MessageResponse
from conrodworks.schemas.pre_production import (
    ItemType,
    PreProductionItemCreate,
    PreProductionItemUpdate,
    PreProductionItemResponse,
)
from conrodworks.services import inventory_service

router = APIRouter(prefix="/pre-production", tags=["Pre-production Inventory"])


@router.get("", response_model=List[PreProductionItemResponse])
async def list_items(
    item_type: Optional[ItemType] = Query(None, alias="type"),
    db: Session = Depends(get_db),
):
    """List stock rows, newest first, optionally of one type."""
    return inventory_service.list_items(db, item_type)


@router.post("", response_model=PreProductionItemResponse, status_code=status.HTTP_201_CREATED)
async def create_item(
    request: PreProductionItemCreate,
    db: Session = Depends(get_db),
):
    with unit_of_work(db):
        item = inventory_service.create_item(db, **request.model_dump())
    db.refresh(item)
    return item


@router.get("/{item_id}", response_model=PreProductionItemResponse)
async def get_item(item_id: int, db: Session = Depends(get_db)):
    return inventory_service.get_item(db, item_id)


@router.put("/{item_id}", response_model=PreProductionItemResponse)
async def update_item(
    item_id: int,
    request: PreProductionItemUpdate,
    db: Session = Depends(get_db),
):
    """Update sent fields; date_updated becomes today."""
    with unit_of_work(db):
        item = inventory_service.update_item(db, item_id, request.model_dump(exclude_unset=True))
    db.refresh(item)
    return item


@router.delete("/{item_id}", response_model=MessageResponse)
async def delete_item(item_id: int, db: Session = Depends(get_db)):
    with unit_of_work(db):
        inventory_service.delete_item(db, item_id)
    return {"message": "Pre-production item deleted"}
