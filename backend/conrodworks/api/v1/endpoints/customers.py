"""
Customer Endpoints

Billing customers. Updates and deletes are recorded in the billing activity
log; a customer with invoices cannot be deleted.
"""
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from conrodworks.db.session import get_db, unit_of_work
from conrodworks.schemas.common import MessageResponse
from conrodworks.schemas.customer import CustomerCreate, CustomerUpdate, CustomerResponse
from conrodworks.services import customer_service

router = APIRouter(prefix="/customers", tags=["Customers"])


@router.get("", response_model=List[CustomerResponse])
async def list_customers(db: Session = Depends(get_db)):
    """List customers, newest first, with invoice count and billed total."""
    return [
        customer_service.customer_to_dict(db, customer)
        for customer in customer_service.list_customers(db)
    ]


@router.post("", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
async def create_customer(
    request: CustomerCreate,
    db: Session = Depends(get_db),
):
    with unit_of_work(db):
        customer = customer_service.create_customer(db, request.model_dump())
    db.refresh(customer)
    return customer_service.customer_to_dict(db, customer)


@router.get("/{customer_id}", response_model=CustomerResponse)
async def get_customer(customer_id: int, db: Session = Depends(get_db)):
    customer = customer_service.get_customer(db, customer_id)
    return customer_service.customer_to_dict(db, customer)


@router.put("/{customer_id}", response_model=CustomerResponse)
async def update_customer(
    customer_id: int,
    request: CustomerUpdate,
    db: Session = Depends(get_db),
):
    with unit_of_work(db):
        customer = customer_service.update_customer(db, customer_id, request.model_dump())
    db.refresh(customer)
    return customer_service.customer_to_dict(db, customer)


@router.delete("/{customer_id}", response_model=MessageResponse)
async def delete_customer(customer_id: int, db: Session = Depends(get_db)):
    with unit_of_work(db):
        customer_service.delete_customer(db, customer_id)
    return {"message": "Customer deleted"}
