"""
Invoice Endpoints

Creating an invoice deducts finished conrod stock. Status can move between
draft, paid and cancelled. Deleting an invoice does not return stock.
"""
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from conrodworks.db.session import get_db, unit_of_work
from conrodworks.schemas.common import MessageResponse
from conrodworks.schemas.invoice import (
    InvoiceCreate,
    InvoiceStatusUpdate,
    InvoiceResponse,
    InvoiceListResponse,
    InvoiceCreateResponse,
)
from conrodworks.services import invoice_service

router = APIRouter(prefix="/invoices", tags=["Billing"])


@router.get("", response_model=List[InvoiceListResponse])
async def list_invoices(db: Session = Depends(get_db)):
    """Billing history, newest first."""
    return invoice_service.list_invoices(db)


@router.post("", response_model=InvoiceCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_invoice(
    request: InvoiceCreate,
    db: Session = Depends(get_db),
):
    """
    Create a draft invoice.

    Every product must be a conrod assembly with enough stock; otherwise
    nothing is written. invoice_no is generated when omitted.
    """
    with unit_of_work(db):
        result = invoice_service.create_invoice(
            db,
            customer_id=request.customer_id,
            lines=request.products,
            invoice_no=request.invoice_no,
            transport=request.transport,
        )
    db.refresh(result.invoice)
    return {
        "invoice": InvoiceResponse.model_validate(result.invoice),
        "inventory_deductions": result.deductions,
    }


@router.get("/{invoice_id}", response_model=InvoiceResponse)
async def get_invoice(invoice_id: int, db: Session = Depends(get_db)):
    """Invoice with its line items."""
    return invoice_service.get_invoice(db, invoice_id)


@router.put("/{invoice_id}", response_model=InvoiceResponse)
async def update_invoice_status(
    invoice_id: int,
    request: InvoiceStatusUpdate,
    db: Session = Depends(get_db),
):
    """Change invoice status (draft, paid, cancelled)."""
    with unit_of_work(db):
        invoice = invoice_service.update_invoice_status(db, invoice_id, request.status)
    db.refresh(invoice)
    return invoice


@router.delete("/{invoice_id}", response_model=MessageResponse)
async def delete_invoice(invoice_id: int, db: Session = Depends(get_db)):
    with unit_of_work(db):
        invoice_service.delete_invoice(db, invoice_id)
    return {"message": "Invoice deleted"}
