"""
Invoice Service - Billing against finished conrod stock

Creating an invoice sells assembled conrods: every line draws down the
quantity of one 'conrod' pre-production row. All lines are checked before
any stock moves, so an invoice is either created with every deduction or
not at all.

Usage:
    with unit_of_work(db):
        result = create_invoice(db, customer_id=1, lines=[...])
    # result.invoice, result.deductions

This service does NOT commit. Caller is responsible for commit/rollback.
"""
from collections import OrderedDict
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Sequence

from sqlalchemy.orm import Session, joinedload

from conrodworks.core.settings import settings
from conrodworks.exceptions import (
    NotFoundError,
    DuplicateError,
    InsufficientInventoryError,
    ValidationError,
)
from conrodworks.logging_config import get_logger
from conrodworks.models.activity_log import (
    ACTION_CREATE,
    ACTION_UPDATE,
    ACTION_DELETE,
    ACTION_DEDUCT,
    MODULE_BILLING,
)
from conrodworks.models.customer import Customer
from conrodworks.models.invoice import Invoice, InvoiceItem, INVOICE_STATUSES
from conrodworks.models.pre_production import PreProductionItem, ITEM_TYPE_CONROD
from conrodworks.services.activity_log_service import record_activity

logger = get_logger(__name__)

CENT = Decimal("0.01")


class InvoiceResult(NamedTuple):
    """Created invoice and the stock it consumed"""
    invoice: Invoice
    deductions: List[Dict[str, Any]]


def _money(value) -> Decimal:
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def _format_money(value) -> str:
    return f"{settings.CURRENCY_SYMBOL}{_money(value)}"


# =============================================================================
# Invoice numbers
# =============================================================================

def generate_invoice_number(db: Session) -> str:
    """Generate next invoice number: {prefix}-{year}-{seq:04d}"""
    year = datetime.utcnow().year
    prefix = f"{settings.INVOICE_NUMBER_PREFIX}-{year}-"

    existing = db.query(Invoice.invoice_no).filter(Invoice.invoice_no.like(f"{prefix}%")).all()

    last_seq = 0
    for (invoice_no,) in existing:
        # Hand-entered numbers sharing the prefix may not end in digits
        tail = invoice_no[len(prefix):]
        if tail.isdigit():
            last_seq = max(last_seq, int(tail))

    return f"{prefix}{last_seq + 1:04d}"


# =============================================================================
# Creation
# =============================================================================

def _line_value(line: Any, key: str):
    if isinstance(line, Mapping):
        return line[key]
    return getattr(line, key)


def create_invoice(
    db: Session,
    *,
    customer_id: int,
    lines: Sequence[Any],
    invoice_no: Optional[str] = None,
    transport: Optional[str] = None,
) -> InvoiceResult:
    """
    Create a draft invoice and deduct finished conrod stock.

    Each line needs product_id, product_name, quantity and amount_per_unit.
    Quantities for the same product_id are summed before the stock check.

    Raises:
        ValidationError: No lines
        NotFoundError: Unknown customer, or a product that is not a conrod assembly
        InsufficientInventoryError: A product has less stock than requested
        DuplicateError: invoice_no already used
    """
    if not lines:
        raise ValidationError("An invoice needs at least one product", field="products")

    customer = db.query(Customer).filter(Customer.id == customer_id).first()
    if not customer:
        raise NotFoundError("Customer", customer_id)

    if invoice_no:
        if db.query(Invoice.id).filter(Invoice.invoice_no == invoice_no).first():
            raise DuplicateError("Invoice", field="invoice_no", value=invoice_no)
    else:
        invoice_no = generate_invoice_number(db)

    # Total requested per product, first-seen order
    requested: "OrderedDict[int, int]" = OrderedDict()
    names: Dict[int, str] = {}
    for line in lines:
        product_id = _line_value(line, "product_id")
        requested[product_id] = requested.get(product_id, 0) + _line_value(line, "quantity")
        names.setdefault(product_id, _line_value(line, "product_name"))

    # Check every product before any write
    stock: Dict[int, PreProductionItem] = {}
    for product_id, quantity in requested.items():
        assembly = (
            db.query(PreProductionItem)
            .filter(
                PreProductionItem.id == product_id,
                PreProductionItem.type == ITEM_TYPE_CONROD,
            )
            .with_for_update()
            .first()
        )
        if not assembly:
            raise NotFoundError(
                "Product",
                product_id,
                message=f"Product {names[product_id]} not found in inventory",
            )
        if assembly.quantity < quantity:
            raise InsufficientInventoryError(
                names[product_id], requested=quantity, available=assembly.quantity
            )
        stock[product_id] = assembly

    invoice = Invoice(
        invoice_no=invoice_no,
        customer_id=customer.id,
        status="draft",
        transport=transport,
        total_amount=Decimal("0.00"),
    )
    total = Decimal("0.00")
    for line in lines:
        quantity = _line_value(line, "quantity")
        unit_price = _money(_line_value(line, "amount_per_unit"))
        line_total = _money(unit_price * quantity)
        total += line_total
        invoice.items.append(InvoiceItem(
            product_id=_line_value(line, "product_id"),
            product_name=_line_value(line, "product_name"),
            quantity=quantity,
            amount_per_unit=unit_price,
            total_amount=line_total,
        ))
    invoice.total_amount = total

    db.add(invoice)
    db.flush()

    record_activity(
        db,
        action=ACTION_CREATE,
        module=MODULE_BILLING,
        entity_id=invoice.id,
        entity_name=invoice_no,
        description=f"Created invoice {invoice_no} for {customer.name}",
        details=f"Total Amount: {_format_money(total)}, Products: {len(lines)} items",
    )

    # Deduct per line so each line gets its own log entry
    today = date.today()
    deductions = []
    for line in lines:
        product_id = _line_value(line, "product_id")
        product_name = _line_value(line, "product_name")
        quantity = _line_value(line, "quantity")
        assembly = stock[product_id]

        assembly.quantity -= quantity
        assembly.date_updated = today

        deductions.append({
            "product_id": product_id,
            "product_name": product_name,
            "quantity_deducted": quantity,
            "remaining_quantity": assembly.quantity,
        })
        record_activity(
            db,
            action=ACTION_DEDUCT,
            module=MODULE_BILLING,
            entity_id=product_id,
            entity_name=product_name,
            description=f"Inventory deducted for invoice {invoice_no}",
            details=(
                f"Product: {product_name}, Deducted: {quantity}, "
                f"Remaining: {assembly.quantity}, "
                f"Unit Price: {_format_money(_line_value(line, 'amount_per_unit'))}"
            ),
        )
    db.flush()

    logger.info(
        "Invoice created",
        extra={
            "invoice_id": invoice.id,
            "invoice_no": invoice_no,
            "customer_id": customer.id,
            "total_amount": str(total),
            "line_count": len(lines),
        },
    )
    return InvoiceResult(invoice=invoice, deductions=deductions)


# =============================================================================
# Queries
# =============================================================================

def get_invoice(db: Session, invoice_id: int) -> Invoice:
    invoice = (
        db.query(Invoice)
        .options(joinedload(Invoice.items))
        .filter(Invoice.id == invoice_id)
        .first()
    )
    if not invoice:
        raise NotFoundError("Invoice", invoice_id)
    return invoice


def list_invoices(db: Session) -> List[Dict[str, Any]]:
    """Billing history, newest first, with customer name and item summary."""
    invoices = (
        db.query(Invoice)
        .options(joinedload(Invoice.items), joinedload(Invoice.customer))
        .order_by(Invoice.created_at.desc(), Invoice.id.desc())
        .all()
    )
    return [
        {
            "id": inv.id,
            "invoice_no": inv.invoice_no,
            "customer_id": inv.customer_id,
            "customer_name": inv.customer.name if inv.customer else "",
            "total_amount": inv.total_amount,
            "status": inv.status,
            "transport": inv.transport,
            "created_at": inv.created_at,
            "items": [
                {"id": item.id, "product_name": item.product_name, "quantity": item.quantity}
                for item in inv.items
            ],
        }
        for inv in invoices
    ]


# =============================================================================
# Status and deletion
# =============================================================================

def update_invoice_status(db: Session, invoice_id: int, status: str) -> Invoice:
    """
    Set invoice status. Logs only when the status actually changes.

    Raises:
        ValidationError: Status not draft, paid or cancelled
        NotFoundError: Unknown invoice
    """
    if status not in INVOICE_STATUSES:
        raise ValidationError(
            f"Valid status is required ({', '.join(INVOICE_STATUSES)})",
            field="status",
            value=status,
        )

    invoice = get_invoice(db, invoice_id)
    previous = invoice.status
    if previous == status:
        return invoice

    invoice.status = status
    db.flush()

    record_activity(
        db,
        action=ACTION_UPDATE,
        module=MODULE_BILLING,
        entity_id=invoice.id,
        entity_name=invoice.invoice_no,
        description=f"Invoice {invoice.invoice_no} status updated",
        details=f"Status changed from '{previous}' to '{status}'",
    )
    logger.info(
        "Invoice status changed",
        extra={"invoice_id": invoice.id, "from_status": previous, "to_status": status},
    )
    return invoice


def delete_invoice(db: Session, invoice_id: int) -> None:
    """Delete an invoice and its lines. Deducted stock stays deducted."""
    invoice = get_invoice(db, invoice_id)
    invoice_no, total, status = invoice.invoice_no, invoice.total_amount, invoice.status

    db.delete(invoice)
    db.flush()

    record_activity(
        db,
        action=ACTION_DELETE,
        module=MODULE_BILLING,
        entity_id=invoice_id,
        entity_name=invoice_no,
        description=f"Deleted invoice {invoice_no}",
        details=f"Total Amount: {_format_money(total)}, Status: {status}",
    )
    logger.info("Invoice deleted", extra={"invoice_id": invoice_id, "invoice_no": invoice_no})
