"""
Invoice models
"""
from sqlalchemy import Column, Integer, String, Numeric, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime

from conrodworks.db.base import Base

INVOICE_STATUSES = ("draft", "paid", "cancelled")


class Invoice(Base):
    """Sales invoice - matches invoices table"""
    __tablename__ = "invoices"

    id = Column(Integer, primary_key=True, index=True)
    invoice_no = Column(String(50), unique=True, nullable=False, index=True)  # INV-2026-0001
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)

    total_amount = Column(Numeric(12, 2), nullable=False)
    # Lifecycle: draft -> paid | cancelled
    status = Column(String(20), nullable=False, default="draft")
    transport = Column(String(255), nullable=True)  # Carrier / vehicle details

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    customer = relationship("Customer", back_populates="invoices")
    items = relationship(
        "InvoiceItem",
        back_populates="invoice",
        cascade="all, delete-orphan",
        order_by="InvoiceItem.id",
    )

    def __repr__(self):
        return f"<Invoice {self.invoice_no}: {self.total_amount} ({self.status})>"


class InvoiceItem(Base):
    """Invoice line - one finished conrod assembly at a unit price"""
    __tablename__ = "invoice_items"

    id = Column(Integer, primary_key=True, index=True)
    invoice_id = Column(Integer, ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False, index=True)

    # Assembly row (pre_production.id) at the time of sale. Not a foreign key:
    # the assembly row may be deleted later while the invoice must survive.
    product_id = Column(Integer, nullable=False)
    product_name = Column(String(255), nullable=False)

    quantity = Column(Integer, nullable=False)
    amount_per_unit = Column(Numeric(12, 2), nullable=False)
    total_amount = Column(Numeric(12, 2), nullable=False)

    invoice = relationship("Invoice", back_populates="items")

    def __repr__(self):
        return f"<InvoiceItem {self.product_name} x{self.quantity}>"
