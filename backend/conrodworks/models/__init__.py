"""Database models"""
from conrodworks.models.conrod import Conrod
from conrodworks.models.pre_production import PreProductionItem
from conrodworks.models.customer import Customer
from conrodworks.models.invoice import Invoice, InvoiceItem
from conrodworks.models.activity_log import ActivityLog

__all__ = [
    # Recipes
    "Conrod",
    # Inventory
    "PreProductionItem",
    # Billing
    "Customer",
    "Invoice",
    "InvoiceItem",
    # Audit trail
    "ActivityLog",
]
