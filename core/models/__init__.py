"""Core domain models."""

from core.models.customer import Customer, CustomerField, CustomerSummary
from core.models.invoice import (
    CardData,
    Invoice,
    InvoiceEdit,
    InvoiceForm,
    InvoiceRow,
    InvoiceStatus,
)

__all__ = [
    # Customer
    "Customer", "CustomerField", "CustomerSummary",
    # Invoice
    "Invoice", "InvoiceEdit", "InvoiceForm", "InvoiceRow", "InvoiceStatus", "CardData",
]
