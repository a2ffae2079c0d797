"""Invoice domain models.

All amounts are stored in cents (integer) to avoid floating point issues.
$10.00 = 1000 cents. The submitted form carries dollars; the gateway only
ever sees cents.
"""

import datetime
from decimal import Decimal
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.money import to_cents

# invoices.amount is a 32-bit INT column
MAX_AMOUNT_CENTS = 2_147_483_647


class InvoiceStatus(str, Enum):
    """Invoice payment status."""

    PENDING = "pending"
    PAID = "paid"


class InvoiceForm(BaseModel):
    """
    Fields an operator submits when creating or editing an invoice.

    Field aliases match the form input names. ``id`` and ``date`` are
    assigned by the system and never read from a submission.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    customer_id: str = Field(..., alias="customerId", min_length=1)
    amount: Decimal = Field(..., gt=0, allow_inf_nan=False)
    status: InvoiceStatus

    @field_validator("amount")
    @classmethod
    def amount_fits_in_cents(cls, v: Decimal) -> Decimal:
        """Amount must be at least one cent and fit the amount column."""
        cents = to_cents(v)
        if cents < 1:
            raise ValueError("amount rounds to zero cents")
        if cents > MAX_AMOUNT_CENTS:
            raise ValueError("amount exceeds the largest storable value")
        return v


class Invoice(BaseModel):
    """Full invoice entity as stored."""

    id: UUID
    customer_id: UUID
    amount: int
    status: InvoiceStatus
    date: datetime.date

    model_config = {"from_attributes": True}

    @property
    def is_paid(self) -> bool:
        """Whether invoice is paid."""
        return self.status == InvoiceStatus.PAID


class InvoiceRow(Invoice):
    """Invoice joined with its customer, as shown in listings."""

    name: str
    email: str
    image_url: str | None = None


class InvoiceEdit(BaseModel):
    """Invoice as loaded into the edit form, amount back in dollars."""

    id: UUID
    customer_id: UUID
    amount: Decimal
    status: InvoiceStatus


class CardData(BaseModel):
    """Summary figures for the dashboard overview."""

    number_of_invoices: int
    number_of_customers: int
    total_paid_cents: int
    total_pending_cents: int
