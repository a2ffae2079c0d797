"""Customer domain models. Customers are read-only in the dashboard."""

from uuid import UUID

from pydantic import BaseModel


class CustomerField(BaseModel):
    """Minimal customer reference used to populate the invoice form."""

    id: UUID
    name: str

    model_config = {"from_attributes": True}


class Customer(BaseModel):
    """Full customer entity as stored."""

    id: UUID
    name: str
    email: str
    image_url: str | None = None

    model_config = {"from_attributes": True}


class CustomerSummary(Customer):
    """Customer with invoice totals, as shown on the customers page."""

    total_invoices: int
    total_pending: int
    total_paid: int
