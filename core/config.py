"""Dashboard configuration."""

from pydantic import BaseModel, Field


class DashboardConfig(BaseModel):
    """
    Dashboard behaviour that isn't a secret.

    Secrets (database and Valkey URLs) come from Vault, not from here.
    """

    items_per_page: int = Field(
        default=6,
        description="Invoices per page on the invoices listing",
        ge=1,
        le=100,
    )
    latest_invoices_limit: int = Field(
        default=5,
        description="Invoices shown in the overview's latest list",
        ge=1,
        le=50,
    )
    view_cache_ttl_seconds: int = Field(
        default=300,
        description="How long a rendered listing page is reused",
        ge=0,
    )
    invoices_view_path: str = Field(
        default="/dashboard/invoices",
        description="Listing view invalidated and navigated to after invoice writes",
    )
