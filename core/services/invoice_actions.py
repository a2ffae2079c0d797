"""
Invoice mutations: validate, convert to cents, write, invalidate, navigate.

Each step only runs if the previous one succeeded. The listing view is
invalidated after a successful write and never after a failed one.
"""

import logging
from typing import Any, Mapping

from core.money import to_cents
from core.outcomes import (
    MutationOutcome,
    PersistenceError,
    PersistenceFailure,
    Redirect,
    Success,
    ValidationFailure,
)
from core.services.invoice_service import InvoiceService
from core.validation import validate_invoice_form
from core.view_cache import ViewCache
from utils.timezone import today_iso

logger = logging.getLogger(__name__)

INVOICES_VIEW = "/dashboard/invoices"


class InvoiceActions:
    """Create, update and delete invoices on behalf of an operator."""

    def __init__(
        self,
        invoices: InvoiceService,
        view_cache: ViewCache,
        invoices_view: str = INVOICES_VIEW,
    ):
        self.invoices = invoices
        self.view_cache = view_cache
        self.invoices_view = invoices_view

    def create_invoice(self, raw: Mapping[str, Any]) -> MutationOutcome:
        """
        Create an invoice dated today.

        Returns:
            Redirect to the listing, ValidationFailure or PersistenceFailure
        """
        validated = validate_invoice_form(raw)
        if not validated.success:
            return ValidationFailure(validated.errors)

        form = validated.data
        result = self.invoices.create(
            customer_id=form.customer_id,
            amount_cents=to_cents(form.amount),
            status=form.status,
            date=today_iso(),
        )
        if isinstance(result, PersistenceError):
            return PersistenceFailure(result.message)

        return self._invalidate_and_redirect()

    def update_invoice(self, invoice_id: str, raw: Mapping[str, Any]) -> MutationOutcome:
        """
        Update an invoice's customer, amount and status.

        The id comes from the URL, never from the submitted fields.

        Returns:
            Redirect to the listing, ValidationFailure or PersistenceFailure
        """
        validated = validate_invoice_form(raw)
        if not validated.success:
            return ValidationFailure(validated.errors)

        form = validated.data
        result = self.invoices.update(
            invoice_id=invoice_id,
            customer_id=form.customer_id,
            amount_cents=to_cents(form.amount),
            status=form.status,
        )
        if isinstance(result, PersistenceError):
            return PersistenceFailure(result.message)

        return self._invalidate_and_redirect()

    def delete_invoice(self, invoice_id: str) -> MutationOutcome:
        """
        Delete an invoice. Called from the listing itself, so no navigation.

        Returns:
            Success or PersistenceFailure, each carrying the operator message
        """
        result = self.invoices.delete(invoice_id)
        if isinstance(result, PersistenceError):
            return PersistenceFailure(result.message)

        self.view_cache.invalidate(self.invoices_view)
        return Success("Invoice deleted successfully.")

    def _invalidate_and_redirect(self) -> Redirect:
        self.view_cache.invalidate(self.invoices_view)
        return Redirect(self.invoices_view)
