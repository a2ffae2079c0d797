"""
Invoice form validation.

Turns a raw submission (HTML form or JSON body) into either a typed
InvoiceForm or a mapping of field name to messages. Each failing field
contributes exactly one operator-facing message, whatever the underlying
pydantic error was.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from pydantic import ValidationError

from core.models import InvoiceForm
from core.outcomes import flatten_errors

logger = logging.getLogger(__name__)

# Declaration order is the order errors are reported in
FIELD_MESSAGES: dict[str, str] = {
    "customerId": "Please select a customer.",
    "amount": "Please enter an amount greater than $0.",
    "status": "Please select an invoice status.",
}


@dataclass
class ValidationResult:
    """Either validated form data or field-level errors, never both."""

    data: InvoiceForm | None = None
    errors: dict[str, list[str]] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return self.data is not None

    def flatten(self) -> str:
        """
        Concatenate errors as "<field>: <message>" with no separator.

        Kept for clients that display a single error string.
        """
        return flatten_errors(self.errors)


def validate_invoice_form(raw: Mapping[str, Any]) -> ValidationResult:
    """
    Validate a submitted invoice.

    Only customerId, amount and status are read; any id or date in the
    submission is ignored.
    """
    submitted = {name: raw.get(name) for name in FIELD_MESSAGES if name in raw}

    try:
        form = InvoiceForm.model_validate(submitted)
    except ValidationError as exc:
        failed = {str(err["loc"][0]) for err in exc.errors() if err["loc"]}
        errors = {
            name: [message]
            for name, message in FIELD_MESSAGES.items()
            if name in failed
        }
        logger.info(f"Invoice form rejected: {sorted(errors)}")
        return ValidationResult(errors=errors)

    return ValidationResult(data=form)
