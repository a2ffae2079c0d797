"""Tests for invoice form validation."""

from decimal import Decimal

import pytest

from core.models import InvoiceStatus
from core.validation import validate_invoice_form, FIELD_MESSAGES


VALID = {"customerId": "c1", "amount": "50", "status": "pending"}


class TestValidSubmission:

    def test_returns_typed_form(self):
        result = validate_invoice_form(VALID)

        assert result.success is True
        assert result.errors == {}
        assert result.data.customer_id == "c1"
        assert result.data.amount == Decimal("50")
        assert result.data.status is InvoiceStatus.PENDING

    def test_accepts_paid(self):
        result = validate_invoice_form({**VALID, "status": "paid"})
        assert result.data.status is InvoiceStatus.PAID

    @pytest.mark.parametrize("amount", ["0.01", "19.99", 12.5, 100])
    def test_positive_amounts_accepted(self, amount):
        assert validate_invoice_form({**VALID, "amount": amount}).success

    def test_ignores_id_and_date(self):
        result = validate_invoice_form({**VALID, "id": "x", "date": "1999-01-01"})

        assert result.success
        assert not hasattr(result.data, "date")
        assert not hasattr(result.data, "id")


class TestAmount:

    @pytest.mark.parametrize("amount", ["0", "-5", 0, -0.01, "", "abc", "NaN", "Infinity", None])
    def test_rejected_with_amount_message(self, amount):
        result = validate_invoice_form({**VALID, "amount": amount})

        assert result.success is False
        assert result.errors == {"amount": ["Please enter an amount greater than $0."]}

    def test_missing(self):
        raw = {"customerId": "c1", "status": "paid"}
        assert validate_invoice_form(raw).errors == {"amount": [FIELD_MESSAGES["amount"]]}

    @pytest.mark.parametrize("amount", ["0.004", "0.005", 0.001])
    def test_sub_cent_amount_rejected(self, amount):
        result = validate_invoice_form({**VALID, "amount": amount})

        assert result.errors == {"amount": ["Please enter an amount greater than $0."]}

    def test_half_cent_rounding_up_accepted(self):
        # 0.015 rounds half-to-even to 2 cents
        assert validate_invoice_form({**VALID, "amount": "0.015"}).success

    def test_largest_storable_amount_accepted(self):
        assert validate_invoice_form({**VALID, "amount": "21474836.47"}).success

    @pytest.mark.parametrize("amount", ["21474836.48", "1e12"])
    def test_amount_beyond_column_rejected(self, amount):
        result = validate_invoice_form({**VALID, "amount": amount})

        assert result.errors == {"amount": [FIELD_MESSAGES["amount"]]}


class TestStatus:

    @pytest.mark.parametrize("status", ["overdue", "PAID", "", None])
    def test_outside_allowed_set_rejected(self, status):
        result = validate_invoice_form({**VALID, "status": status})

        assert result.errors == {"status": ["Please select an invoice status."]}


class TestCustomerId:

    @pytest.mark.parametrize("raw", [
        {"amount": "5", "status": "paid"},
        {"customerId": "", "amount": "5", "status": "paid"},
    ])
    def test_missing_or_empty(self, raw):
        assert validate_invoice_form(raw).errors == {"customerId": ["Please select a customer."]}


class TestMultipleErrors:

    def test_every_field_reports_once_in_declaration_order(self):
        result = validate_invoice_form({})

        assert list(result.errors) == ["customerId", "amount", "status"]
        assert all(len(messages) == 1 for messages in result.errors.values())

    def test_flatten_concatenates_without_separator(self):
        result = validate_invoice_form({"customerId": "c1"})

        assert result.flatten() == (
            "amount: Please enter an amount greater than $0."
            "status: Please select an invoice status."
        )


class TestFormData:

    def test_accepts_starlette_form_data(self):
        from starlette.datastructures import FormData

        form = FormData([("customerId", "c1"), ("amount", "19.99"), ("status", "paid")])
        result = validate_invoice_form(form)

        assert result.success
        assert result.data.amount == Decimal("19.99")
