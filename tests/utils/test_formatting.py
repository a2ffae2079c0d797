"""Tests for utils/formatting.py - currency, dates and pagination links."""

from datetime import date, datetime, timezone

import pytest

from utils.formatting import format_currency, format_date, generate_pagination


class TestFormatCurrency:

    def test_formats_cents_as_dollars(self):
        assert format_currency(123456) == "$1,234.56"

    def test_zero(self):
        assert format_currency(0) == "$0.00"

    def test_single_cent(self):
        assert format_currency(1) == "$0.01"

    def test_negative(self):
        assert format_currency(-2500) == "-$25.00"


class TestFormatDate:

    def test_date(self):
        assert format_date(date(2026, 10, 19)) == "Oct 19, 2026"

    def test_iso_string(self):
        assert format_date("2022-12-06") == "Dec 6, 2022"

    def test_datetime_uses_date_part(self):
        value = datetime(2023, 1, 2, 23, 59, tzinfo=timezone.utc)
        assert format_date(value) == "Jan 2, 2023"


class TestGeneratePagination:

    def test_no_pages(self):
        assert generate_pagination(1, 0) == []

    @pytest.mark.parametrize("total", [1, 5, 7])
    def test_seven_or_fewer_lists_every_page(self, total):
        assert generate_pagination(1, total) == list(range(1, total + 1))

    def test_near_start(self):
        assert generate_pagination(2, 10) == [1, 2, 3, "...", 9, 10]

    def test_near_end(self):
        assert generate_pagination(9, 10) == [1, 2, "...", 8, 9, 10]

    def test_middle(self):
        assert generate_pagination(5, 10) == [1, "...", 4, 5, 6, "...", 10]
