"""Display formatting for money, dates and pagination controls."""

from datetime import date, datetime
from decimal import Decimal


def format_currency(amount_cents: int) -> str:
    """Format an amount in cents as US dollars, e.g. 123456 -> "$1,234.56"."""
    dollars = Decimal(amount_cents) / 100
    sign = "-" if dollars < 0 else ""
    return f"{sign}${abs(dollars):,.2f}"


def format_date(value: date | datetime | str) -> str:
    """Format a calendar date for display, e.g. "Oct 19, 2026"."""
    if isinstance(value, str):
        value = date.fromisoformat(value[:10])
    if isinstance(value, datetime):
        value = value.date()
    return f"{value:%b} {value.day}, {value.year}"


def generate_pagination(current_page: int, total_pages: int) -> list[int | str]:
    """
    Page links to show, with "..." standing in for skipped ranges.

    At most seven entries: the first and last pages are always present, and
    the current page is shown with its neighbours.
    """
    if total_pages <= 7:
        return list(range(1, total_pages + 1))

    if current_page <= 3:
        return [1, 2, 3, "...", total_pages - 1, total_pages]

    if current_page >= total_pages - 2:
        return [1, 2, "...", total_pages - 2, total_pages - 1, total_pages]

    return [
        1,
        "...",
        current_page - 1,
        current_page,
        current_page + 1,
        "...",
        total_pages,
    ]
