"""Utility modules for cross-cutting concerns."""

from utils.timezone import now_utc, today_iso, to_utc, parse_iso
from utils.formatting import format_currency, format_date, generate_pagination
