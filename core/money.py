"""Dollar/cent conversion for stored invoice amounts."""

from decimal import Decimal, ROUND_HALF_EVEN

_CENTS_PER_DOLLAR = Decimal(100)


def to_cents(amount: Decimal | int | float | str) -> int:
    """
    Convert a dollar amount to integer cents.

    Floats go through their shortest repr so 19.99 becomes Decimal("19.99"),
    not the binary approximation. Sub-cent remainders round half-to-even,
    matching round(amount * 100).
    """
    if not isinstance(amount, Decimal):
        amount = Decimal(str(amount))
    cents = (amount * _CENTS_PER_DOLLAR).to_integral_value(rounding=ROUND_HALF_EVEN)
    return int(cents)


def from_cents(cents: int) -> Decimal:
    """Convert integer cents back to dollars with two decimal places."""
    return (Decimal(cents) / _CENTS_PER_DOLLAR).quantize(Decimal("0.01"))
