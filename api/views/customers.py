"""Customers page."""

from html import escape

from api.views.invoices import avatar, search_box
from core.models import CustomerSummary
from utils.formatting import format_currency


def customers_table(customers: list[CustomerSummary]) -> str:
    if not customers:
        return '<p class="muted">No customers found.</p>'

    rows = "".join(
        f"""<tr>
  <td>{avatar(c.image_url, c.name)}{escape(c.name)}</td>
  <td>{escape(c.email)}</td>
  <td>{c.total_invoices}</td>
  <td>{format_currency(c.total_pending)}</td>
  <td>{format_currency(c.total_paid)}</td>
</tr>"""
        for c in customers
    )
    return f"""
<table>
  <thead><tr><th>Name</th><th>Email</th><th>Total Invoices</th><th>Total Pending</th><th>Total Paid</th></tr></thead>
  <tbody>{rows}</tbody>
</table>"""


def customers_page(customers: list[CustomerSummary], query: str) -> str:
    """Body of /dashboard/customers."""
    return f"""
<div class="row">
  <h1 class="heading">Customers</h1>
</div>
{search_box("Search customers...", query)}
{customers_table(customers)}"""
