"""Dashboard overview page."""

from html import escape

from api.views.invoices import avatar
from core.models import CardData, InvoiceRow
from utils.formatting import format_currency


def _card(title: str, value: str) -> str:
    return f'<div class="card"><div class="muted">{title}</div><div class="value heading">{value}</div></div>'


def overview_page(cards: CardData, latest: list[InvoiceRow]) -> str:
    """Body of /dashboard."""
    latest_rows = "".join(
        f"""<tr>
  <td>{avatar(inv.image_url, inv.name)}{escape(inv.name)}</td>
  <td class="muted">{escape(inv.email)}</td>
  <td>{format_currency(inv.amount)}</td>
</tr>"""
        for inv in latest
    ) or '<tr><td colspan="3" class="muted">No invoices yet.</td></tr>'

    return f"""
<h1 class="heading">Dashboard</h1>
<div class="cards">
  {_card("Collected", format_currency(cards.total_paid_cents))}
  {_card("Pending", format_currency(cards.total_pending_cents))}
  {_card("Total Invoices", str(cards.number_of_invoices))}
  {_card("Total Customers", str(cards.number_of_customers))}
</div>
<h2 class="heading">Latest Invoices</h2>
<table><tbody>{latest_rows}</tbody></table>"""
