"""Invoice pages: listing, create form and edit form."""

from html import escape
from urllib.parse import urlencode

from core.models import CustomerField, InvoiceEdit, InvoiceRow, InvoiceStatus
from utils.formatting import format_currency, format_date, generate_pagination

FIELD_LABELS = {
    "customerId": "Choose customer",
    "amount": "Choose an amount",
    "status": "Set the invoice status",
}


def status_badge(status: InvoiceStatus) -> str:
    label = "Paid" if status == InvoiceStatus.PAID else "Pending"
    return f'<span class="badge {status.value}">{label}</span>'


def avatar(image_url: str | None, name: str) -> str:
    if not image_url:
        return ""
    return f'<img class="avatar" src="{escape(image_url)}" alt="{escape(name)}\'s profile picture">'


def search_box(placeholder: str, query: str) -> str:
    return f"""
<form class="search" method="get">
  <input type="search" name="query" value="{escape(query)}" placeholder="{escape(placeholder)}">
</form>"""


def pagination(query: str, current_page: int, total_pages: int) -> str:
    if total_pages <= 1:
        return ""

    def href(page: int) -> str:
        params = {"page": page}
        if query:
            params["query"] = query
        return f"/dashboard/invoices?{urlencode(params)}"

    items = []
    if current_page > 1:
        items.append(f'<a href="{href(current_page - 1)}" aria-label="Previous">&larr;</a>')
    for page in generate_pagination(current_page, total_pages):
        if page == "...":
            items.append("<span>...</span>")
        elif page == current_page:
            items.append(f'<span class="current">{page}</span>')
        else:
            items.append(f'<a href="{href(page)}">{page}</a>')
    if current_page < total_pages:
        items.append(f'<a href="{href(current_page + 1)}" aria-label="Next">&rarr;</a>')

    return f'<nav class="pagination">{"".join(items)}</nav>'


def invoices_table(invoices: list[InvoiceRow]) -> str:
    if not invoices:
        return '<p class="muted">No invoices found.</p>'

    rows = "".join(
        f"""<tr>
  <td>{avatar(inv.image_url, inv.name)}{escape(inv.name)}</td>
  <td>{escape(inv.email)}</td>
  <td>{format_currency(inv.amount)}</td>
  <td>{format_date(inv.date)}</td>
  <td>{status_badge(inv.status)}</td>
  <td class="actions">
    <a class="btn" href="/dashboard/invoices/{inv.id}/edit">Edit</a>
    <button class="btn danger" type="button" onclick="deleteInvoice('{inv.id}')">Delete</button>
  </td>
</tr>"""
        for inv in invoices
    )
    return f"""
<table>
  <thead><tr><th>Customer</th><th>Email</th><th>Amount</th><th>Date</th><th>Status</th><th></th></tr></thead>
  <tbody>{rows}</tbody>
</table>"""


def invoices_page(invoices: list[InvoiceRow], query: str, current_page: int, total_pages: int) -> str:
    """Body of /dashboard/invoices."""
    return f"""
<h1 class="heading">Invoices</h1>
<div class="row">
  {search_box("Search invoices...", query)}
  <a class="btn primary" href="/dashboard/invoices/create">Create Invoice +</a>
</div>
{invoices_table(invoices)}
{pagination(query, current_page, total_pages)}"""


def breadcrumbs(current: str, href: str) -> str:
    return (
        f'<nav class="muted"><a href="/dashboard/invoices">Invoices</a> / '
        f'<a href="{href}" aria-current="page">{escape(current)}</a></nav>'
    )


def _field_errors(errors: dict[str, list[str]], name: str) -> str:
    return "".join(
        f'<p class="error" id="{name}-error">{escape(message)}</p>'
        for message in errors.get(name, [])
    )


def invoice_form(
    action: str,
    submit_label: str,
    customers: list[CustomerField],
    values: dict[str, str],
    errors: dict[str, list[str]] | None = None,
    message: str | None = None,
) -> str:
    """
    Create/edit form. values holds the submitted or stored field values as
    strings so a rejected submission is shown back as typed.
    """
    errors = errors or {}
    selected_customer = values.get("customerId", "")
    selected_status = values.get("status", "")

    options = ['<option value="" disabled%s>Select a customer</option>' % (
        "" if selected_customer else " selected"
    )]
    for customer in customers:
        selected = " selected" if str(customer.id) == selected_customer else ""
        options.append(
            f'<option value="{customer.id}"{selected}>{escape(customer.name)}</option>'
        )

    radios = "".join(
        f"""<label><input type="radio" name="status" value="{status.value}"
  {"checked" if status.value == selected_status else ""}> {status.value.capitalize()}</label> """
        for status in InvoiceStatus
    )

    banner = f'<p class="error" role="alert">{escape(message)}</p>' if message else ""

    return f"""
<form method="post" action="{action}">
  <div class="field">
    <label for="customer">{FIELD_LABELS["customerId"]}</label>
    <select id="customer" name="customerId">{"".join(options)}</select>
    {_field_errors(errors, "customerId")}
  </div>
  <div class="field">
    <label for="amount">{FIELD_LABELS["amount"]}</label>
    <input id="amount" name="amount" type="number" step="0.01" placeholder="Enter USD amount"
      value="{escape(values.get("amount", ""))}">
    {_field_errors(errors, "amount")}
  </div>
  <fieldset class="field">
    <legend>{FIELD_LABELS["status"]}</legend>
    <div>{radios}</div>
    {_field_errors(errors, "status")}
  </fieldset>
  {banner}
  <div class="row" style="justify-content:flex-end; max-width:420px">
    <a class="btn" href="/dashboard/invoices">Cancel</a>
    <button class="btn primary" type="submit">{escape(submit_label)}</button>
  </div>
</form>"""


def create_invoice_page(
    customers: list[CustomerField],
    values: dict[str, str] | None = None,
    errors: dict[str, list[str]] | None = None,
    message: str | None = None,
) -> str:
    """Body of /dashboard/invoices/create."""
    form = invoice_form(
        "/dashboard/invoices/create", "Create Invoice", customers, values or {}, errors, message
    )
    return f"""
{breadcrumbs("Create Invoice", "/dashboard/invoices/create")}
{form}"""


def edit_invoice_page(
    invoice_id: str,
    customers: list[CustomerField],
    values: dict[str, str],
    errors: dict[str, list[str]] | None = None,
    message: str | None = None,
) -> str:
    """Body of /dashboard/invoices/{id}/edit."""
    action = f"/dashboard/invoices/{escape(invoice_id)}/edit"
    form = invoice_form(action, "Edit Invoice", customers, values, errors, message)
    return f"""
{breadcrumbs("Edit Invoice", action)}
{form}"""


def edit_values(invoice: InvoiceEdit) -> dict[str, str]:
    """Stored invoice as form field strings."""
    return {
        "customerId": str(invoice.customer_id),
        "amount": f"{invoice.amount:.2f}",
        "status": invoice.status.value,
    }
