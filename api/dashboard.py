"""Server-rendered dashboard pages and the invoice form posts behind them."""

import logging
from uuid import UUID

from fastapi import APIRouter, Request
from starlette.responses import HTMLResponse, RedirectResponse

from api.views.customers import customers_page
from api.views.invoices import create_invoice_page, edit_invoice_page, edit_values, invoices_page
from api.views.layout import dashboard_shell
from api.views.overview import overview_page
from core.config import DashboardConfig
from core.outcomes import PersistenceFailure, Redirect, ValidationFailure
from core.services.invoice_service import InvoiceNotFoundError
from core.view_cache import ViewCache

logger = logging.getLogger(__name__)

FORM_FIELDS = ("customerId", "amount", "status")


def _parse_page(raw: str | None) -> int:
    """Page number from the query string; anything unusable means page 1."""
    try:
        page = int(raw) if raw else 1
    except ValueError:
        return 1
    return max(page, 1)


def _submitted_values(form) -> dict[str, str]:
    return {name: str(form.get(name) or "") for name in FORM_FIELDS}


def _parse_invoice_id(raw: str) -> UUID | None:
    try:
        return UUID(raw)
    except ValueError:
        return None


def create_dashboard_router(
    services: dict,
    view_cache: ViewCache,
    config: DashboardConfig | None = None,
) -> APIRouter:
    router = APIRouter()
    config = config or DashboardConfig()

    invoice_svc = services["invoice"]
    customer_svc = services["customer"]
    invoice_actions = services["invoice_actions"]
    invoices_path = config.invoices_view_path

    def _render_outcome_form(outcome, render, values: dict[str, str]):
        """Map a failed mutation back onto its form; a Redirect navigates."""
        if isinstance(outcome, Redirect):
            return RedirectResponse(outcome.location, status_code=303)
        if isinstance(outcome, ValidationFailure):
            return render(values, outcome.errors, None, 422)
        if isinstance(outcome, PersistenceFailure):
            return render(values, None, outcome.message, 500)
        raise TypeError(f"Unexpected outcome {outcome!r}")

    # -------------------------------------------------------------------------
    # Overview
    # -------------------------------------------------------------------------

    @router.get("/dashboard", response_class=HTMLResponse)
    async def overview(request: Request):
        cards = invoice_svc.card_data()
        latest = invoice_svc.latest(config.latest_invoices_limit)
        return dashboard_shell("Dashboard", overview_page(cards, latest), active="home")

    # -------------------------------------------------------------------------
    # Invoices
    # -------------------------------------------------------------------------

    @router.get(invoices_path, response_class=HTMLResponse)
    async def invoices(request: Request, query: str = "", page: str | None = None):
        current_page = _parse_page(page)
        variant = f"query={query}&page={current_page}"

        generation = view_cache.generation(invoices_path)
        cached = view_cache.get(invoices_path, generation, variant)
        if cached is not None:
            logger.debug(f"Serving {invoices_path} [{variant}] from view cache")
            return HTMLResponse(cached)

        rows = invoice_svc.fetch_filtered(query, current_page)
        total_pages = invoice_svc.count_pages(query)
        response = dashboard_shell(
            "Invoices",
            invoices_page(rows, query, current_page, total_pages),
            active="invoices",
        )
        view_cache.put(invoices_path, generation, variant, response.body.decode("utf-8"))
        return response

    @router.get(f"{invoices_path}/create", response_class=HTMLResponse)
    async def create_invoice_form(request: Request):
        customers = customer_svc.list_all()
        return dashboard_shell("Create Invoice", create_invoice_page(customers), active="invoices")

    @router.post(f"{invoices_path}/create")
    async def create_invoice(request: Request):
        form = await request.form()
        outcome = invoice_actions.create_invoice(form)

        def render(values, errors, message, status_code):
            customers = customer_svc.list_all()
            return dashboard_shell(
                "Create Invoice",
                create_invoice_page(customers, values, errors, message),
                active="invoices",
                status_code=status_code,
            )

        return _render_outcome_form(outcome, render, _submitted_values(form))

    @router.get(f"{invoices_path}/{{invoice_id}}/edit", response_class=HTMLResponse)
    async def edit_invoice_form(request: Request, invoice_id: str):
        parsed = _parse_invoice_id(invoice_id)
        invoice = invoice_svc.get_by_id(parsed) if parsed else None
        if invoice is None:
            raise InvoiceNotFoundError(invoice_id)

        customers = customer_svc.list_all()
        return dashboard_shell(
            "Edit Invoice",
            edit_invoice_page(invoice_id, customers, edit_values(invoice)),
            active="invoices",
        )

    @router.post(f"{invoices_path}/{{invoice_id}}/edit")
    async def update_invoice(request: Request, invoice_id: str):
        form = await request.form()
        outcome = invoice_actions.update_invoice(invoice_id, form)

        def render(values, errors, message, status_code):
            customers = customer_svc.list_all()
            return dashboard_shell(
                "Edit Invoice",
                edit_invoice_page(invoice_id, customers, values, errors, message),
                active="invoices",
                status_code=status_code,
            )

        return _render_outcome_form(outcome, render, _submitted_values(form))

    # -------------------------------------------------------------------------
    # Customers
    # -------------------------------------------------------------------------

    @router.get("/dashboard/customers", response_class=HTMLResponse)
    async def customers(request: Request, query: str = ""):
        rows = customer_svc.search(query)
        return dashboard_shell("Customers", customers_page(rows, query), active="customers")

    return router
