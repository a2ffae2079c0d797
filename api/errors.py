"""Global exception handlers for FastAPI.

API paths get the JSON envelope; dashboard pages get an HTML error page.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse

from api.base import error_response, ErrorCodes
from api.views.errors import error_page, not_found_page
from api.views.layout import dashboard_shell, root_layout
from core.services.invoice_service import InvoiceNotFoundError

logger = logging.getLogger(__name__)


def _wants_json(request: Request) -> bool:
    return request.url.path.startswith("/api/")


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the app."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if _wants_json(request):
            code = ErrorCodes.NOT_FOUND if exc.status_code == 404 else ErrorCodes.INVALID_REQUEST
            return JSONResponse(
                status_code=exc.status_code,
                content=error_response(code, str(exc.detail)).model_dump(mode="json"),
            )
        if exc.status_code == 404:
            return root_layout("Not Found", not_found_page(), status_code=404)
        return root_layout("Error", error_page(), status_code=exc.status_code)

    @app.exception_handler(InvoiceNotFoundError)
    async def invoice_not_found_handler(request: Request, exc: InvoiceNotFoundError):
        if _wants_json(request):
            return JSONResponse(
                status_code=404,
                content=error_response(ErrorCodes.NOT_FOUND, str(exc)).model_dump(mode="json"),
            )
        return dashboard_shell("Not Found", not_found_page("invoice"), active="invoices", status_code=404)

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        message = str(exc)
        if "not found" in message.lower():
            return JSONResponse(
                status_code=404,
                content=error_response(ErrorCodes.NOT_FOUND, message).model_dump(mode="json"),
            )
        return JSONResponse(
            status_code=400,
            content=error_response(ErrorCodes.INVALID_REQUEST, message).model_dump(mode="json"),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=422,
            content=error_response(
                ErrorCodes.VALIDATION_ERROR,
                str(exc.errors()),
            ).model_dump(mode="json"),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception")
        if not _wants_json(request):
            return root_layout("Error", error_page(), status_code=500)
        return JSONResponse(
            status_code=500,
            content=error_response(
                ErrorCodes.INTERNAL_ERROR,
                "An internal error occurred",
            ).model_dump(mode="json"),
        )
