"""POST /api/actions - unified mutation endpoint."""

from fastapi import APIRouter, Request
from pydantic import BaseModel
from starlette.responses import JSONResponse

from api.base import success_response, error_response, ErrorCodes
from core.outcomes import (
    MutationOutcome,
    PersistenceFailure,
    Redirect,
    Success,
    ValidationFailure,
)


class ActionRequest(BaseModel):
    domain: str
    action: str
    data: dict


def outcome_response(outcome: MutationOutcome):
    """Render a mutation outcome as an API envelope."""
    if isinstance(outcome, Redirect):
        return success_response({"redirect": outcome.location}).model_dump(mode="json")

    if isinstance(outcome, Success):
        return success_response({"message": outcome.message}).model_dump(mode="json")

    if isinstance(outcome, ValidationFailure):
        return JSONResponse(
            status_code=422,
            content=error_response(
                ErrorCodes.VALIDATION_ERROR,
                outcome.message,
                data={"errors": outcome.errors},
            ).model_dump(mode="json"),
        )

    if isinstance(outcome, PersistenceFailure):
        return JSONResponse(
            status_code=500,
            content=error_response(
                ErrorCodes.DATABASE_ERROR,
                outcome.message,
                data={"message": outcome.message},
            ).model_dump(mode="json"),
        )

    raise TypeError(f"Unexpected outcome {outcome!r}")


def create_actions_router(services: dict) -> APIRouter:
    router = APIRouter()

    handlers = {
        "invoice": InvoiceHandler(services["invoice_actions"]),
    }

    @router.post("/actions")
    async def perform_action(request: Request, body: ActionRequest):
        handler = handlers.get(body.domain)
        if handler is None:
            raise ValueError(
                f"Unknown domain '{body.domain}'. "
                f"Valid domains: {', '.join(sorted(handlers.keys()))}"
            )

        if body.action not in handler.ALLOWED_ACTIONS:
            raise ValueError(
                f"Action '{body.action}' not allowed on '{body.domain}'. "
                f"Allowed: {', '.join(sorted(handler.ALLOWED_ACTIONS))}"
            )

        method = getattr(handler, f"_handle_{body.action}")
        return outcome_response(method(body.data))

    return router


# =============================================================================
# HANDLER CLASSES
# =============================================================================


def _require_id(data: dict) -> str:
    invoice_id = data.pop("id", None)
    if not invoice_id:
        raise ValueError("'id' is required")
    return str(invoice_id)


class InvoiceHandler:
    ALLOWED_ACTIONS = {"create", "update", "delete"}

    def __init__(self, actions):
        self.actions = actions

    def _handle_create(self, data: dict):
        data.pop("id", None)
        return self.actions.create_invoice(data)

    def _handle_update(self, data: dict):
        invoice_id = _require_id(data)
        return self.actions.update_invoice(invoice_id, data)

    def _handle_delete(self, data: dict):
        invoice_id = _require_id(data)
        return self.actions.delete_invoice(invoice_id)
