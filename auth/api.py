"""HTTP routes for authentication."""

import ipaddress
from urllib.parse import urlsplit

from fastapi import APIRouter, Request
from starlette.responses import HTMLResponse, RedirectResponse

from api.views.layout import root_layout
from api.views.login import login_page
from auth.config import AuthConfig
from auth.service import AuthService, INVALID_CREDENTIALS


def _get_client_ip(request: Request) -> str | None:
    """Extract valid IP address from request, or None if invalid."""
    if not request.client:
        return None
    host = request.client.host
    try:
        ipaddress.ip_address(host)
        return host
    except ValueError:
        return None


def safe_redirect(target: str | None, default: str) -> str:
    """Only same-site paths are followed after sign-in.

    Browsers read a backslash as a slash and drop tabs and newlines, so
    either can turn a path into the off-site "//host" form.
    """
    if not target or not target.startswith("/"):
        return default
    if any(ch.isspace() or ord(ch) < 32 for ch in target):
        return default
    parts = urlsplit(target.replace("\\", "/"))
    if parts.scheme or parts.netloc:
        return default
    return target


def create_auth_router(auth_service: AuthService, config: AuthConfig | None = None) -> APIRouter:
    """Create auth router with injected service."""
    router = APIRouter(tags=["auth"])
    config = config or AuthConfig()

    @router.get(config.login_path, response_class=HTMLResponse)
    async def login_form(request: Request, callbackUrl: str | None = None):
        redirect_to = safe_redirect(callbackUrl, config.default_redirect)
        return root_layout("Login", login_page(redirect_to))

    @router.post(config.login_path)
    async def login(request: Request):
        """Verify credentials and set the session cookie.

        Success redirects to redirectTo; failure re-renders the form with
        the message from AuthService.
        """
        form = await request.form()
        redirect_to = safe_redirect(form.get("redirectTo"), config.default_redirect)
        response = RedirectResponse(redirect_to, status_code=303)

        message = auth_service.authenticate(
            None,
            form,
            response,
            ip_address=_get_client_ip(request),
            user_agent=request.headers.get("User-Agent"),
        )
        if message is None:
            return response

        status_code = 401 if message == INVALID_CREDENTIALS else 503
        return root_layout(
            "Login",
            login_page(redirect_to, message, email=str(form.get("email") or "")),
            status_code=status_code,
        )

    @router.post("/logout")
    async def logout(request: Request):
        """Revoke the current session and return to the login page."""
        response = RedirectResponse(config.login_path, status_code=303)
        auth_service.logout(
            request.cookies.get(config.session_cookie_name),
            response,
            ip_address=_get_client_ip(request),
        )
        return response

    return router
