"""Security middleware for FastAPI - session validation for dashboard and API routes."""

from urllib.parse import quote

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, RedirectResponse

from auth.config import AuthConfig
from auth.session import SessionManager
from auth.exceptions import SessionExpiredError
from api.base import error_response, ErrorCodes


class AuthMiddleware(BaseHTTPMiddleware):
    """Middleware that gates protected routes behind a valid session.

    1. Extracts session token from the session cookie
    2. Validates session via SessionManager
    3. Sets user_id and session on request.state

    Anonymous dashboard requests are redirected to the login page with a
    callbackUrl; anonymous API requests get a 401 envelope. A signed-in
    operator opening the login page is sent to the dashboard instead.
    """

    PROTECTED_PREFIXES = [
        "/dashboard",
        "/api/",
    ]

    def __init__(self, app, session_manager: SessionManager, config: AuthConfig | None = None):
        super().__init__(app)
        self._session_manager = session_manager
        self._config = config or AuthConfig()

    def _is_protected_path(self, path: str) -> bool:
        """Check if path falls under a protected prefix."""
        for prefix in self.PROTECTED_PREFIXES:
            base = prefix.rstrip("/")
            if path == base or path.startswith(f"{base}/"):
                return True
        return False

    def _current_session(self, request: Request):
        token = request.cookies.get(self._config.session_cookie_name)
        if not token:
            return None, None
        try:
            return self._session_manager.validate_session(token), None
        except SessionExpiredError:
            return None, ErrorCodes.SESSION_EXPIRED

    async def dispatch(self, request: Request, call_next):
        """Process request through middleware."""
        path = request.url.path

        if path == self._config.login_path:
            session, _ = self._current_session(request)
            if session is not None:
                return RedirectResponse(self._config.default_redirect, status_code=303)
            return await call_next(request)

        if not self._is_protected_path(path):
            return await call_next(request)

        session, failure = self._current_session(request)

        if session is None:
            if path.startswith("/api/"):
                if failure == ErrorCodes.SESSION_EXPIRED:
                    code, message = ErrorCodes.SESSION_EXPIRED, "Session has expired"
                else:
                    code, message = ErrorCodes.NOT_AUTHENTICATED, "Authentication required"
                return JSONResponse(
                    status_code=401,
                    content=error_response(code, message).model_dump(mode="json"),
                )

            callback = path
            if request.url.query:
                callback = f"{path}?{request.url.query}"
            return RedirectResponse(
                f"{self._config.login_path}?callbackUrl={quote(callback, safe='')}",
                status_code=303,
            )

        request.state.user_id = session.user_id
        request.state.session = session

        return await call_next(request)
