"""Authentication service - translates sign-in failures for the login form."""

import logging
from typing import Any, Mapping

from starlette.responses import Response

from auth.credentials import SignInProvider
from auth.exceptions import AuthError, AuthErrorType

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials."
SOMETHING_WENT_WRONG = "Something went wrong."


class AuthService:
    """Front door for sign-in and sign-out.

    Only AuthError is turned into a message; anything else is a bug or an
    outage the caller's error handling should see.
    """

    def __init__(self, provider: SignInProvider):
        self._provider = provider

    def authenticate(
        self,
        previous_state: str | None,
        form_data: Mapping[str, Any],
        response: Response,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> str | None:
        """Sign in with submitted credentials.

        Args:
            previous_state: Message from the last attempt, if any (unused,
                kept so the login form can round-trip its state)
            form_data: Submitted email and password
            response: Response that receives the session cookie on success

        Returns:
            None on success, otherwise the message to show on the form.

        Raises:
            Exception: Anything that is not an AuthError, unchanged.
        """
        try:
            self._provider.sign_in(
                form_data,
                response,
                ip_address=ip_address,
                user_agent=user_agent,
            )
        except AuthError as error:
            if error.type is AuthErrorType.CREDENTIALS_SIGNIN:
                return INVALID_CREDENTIALS
            logger.warning(f"Sign-in failed with {error.type.value}: {error}")
            return SOMETHING_WENT_WRONG

        return None

    def logout(self, session_token: str | None, response: Response, ip_address: str | None = None) -> None:
        """Revoke the current session, if any, and clear the cookie.

        A store failure leaves the session to expire on its own; the operator
        is still signed out of this browser.
        """
        if not session_token:
            return
        try:
            self._provider.sign_out(session_token, response, ip_address=ip_address)
        except AuthError as error:
            logger.warning(f"Sign-out failed with {error.type.value}: {error}")
