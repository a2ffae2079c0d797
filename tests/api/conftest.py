"""API test fixtures - authenticated TestClient with mocked services."""

from datetime import timedelta
from unittest.mock import Mock
from uuid import uuid4

import pytest
from fastapi import FastAPI
from starlette.testclient import TestClient

from api.errors import register_error_handlers
from api.middleware import RequestIDMiddleware
from auth.security_middleware import AuthMiddleware
from auth.session import SessionManager
from auth.types import Session
from core.config import DashboardConfig
from core.outcomes import Written
from core.services.customer_service import CustomerService
from core.services.invoice_actions import InvoiceActions
from core.services.invoice_service import InvoiceService
from core.view_cache import ViewCache
from utils.timezone import now_utc


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def invoice_service():
    mock = Mock(spec=InvoiceService)
    mock.create.return_value = Written(1)
    mock.update.return_value = Written(1)
    mock.delete.return_value = Written(1)
    mock.fetch_filtered.return_value = []
    mock.count_pages.return_value = 0
    mock.latest.return_value = []
    mock.get_by_id.return_value = None
    return mock


@pytest.fixture
def customer_service():
    mock = Mock(spec=CustomerService)
    mock.list_all.return_value = []
    mock.search.return_value = []
    return mock


@pytest.fixture
def view_cache():
    mock = Mock(spec=ViewCache)
    mock.generation.return_value = 0
    mock.get.return_value = None
    mock.invalidate.return_value = 0
    return mock


@pytest.fixture
def invoice_actions(invoice_service, view_cache):
    """Real mutation pipeline over mocked persistence and cache."""
    return InvoiceActions(invoice_service, view_cache)


# =============================================================================
# SERVICES DICT
# =============================================================================


@pytest.fixture
def services(invoice_service, customer_service, invoice_actions):
    return {
        "invoice": invoice_service,
        "customer": customer_service,
        "invoice_actions": invoice_actions,
    }


# =============================================================================
# AUTH FIXTURES
# =============================================================================


@pytest.fixture
def mock_session_manager():
    now = now_utc()
    mock = Mock(spec=SessionManager)
    mock.validate_session.return_value = Session(
        token="test-token",
        user_id=uuid4(),
        created_at=now,
        expires_at=now + timedelta(hours=24),
        last_activity_at=now,
    )
    return mock


# =============================================================================
# APP & CLIENT FIXTURES
# =============================================================================


@pytest.fixture
def app(mock_session_manager, services, view_cache):
    """FastAPI app with auth middleware, error handlers, dashboard and actions routes."""
    from api.actions import create_actions_router
    from api.dashboard import create_dashboard_router

    app = FastAPI()
    app.add_middleware(AuthMiddleware, session_manager=mock_session_manager)
    app.add_middleware(RequestIDMiddleware)
    register_error_handlers(app)

    app.include_router(create_dashboard_router(services, view_cache, DashboardConfig()))
    app.include_router(create_actions_router(services), prefix="/api")

    return app


@pytest.fixture
def client(app):
    """Authenticated test client."""
    c = TestClient(app, raise_server_exceptions=False, follow_redirects=False)
    c.cookies.set("session_token", "test-token")
    return c


@pytest.fixture
def unauthed_client(app):
    """Unauthenticated test client (no session cookie)."""
    return TestClient(app, raise_server_exceptions=False, follow_redirects=False)
