"""
Application factory.

Run with:
    uvicorn main:create_app --factory

or `python main.py serve`. Operators are added with
`python main.py create-user --name ... --email ...`.
"""

import argparse
import getpass
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from starlette.responses import RedirectResponse

from api.actions import create_actions_router
from api.base import success_response
from api.dashboard import create_dashboard_router
from api.errors import register_error_handlers
from api.middleware import RequestIDMiddleware
from auth.api import create_auth_router
from auth.config import AuthConfig
from auth.credentials import CredentialsProvider
from auth.database import AuthDatabase
from auth.passwords import hash_password
from auth.rate_limiter import RateLimiter
from auth.security_logger import SecurityLogger
from auth.security_middleware import AuthMiddleware
from auth.service import AuthService
from auth.session import SessionManager
from clients.postgres_client import PostgresClient
from clients.valkey_client import ValkeyClient
from core.config import DashboardConfig
from core.services.customer_service import CustomerService
from core.services.invoice_actions import InvoiceActions
from core.services.invoice_service import InvoiceService
from core.view_cache import ViewCache

logger = logging.getLogger(__name__)


def build_app(
    postgres: PostgresClient,
    valkey: ValkeyClient,
    auth_config: AuthConfig | None = None,
    dashboard_config: DashboardConfig | None = None,
) -> FastAPI:
    """Wire services, middleware and routers around existing clients."""
    auth_config = auth_config or AuthConfig()
    dashboard_config = dashboard_config or DashboardConfig()

    view_cache = ViewCache(valkey, dashboard_config.view_cache_ttl_seconds)
    invoice_service = InvoiceService(postgres, dashboard_config.items_per_page)
    services = {
        "invoice": invoice_service,
        "customer": CustomerService(postgres),
        "invoice_actions": InvoiceActions(
            invoice_service,
            view_cache,
            dashboard_config.invoices_view_path,
        ),
    }

    session_manager = SessionManager(valkey, auth_config)
    provider = CredentialsProvider(
        config=auth_config,
        auth_db=AuthDatabase(postgres),
        session_manager=session_manager,
        rate_limiter=RateLimiter(valkey, auth_config),
        security_logger=SecurityLogger(postgres),
    )
    auth_service = AuthService(provider)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Dashboard started")
        yield
        postgres.close()
        valkey.close()
        logger.info("Dashboard shut down")

    app = FastAPI(title="Acme Dashboard", docs_url=None, redoc_url=None, lifespan=lifespan)
    app.add_middleware(AuthMiddleware, session_manager=session_manager, config=auth_config)
    app.add_middleware(RequestIDMiddleware)
    register_error_handlers(app)

    @app.get("/")
    async def index():
        return RedirectResponse(auth_config.default_redirect, status_code=303)

    @app.get("/health")
    async def health():
        valkey.ping()
        postgres.execute_scalar("SELECT 1")
        return success_response({"status": "ok"})

    app.include_router(create_auth_router(auth_service, auth_config))
    app.include_router(create_dashboard_router(services, view_cache, dashboard_config))
    app.include_router(create_actions_router(services), prefix="/api")

    return app


def create_app() -> FastAPI:
    """Build the app against the Vault-configured PostgreSQL and Valkey."""
    from clients.vault_client import get_database_url, get_valkey_url

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    return build_app(
        PostgresClient(get_database_url()),
        ValkeyClient(get_valkey_url()),
    )


def create_operator(
    postgres: PostgresClient,
    name: str,
    email: str,
    password: str,
    config: AuthConfig | None = None,
):
    """Add a dashboard operator who can sign in with email and password."""
    config = config or AuthConfig()
    password_hash = hash_password(password, config.password_hash_iterations)
    user = AuthDatabase(postgres).create_user(name, email, password_hash)
    logger.info(f"Created operator {user.id} ({user.email})")
    return user


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="dashboard")
    commands = parser.add_subparsers(dest="command", required=True)

    serve = commands.add_parser("serve", help="Run the dashboard")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)

    add_user = commands.add_parser("create-user", help="Add an operator account")
    add_user.add_argument("--name", required=True)
    add_user.add_argument("--email", required=True)

    args = parser.parse_args(argv)

    if args.command == "serve":
        uvicorn.run(create_app(), host=args.host, port=args.port)
        return

    from clients.vault_client import get_database_url

    logging.basicConfig(level=logging.INFO)
    password = getpass.getpass("Password: ")
    if len(password) < 6:
        parser.error("password must be at least 6 characters")

    postgres = PostgresClient(get_database_url(), minconn=1, maxconn=1)
    try:
        create_operator(postgres, args.name, args.email, password)
    finally:
        postgres.close()


if __name__ == "__main__":
    main()
