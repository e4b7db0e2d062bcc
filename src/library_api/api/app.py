"""
library_api.api.app

FastAPI app factory for the Library API service.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Initialize and dispose shared infrastructure (DB engine/session factory).
- Construct the access Gate once and verify every gated route has a policy entry.
- Map infrastructure failures to 503, separate from 401/403.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.status import HTTP_503_SERVICE_UNAVAILABLE

from library_api.api.routers.books import router as books_router
from library_api.api.routers.health import router as health_router
from library_api.auth.authenticator import Authenticator
from library_api.auth.credentials import SqlCredentialStore
from library_api.auth.deps import GatedRoute
from library_api.auth.gate import Gate
from library_api.auth.policy import AccessPolicy
from library_api.db.init_db import init_db, seed_users
from library_api.db.session import create_engine, create_sessionmaker
from library_api.errors import InfrastructureError
from library_api.observability.logging import configure_logging, get_logger
from library_api.observability.middleware import RequestContextMiddleware
from library_api.settings import Settings

log = get_logger(__name__)


# Routers whose routes pass through the access gate.
GATED_ROUTERS: tuple[APIRouter, ...] = (books_router,)


def verify_gated_routes(routers: Iterable[APIRouter], policy: AccessPolicy) -> None:
    """Resolve every gated route against the policy; raises PolicyConfigError on a gap."""
    for router in routers:
        for route in router.routes:
            if not isinstance(route, GatedRoute):
                continue
            for method in route.methods:
                policy.resolve(method, route.path)


async def _infrastructure_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.error("infrastructure_error", error=str(exc), exc_info=exc)
    return JSONResponse(
        status_code=HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Service Unavailable"},
    )


def create_app(*, settings: Settings, policy: AccessPolicy | None = None) -> FastAPI:
    # Configure structured logging once at process startup (before app serves requests).
    configure_logging(service_name=settings.service_name, level=settings.log_level)
    policy = policy or AccessPolicy.default()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        verify_gated_routes(GATED_ROUTERS, policy)

        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        if settings.env in ("dev", "test"):
            # Prod uses Alembic migrations and provisions users out of band.
            await init_db(engine)
            await seed_users(
                app.state.sessionmaker, settings.seed_users, rounds=settings.bcrypt_rounds
            )

        app.state.gate = Gate(
            policy=policy,
            authenticator=Authenticator(SqlCredentialStore(app.state.sessionmaker)),
            realm=settings.auth_realm,
        )
        try:
            yield
        finally:
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="Library API",
        version="0.1.0",
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(RequestContextMiddleware)
    app.add_exception_handler(InfrastructureError, _infrastructure_error_handler)
    app.add_exception_handler(SQLAlchemyError, _infrastructure_error_handler)
    app.include_router(health_router, tags=["health"])
    app.include_router(books_router)

    return app


# --- Module Notes -----------------------------------------------------------
# Tests pass an alternate `policy` to exercise the gate without touching globals.
