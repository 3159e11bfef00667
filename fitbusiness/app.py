"""FitBusiness: FastAPI application factory."""

from __future__ import annotations

import random

from fastapi import FastAPI

from fitbusiness.config import Settings, get_settings
from fitbusiness.middleware import (
    configure_cors,
    configure_error_handlers,
    configure_rate_limiting,
    configure_request_logging,
    lifespan,
)
from fitbusiness.routers import analytics, audit, companies, employees, health, imports, insights
from fitbusiness.services.insights import InsightClient
from fitbusiness.store import DataStore


def create_store(settings: Settings) -> DataStore:
    """A fresh store, seeded with mock data unless disabled."""
    store = DataStore()
    if settings.seed_mock_data:
        store.seed(
            rng=random.Random(settings.seed_random_seed),
            audit_log_count=settings.seed_audit_log_count,
        )
    return store


def create_app(
    settings: Settings | None = None,
    store: DataStore | None = None,
    insight_client: InsightClient | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Corporate employee-wellness monitoring service",
        version=settings.app_version,
        lifespan=lifespan,
    )

    # Session state lives on the app, never in module globals
    app.state.settings = settings
    app.state.store = store if store is not None else create_store(settings)
    app.state.insight_client = insight_client or InsightClient.from_settings(settings)

    # Middleware
    configure_cors(app, settings)
    configure_rate_limiting(app, settings)
    configure_request_logging(app)
    configure_error_handlers(app)

    # Routers
    app.include_router(health.router)
    app.include_router(companies.router, prefix=settings.api_prefix)
    app.include_router(employees.router, prefix=settings.api_prefix)
    app.include_router(imports.router, prefix=settings.api_prefix)
    app.include_router(analytics.router, prefix=settings.api_prefix)
    app.include_router(insights.router, prefix=settings.api_prefix)
    app.include_router(audit.router, prefix=settings.api_prefix)

    return app


# Default app instance for uvicorn
app = create_app()
