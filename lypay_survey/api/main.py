"""FastAPI application factory"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from lypay_survey.api.middleware import RequestIDMiddleware, MetricsMiddleware
from lypay_survey.api.v1 import entries, dashboard, insights
from lypay_survey.domain.dashboard import DashboardState
from lypay_survey.infrastructure.database.session import init_db
from lypay_survey.infrastructure.observability.logging import setup_logging
from lypay_survey.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.auto_create_tables:
        init_db()
    yield


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="LYPay Survey Monitor",
        description="Payment survey collection, statistics and critical-issue alerts",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # One snapshot per process, capped like the store's recent list
    app.state.dashboard = DashboardState(limit=settings.recent_entries_limit)

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(entries.router, prefix="/v1", tags=["entries"])
    app.include_router(dashboard.router, prefix="/v1", tags=["dashboard"])
    app.include_router(insights.router, prefix="/v1", tags=["insights"])

    return app


app = create_app()
