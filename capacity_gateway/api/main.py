"""FastAPI application factory"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from capacity_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from capacity_gateway.api.v1 import allocation, banks, countries, projects, settings as settings_routes
from capacity_gateway.infrastructure.database.session import init_db
from capacity_gateway.infrastructure.observability.logging import setup_logging
from capacity_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Trade Finance Capacity Gateway",
        description="Bank capacity tracking, bank-to-project ranking and allocation optimizer",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

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
    app.include_router(banks.router, prefix="/v1", tags=["banks"])
    app.include_router(projects.router, prefix="/v1", tags=["projects"])
    app.include_router(allocation.router, prefix="/v1", tags=["allocation"])
    app.include_router(settings_routes.router, prefix="/v1", tags=["settings"])
    app.include_router(countries.router, prefix="/v1", tags=["countries"])

    return app


app = create_app()
