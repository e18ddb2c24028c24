"""FastAPI application factory"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from broke_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from broke_gateway.api.v1 import expenses, insights, need_score, goals, preferences
from broke_gateway.domain.exceptions import ExpenseNotFoundError, GoalNotFoundError
from broke_gateway.infrastructure.database.session import init_db
from broke_gateway.infrastructure.observability.logging import setup_logging
from broke_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Broke Gateway",
        description="Spending insights, want/need scoring and savings goals",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.exception_handler(ExpenseNotFoundError)
    @app.exception_handler(GoalNotFoundError)
    async def not_found_handler(request: Request, exc: Exception):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(expenses.router, prefix="/v1", tags=["expenses"])
    app.include_router(insights.router, prefix="/v1", tags=["insights"])
    app.include_router(need_score.router, prefix="/v1", tags=["need-score"])
    app.include_router(goals.router, prefix="/v1", tags=["goals"])
    app.include_router(preferences.router, prefix="/v1", tags=["settings"])

    return app


app = create_app()
