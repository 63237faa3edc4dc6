"""FastAPI application factory"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from sky_financial.api.middleware import RequestIDMiddleware, MetricsMiddleware
from sky_financial.api.v1 import calculations, chat, tax
from sky_financial.infrastructure.observability.logging import setup_logging
from sky_financial.infrastructure.sessions import ChatSessionRepository
from sky_financial.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Sky Financial",
        description="Investment, loan and income tax calculators with a finance chat assistant",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Chat sessions live as long as the app instance
    app.state.chat_sessions = ChatSessionRepository()

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
    )

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(calculations.router, prefix="/v1", tags=["calculations"])
    app.include_router(tax.router, prefix="/v1", tags=["tax"])
    app.include_router(chat.router, prefix="/v1", tags=["chat"])

    return app


app = create_app()
