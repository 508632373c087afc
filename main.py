"""
FastAPI application entrypoint for the Mail Digest webhook service.

- Primary: Expose create_app() factory for Uvicorn (--factory) in all environments.
- Convenience: Allow `python -m main` for local development runs, honoring $PORT.

Architecture:
- Inbound mail provider posts parsed emails to /api/webhooks/email
- Each email is summarized and labelled by a hosted LLM (structured output)
- PostgreSQL stores emails with their summaries; a small read side lists them
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.templating import Jinja2Templates

from config import Settings, get_settings
from utils.logging import RequestIdMiddleware, configure_logging

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent / "api" / "templates"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Async context manager for application lifespan events.

    Opens the database engine and connection pool on startup and disposes of
    it on shutdown.
    """
    settings: Settings = app.state.settings

    logger.info(
        "Starting Mail Digest API",
        extra={
            "env": settings.app_env,
            "auth_mode": settings.webhook_auth_mode,
            "summary_provider": settings.summary_model_provider,
        },
    )

    try:
        from db import init_db

        app.state.db_engine = init_db(settings)
    except Exception as e:
        logger.error(f"Failed to initialize application: {e}", exc_info=True)
        raise

    yield  # Application is running

    logger.info("Shutting down Mail Digest API")
    from db import close_db

    await close_db()
    logger.info("Database connection pool closed")


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Application factory for FastAPI.

    Creates and configures the FastAPI application with:
    - Webhook, messages and page routes
    - Request ID tracking for observability
    - The ingestion pipeline, built once from explicit settings

    Args:
        settings: Application settings (if None, uses get_settings())

    Returns:
        FastAPI: Configured application instance

    Raises:
        ValueError: If webhook credentials or LLM credentials are missing
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Mail Digest API",
        description="Inbound email webhook that summarizes and labels messages with an LLM",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.is_dev else None,  # Disable in production
        redoc_url="/redoc" if settings.is_dev else None,
    )

    app.state.settings = settings
    app.state.templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

    # Fail at startup, not on the first webhook call, when misconfigured
    from ingestion.pipeline import IngestionPipeline

    app.state.ingestion_pipeline = IngestionPipeline.from_settings(settings)

    # --- Middleware ---

    # Request ID tracking (for correlation across logs)
    app.add_middleware(RequestIdMiddleware)

    # --- Routes ---

    from api.messages import router as messages_router
    from api.pages import router as pages_router
    from api.webhooks import router as webhooks_router

    app.include_router(webhooks_router, prefix="/api/webhooks", tags=["Webhooks"])
    app.include_router(messages_router, prefix="/api/messages", tags=["Messages"])
    app.include_router(pages_router)

    @app.get("/health", tags=["System"])
    async def health_check():
        """Health check endpoint for load balancers and monitoring."""
        return {
            "status": "healthy",
            "env": settings.app_env,
        }

    logger.info(
        "FastAPI application created",
        extra={
            "env": settings.app_env,
            "routes_count": len(app.routes),
        },
    )

    return app


if __name__ == "__main__":
    """
    Development server entry point.

    Run with: python main.py

    In production, use:
        uvicorn main:create_app --factory --host 0.0.0.0 --port 8000
    """
    import os

    import uvicorn

    settings = get_settings()
    port = int(os.getenv("PORT", "8000"))

    logger.info(f"Starting development server on port {port}")

    uvicorn.run(
        "main:create_app",
        factory=True,
        host="0.0.0.0",
        port=port,
        reload=settings.is_dev,  # Auto-reload in development
        log_level=settings.log_level.lower(),
    )
