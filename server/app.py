"""FastAPI application factory."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.config import get_config
from db.engine import dispose_engine
from server.errors import register_exception_handlers
from server.middleware import RequestIDMiddleware
from server.routes import exa_search, health, search_experts
from utils.logger import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup/shutdown logic."""
    logger.info("Expert search API starting up")

    config = get_config()
    if not config.validate():
        logger.error(f"Unsupported MODEL_TYPE '{config.MODEL_TYPE}'")

    # Missing keys degrade (case analysis) or fail per request (web search)
    missing = config.missing_settings()
    if missing:
        logger.warning(f"Missing environment variables: {missing}")

    yield

    dispose_engine()
    logger.info("Expert search API shutting down")


def create_app() -> FastAPI:
    """Factory function to create FastAPI application."""
    app = FastAPI(
        title="Expert Witness Search API",
        description="Case-aware expert directory search and web search with contact extraction",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(RequestIDMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Client-Info", "Apikey"],
        expose_headers=["X-Request-ID"],
    )

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(search_experts.router)
    app.include_router(exa_search.router)

    return app
