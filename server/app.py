"""FastAPI application factory."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from server.dependencies import get_config
from server.middleware import RequestIDMiddleware
from server.routes import generate, health
from utils.logger import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup/shutdown logic."""
    logger.info("FastAPI server starting up")

    config = get_config()
    if not config.validate():
        logger.warning(
            "Configuration incomplete; /api/generate will report errors until it is fixed",
            extra={"extra_fields": {"model_type": config.MODEL_TYPE, "search_provider": config.SEARCH_PROVIDER}},
        )
    else:
        logger.info(f"Generating with {config.get_model_info()}, searching with {config.SEARCH_PROVIDER}")

    yield

    logger.info("FastAPI server shutting down")


def create_app() -> FastAPI:
    """Factory function to create FastAPI application."""
    app = FastAPI(
        title="NewsDesk API",
        description="Research, draft and edit news articles from a single topic",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(RequestIDMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(generate.router)

    return app
