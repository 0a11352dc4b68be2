"""Main FastAPI application for the studio chatbot backend."""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine

from studiobot import __version__
from studiobot.agents.subagents.completion_client import CohereCompletionClient, CompletionClient
from studiobot.config import Settings, get_settings
from studiobot.db.config import build_engine
from studiobot.db.init import init_db
from studiobot.middleware.cors import add_cors_middleware
from studiobot.routers import admin_router, chat_router
from studiobot.utils.logger import configure_logging

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    engine: Optional[Engine] = None,
    completion_client: Optional[CompletionClient] = None,
) -> FastAPI:
    """
    Build the application with its process-wide collaborators.

    Args:
        settings: Configuration; read from the environment when omitted
        engine: Database engine; built from settings.database_url when omitted
        completion_client: Completion capability; Cohere when omitted

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Create tables on startup."""
        init_db(app.state.engine)
        logger.info("Application startup complete.")
        yield

    app = FastAPI(
        title="Studio Chatbot API",
        description="Chat backend with canned intents, model fallback and CSV export",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.engine = engine or build_engine(settings.database_url)
    app.state.completion_client = completion_client or CohereCompletionClient(
        api_key=settings.cohere_api_key,
        model=settings.cohere_model,
        temperature=settings.completion_temperature,
    )

    add_cors_middleware(app, settings.frontend_origin_regex)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
        return JSONResponse(status_code=500, content={"error": "server_error"})

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    @app.get("/")
    async def root():
        """Root endpoint - API welcome message."""
        return {
            "message": "Welcome to the Studio Chatbot API",
            "version": __version__,
            "docs": "/docs",
            "health": "/health",
            "chat": "/chat",
        }

    app.include_router(chat_router)
    app.include_router(admin_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "studiobot.main:app",
        host="0.0.0.0",
        port=get_settings().port,
        reload=get_settings().environment == "development",
    )
