"""CORS configuration for the chat widget frontend."""
from fastapi.middleware.cors import CORSMiddleware
import logging

logger = logging.getLogger(__name__)


def add_cors_middleware(app, origin_regex: str):
    """
    Add CORS middleware to the FastAPI application.

    Credentials are allowed so the browser sends the conversation cookie.
    """
    logger.info(f"[CORS] Allowed origin pattern: {origin_regex}")
    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=origin_regex,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
