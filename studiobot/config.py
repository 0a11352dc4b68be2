"""Application settings loaded from environment variables."""
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
    """
    Runtime configuration for the chat backend.

    Every field has a working default so the service starts against a local
    SQLite file with only COHERE_API_KEY set.
    """
    environment: str = "development"
    database_url: str = "sqlite:///./studiobot.db"

    cohere_api_key: Optional[str] = None
    cohere_model: str = "command-r-plus-08-2024"
    completion_temperature: float = 0.4
    completion_timeout: float = 30.0

    context_limit: int = 10
    max_message_length: int = 2000

    conversation_cookie: str = "cid"
    cookie_max_age: int = 60 * 60 * 24 * 30
    cookie_secure: bool = False

    admin_jwt_secret: Optional[str] = None
    frontend_origin_regex: str = r"^http://(localhost|127\.0\.0\.1):\d+$"

    log_level: str = "INFO"
    port: int = 8080

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            environment=os.environ.get("ENVIRONMENT", "development"),
            database_url=os.environ.get("DATABASE_URL", "sqlite:///./studiobot.db"),
            cohere_api_key=os.environ.get("COHERE_API_KEY") or None,
            cohere_model=os.environ.get("COHERE_MODEL", "command-r-plus-08-2024"),
            completion_temperature=float(os.environ.get("COMPLETION_TEMPERATURE", "0.4")),
            completion_timeout=float(os.environ.get("COMPLETION_TIMEOUT", "30")),
            context_limit=int(os.environ.get("CONTEXT_LIMIT", "10")),
            max_message_length=int(os.environ.get("MAX_MESSAGE_LENGTH", "2000")),
            conversation_cookie=os.environ.get("CONVERSATION_COOKIE", "cid"),
            cookie_secure=_env_bool("COOKIE_SECURE", False),
            admin_jwt_secret=os.environ.get("ADMIN_JWT_SECRET") or None,
            frontend_origin_regex=os.environ.get(
                "FRONTEND_ORIGIN_REGEX", r"^http://(localhost|127\.0\.0\.1):\d+$"
            ),
            log_level=os.environ.get("LOG_LEVEL", "INFO"),
            port=int(os.environ.get("PORT", "8080")),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
