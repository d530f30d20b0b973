import logging
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings

_config_logger = logging.getLogger(__name__)

_PACKAGE_ROOT = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _PACKAGE_ROOT / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Planner Sync API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    cors_origins: list[str] = ["http://localhost:5173"]

    # Remote relational store — empty means local-only mode
    database_url: str = ""
    database_echo: bool = False

    # Local durable snapshot (JSON)
    cache_file: str = "data/planner_state.json"

    # Logging — per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine — SQL queries
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_sync: str = "INFO"             # PlannerStore optimistic/reconcile flow
    log_level_cache: str = "WARNING"         # JSON snapshot cache

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }

    @property
    def remote_enabled(self) -> bool:
        """True when a remote database URL has been configured."""
        return bool(self.database_url.strip())

    def model_post_init(self, __context: object) -> None:
        if not self.remote_enabled:
            _config_logger.debug("DATABASE_URL not set — remote sync disabled")


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
