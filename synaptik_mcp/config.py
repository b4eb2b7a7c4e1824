"""Application configuration using environment variables."""

import logging
import sys
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_STORE_PATH = Path.home() / ".synaptik" / "tasks.json"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class Settings(BaseSettings):
    """Load configuration from ``SYNAPTIK_*`` environment variables and `.env`."""

    model_config = SettingsConfigDict(
        env_prefix="SYNAPTIK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    store_path: Path = Field(default=DEFAULT_STORE_PATH, description="JSON file holding all tasks")
    log_level: str = Field(default="INFO", description="Root log level for the server process")
    default_limit: int = Field(default=100, ge=1, le=1000, description="Default page size for task listings")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached `Settings` instance."""

    return Settings()


def configure_logging(level: str | int = "INFO") -> None:
    """Send log records to stderr; stdout carries the MCP stdio transport."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    logging.basicConfig(level=level, handlers=[handler], force=True)

    logging.getLogger("synaptik_mcp").setLevel(level)
    if level > logging.DEBUG:
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)


__all__ = ["Settings", "configure_logging", "get_settings"]
