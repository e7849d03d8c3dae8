import logging
import os

from dotenv import load_dotenv
from pydantic import BaseModel

# Load environment variables
load_dotenv()

DEFAULT_DATABASE_URL = "sqlite:///autoparts.db"


class AppSettings(BaseModel):
    """Runtime settings read from the environment (.env is honoured)."""
    database_url: str = DEFAULT_DATABASE_URL
    sql_echo: bool = False
    log_level: str = "INFO"


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_settings() -> AppSettings:
    """Load settings from environment variables"""
    return AppSettings(
        database_url=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
        sql_echo=_env_flag("SQL_ECHO"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(settings: AppSettings = None) -> None:
    """Configure root logging from settings"""
    settings = settings or load_settings()
    level = getattr(logging, settings.log_level, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
