import logging
from typing import Generator

from sqlalchemy import event
from sqlmodel import Session, SQLModel

# Importing the models module registers every table with SQLModel metadata
from AutoParts.models.models import engine
from AutoParts.utils.config import AppSettings, configure_logging

logger = logging.getLogger(__name__)


# Yields a session bound to the application engine
def get_session() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


def create_db_and_tables():
    SQLModel.metadata.create_all(engine)


def init_db(settings: AppSettings = None) -> None:
    """Application startup: configure logging from settings, then create any missing tables."""
    configure_logging(settings)
    create_db_and_tables()
    logger.info(f"Database ready at {engine.url.render_as_string(hide_password=True)}")


if engine.dialect.name == "sqlite":
    @event.listens_for(engine, "connect")
    def enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()
