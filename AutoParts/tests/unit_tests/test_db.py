import logging

from sqlalchemy import create_engine, inspect
from sqlalchemy.pool import StaticPool
from sqlmodel import select

from AutoParts.database import db
from AutoParts.models.models import CategoryModel
from AutoParts.utils.config import AppSettings


def memory_engine():
    return create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


def test_create_tables_and_session(monkeypatch):
    engine = memory_engine()
    monkeypatch.setattr(db, "engine", engine)

    db.create_db_and_tables()

    tables = set(inspect(engine).get_table_names())
    assert {"categories", "items", "suppliers", "vehicle_makes", "vehicle_models", "vehicle_submodels", "compatibility"} <= tables

    session_gen = db.get_session()
    session = next(session_gen)
    session.add(CategoryModel(name="Brakes"))
    session.commit()
    assert session.exec(select(CategoryModel)).one().name == "Brakes"
    session_gen.close()


def test_init_db_configures_logging_and_tables(monkeypatch):
    engine = memory_engine()
    monkeypatch.setattr(db, "engine", engine)
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", root.level)

    db.init_db(AppSettings(log_level="WARNING"))

    assert root.level == logging.WARNING
    assert {"suppliers", "items", "categories"} <= set(inspect(engine).get_table_names())
