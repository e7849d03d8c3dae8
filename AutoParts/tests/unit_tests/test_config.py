import logging

from AutoParts.utils.config import AppSettings, DEFAULT_DATABASE_URL, load_settings, configure_logging


def test_defaults(monkeypatch):
    for name in ("DATABASE_URL", "SQL_ECHO", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    settings = load_settings()

    assert settings.database_url == DEFAULT_DATABASE_URL
    assert settings.sql_echo is False
    assert settings.log_level == "INFO"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://parts@db/catalog")
    monkeypatch.setenv("SQL_ECHO", "yes")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = load_settings()

    assert settings.database_url == "postgresql://parts@db/catalog"
    assert settings.sql_echo is True
    assert settings.log_level == "DEBUG"


def test_configure_logging_sets_root_level(monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", root.level)

    configure_logging(AppSettings(log_level="WARNING"))

    assert root.level == logging.WARNING


def test_unknown_log_level_falls_back_to_info(monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", root.level)

    configure_logging(AppSettings(log_level="CHATTY"))

    assert root.level == logging.INFO
