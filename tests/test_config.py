import logging

import pytest
from sqlalchemy import inspect

import db
from config import get_settings
from log_config import configure_logging


def test_get_settings_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "  sqlite:///demo.db ")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("DEFAULT_COUNTRY", " Australia ")

    settings = get_settings()

    assert settings.database_url == "sqlite:///demo.db"
    assert settings.log_level == "DEBUG"
    assert settings.default_country == "Australia"


def test_get_settings_defaults(monkeypatch) -> None:
    for name in ("DATABASE_URL", "LOG_LEVEL", "DEFAULT_COUNTRY"):
        monkeypatch.delenv(name, raising=False)

    settings = get_settings()

    assert settings.database_url is None
    assert settings.log_level == "INFO"
    assert settings.default_country == ""


def test_get_engine_requires_database_url(monkeypatch) -> None:
    monkeypatch.delenv("DATABASE_URL", raising=False)
    db.get_engine.cache_clear()

    with pytest.raises(RuntimeError):
        db.get_engine()


def test_configure_logging_accepts_level_names() -> None:
    configure_logging("debug")
    assert logging.getLogger().level == logging.DEBUG

    configure_logging("not-a-level")
    assert logging.getLogger().level == logging.INFO

    configure_logging(logging.WARNING)
    assert logging.getLogger().level == logging.WARNING


def test_init_schema_creates_tables(monkeypatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "sqlite://")
    db.get_engine.cache_clear()
    try:
        db.init_schema()
        tables = set(inspect(db.get_engine()).get_table_names())
    finally:
        db.get_engine().dispose()
        db.get_engine.cache_clear()

    assert {
        "students",
        "universities",
        "documents",
        "student_university_applications",
        "student_country_profiles",
    } <= tables
