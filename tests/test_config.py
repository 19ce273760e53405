"""
Tests for Settings, get_settings and configure_logging.
"""
import logging
import os
from unittest.mock import patch

import pytest

from todostore.config import LOG_FORMAT, Settings, configure_logging, get_settings

ENV_VARS = [
    "STORAGE_BACKEND", "TODO_TABLE", "LOG_LEVEL", "SQLITE_PATH",
    "MYSQL_URL", "MYSQL_JDBC_URL", "MYSQL_USER", "MYSQL_PASS",
    "POSTGRES_URL", "POSTGRES_JDBC_URL", "POSTGRES_USER", "POSTGRES_PASS",
    "MONGO_CONN", "MONGO_DB", "MONGO_COLLECTION",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults(clean_env):
    settings = Settings(_env_file=None)

    assert settings.storage_backend == "sqlite"
    assert settings.todo_table == "todos"
    assert settings.mysql_url == "mysql://localhost:3306/todos_db"
    assert settings.postgres_url == "postgresql://localhost:5432/todos_db"
    assert settings.mongo_conn == "mongodb://localhost:27017"
    assert settings.mongo_db == "todos_db"
    assert settings.mongo_collection == "todos"
    assert settings.sqlite_path == os.path.abspath("data/todos.db")
    assert settings.log_level == "INFO"


def test_environment_overrides(clean_env, monkeypatch):
    monkeypatch.setenv("STORAGE_BACKEND", "  Postgres ")
    monkeypatch.setenv("POSTGRES_URL", "postgresql://db:5432/prod")
    monkeypatch.setenv("POSTGRES_PASS", "secret")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings(_env_file=None)

    assert settings.storage_backend == "postgres"
    assert settings.postgres_url == "postgresql://db:5432/prod"
    assert settings.postgres_pass == "secret"
    assert settings.log_level == "DEBUG"


def test_empty_backend_falls_back_to_sqlite(clean_env, monkeypatch):
    monkeypatch.setenv("STORAGE_BACKEND", "")

    assert Settings(_env_file=None).storage_backend == "sqlite"


def test_memory_sqlite_path_kept(clean_env):
    assert Settings(_env_file=None, sqlite_path=":memory:").sqlite_path == ":memory:"


def test_get_settings_is_cached(clean_env):
    assert get_settings() is get_settings()


def test_configure_logging_uses_setting(clean_env, monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "WARNING")

    with patch("logging.basicConfig") as mock_basic:
        configure_logging()

    mock_basic.assert_called_once_with(level=logging.WARNING, format=LOG_FORMAT)


def test_configure_logging_unknown_level_defaults_to_info():
    with patch("logging.basicConfig") as mock_basic:
        configure_logging("chatty")

    assert mock_basic.call_args.kwargs["level"] == logging.INFO


def test_jdbc_url_variables_accepted(clean_env, monkeypatch):
    monkeypatch.setenv("MYSQL_JDBC_URL", "jdbc:mysql://mysql.local:3306/todos_db")
    monkeypatch.setenv("POSTGRES_JDBC_URL", "jdbc:postgresql://pg.local:5432/todos_db")

    settings = Settings(_env_file=None)

    assert settings.mysql_url == "jdbc:mysql://mysql.local:3306/todos_db"
    assert settings.postgres_url == "jdbc:postgresql://pg.local:5432/todos_db"


def test_url_keyword_arguments(clean_env):
    settings = Settings(_env_file=None, mysql_url="mysql://db/x", postgres_url="postgresql://db/y")

    assert (settings.mysql_url, settings.postgres_url) == ("mysql://db/x", "postgresql://db/y")
