"""
Unit tests for configuration and logging setup
"""
import json
import logging

import pytest
from pythonjsonlogger.json import JsonFormatter

from incubator.config import Settings
from incubator.logging_config import SERVICE_NAME, CustomJsonFormatter, build_logging_config
from incubator.storage import DatabaseStorage, MemStorage, build_storage


class TestSettings:
    """Test environment-driven settings"""

    def test_defaults(self, monkeypatch):
        for name in ("ENVIRONMENT", "STORAGE_BACKEND", "MAX_SUGGESTED_QUESTIONS"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.MAX_SUGGESTED_QUESTIONS == 5
        assert settings.SEED_DEFAULT_QUESTIONS is True
        assert settings.storage_backend == "memory"

    def test_production_defaults_to_database(self):
        settings = Settings(_env_file=None, ENVIRONMENT="production", STORAGE_BACKEND=None)

        assert settings.storage_backend == "database"

    def test_explicit_backend_wins(self):
        settings = Settings(_env_file=None, ENVIRONMENT="production", STORAGE_BACKEND="memory")

        assert settings.storage_backend == "memory"

    def test_invalid_backend(self):
        with pytest.raises(ValueError):
            Settings(_env_file=None, STORAGE_BACKEND="redis")

    def test_build_storage(self):
        memory = build_storage(Settings(_env_file=None, STORAGE_BACKEND="memory"))
        database = build_storage(Settings(
            _env_file=None, STORAGE_BACKEND="database", DATABASE_URL="sqlite+aiosqlite:///:memory:",
        ))

        assert isinstance(memory, MemStorage)
        assert isinstance(database, DatabaseStorage)
        assert database.db_manager.database_url == "sqlite+aiosqlite:///:memory:"


class TestLoggingConfig:
    """Test logging configuration"""

    def test_production_uses_json(self):
        config = build_logging_config("WARNING", "production")

        assert config["handlers"]["console"]["formatter"] == "json"
        assert config["loggers"]["incubator"]["level"] == "WARNING"

    def test_development_uses_plain_text(self):
        config = build_logging_config("DEBUG", "development")

        assert config["handlers"]["console"]["formatter"] == "standard"

    def test_json_formatter_renders_json(self):
        formatter = CustomJsonFormatter('%(name)s %(message)s')
        record = logging.LogRecord("incubator", logging.INFO, __file__, 1, "hello", None, None)

        output = json.loads(formatter.format(record))

        assert isinstance(formatter, JsonFormatter)
        assert output["message"] == "hello"
        assert output["service"] == SERVICE_NAME

    def test_json_formatter_adds_service(self):
        formatter = CustomJsonFormatter('%(name)s %(message)s')
        record = logging.LogRecord("incubator", logging.INFO, __file__, 1, "hello", None, None)
        record.request_id = "abc"

        log_record = {}
        formatter.add_fields(log_record, record, {})

        assert log_record["service"] == SERVICE_NAME
        assert log_record["request_id"] == "abc"
