"""
Tests for configuration and logging setup
"""

import json
import logging

import pytest
from pydantic import ValidationError

from xrate.core.config import RateFetcherConfig, Settings
from xrate.core.logging import JsonFormatter, init_logging


class TestSettings:
    """Test settings loaded from the environment"""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("FIXER_IO_ACCESS_KEY", raising=False)
        settings = Settings(_env_file=None)

        assert settings.fixer_io_access_key is None
        assert settings.api_v1_prefix == "/api/v1"
        assert settings.http_timeout_seconds == 30.0

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("FIXER_IO_ACCESS_KEY", "abc123")
        monkeypatch.setenv("EXCHANGE_API_BASE_URL", "https://example.test/api")
        monkeypatch.setenv("HTTP_TIMEOUT_SECONDS", "7.5")

        config = Settings(_env_file=None).rate_fetcher_config()

        assert config == RateFetcherConfig(
            base_url="https://example.test/api",
            access_key="abc123",
            timeout=7.5,
        )

    def test_base_url_override(self, monkeypatch):
        monkeypatch.setenv("FIXER_IO_ACCESS_KEY", "abc123")
        config = Settings(_env_file=None).rate_fetcher_config("https://other.test")
        assert config.base_url == "https://other.test"


class TestRateFetcherConfig:
    """Test the explicit fetcher configuration"""

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            RateFetcherConfig(base_url="https://example.test", access_key="k", timeout=0)

    def test_is_immutable(self):
        config = RateFetcherConfig(base_url="https://example.test", access_key="k")
        with pytest.raises(ValidationError):
            config.access_key = "other"


class TestLogging:
    """Test JSON log formatting"""

    def test_json_formatter(self):
        record = logging.LogRecord(
            name="xrate.test",
            level=logging.WARNING,
            pathname=__file__,
            lineno=1,
            msg="rate %s missing",
            args=("USD",),
            exc_info=None,
        )
        payload = json.loads(JsonFormatter().format(record))

        assert payload["level"] == "WARNING"
        assert payload["message"] == "rate USD missing"
        assert payload["logger"] == "xrate.test"

    def test_init_logging_sets_level(self):
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            init_logging(debug=True)
            assert root.level == logging.DEBUG
            assert isinstance(root.handlers[0].formatter, JsonFormatter)
            assert logging.getLogger("httpx").level == logging.WARNING
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)
