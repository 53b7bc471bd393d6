"""
Unit Tests for settings, logging setup and metrics helpers.
"""

import pytest
import structlog
from prometheus_client import REGISTRY
from pydantic import ValidationError

from statement_ledger.core.config import Settings, get_settings
from statement_ledger.core.logging import setup_logging
from statement_ledger.core.metrics import (
    get_metrics,
    record_categorization,
    track_categorizer_latency,
)


def latency_count() -> float:
    value = REGISTRY.get_sample_value("statement_ledger_categorizer_latency_seconds_count")
    return value or 0.0


# =============================================================================
# Settings
# =============================================================================

class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, monkeypatch):
        for name in (
            "STATEMENT_LEDGER_DEFAULT_CURRENCY",
            "STATEMENT_LEDGER_CSV_DELIMITER",
            "STATEMENT_LEDGER_LOG_FORMAT",
        ):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.default_currency == "CHF"
        assert settings.csv_delimiter == ","
        assert settings.log_format == "json"
        assert settings.metrics_enabled is True

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("STATEMENT_LEDGER_DEFAULT_CURRENCY", "EUR")
        monkeypatch.setenv("STATEMENT_LEDGER_CSV_DELIMITER", ";")
        monkeypatch.setenv("STATEMENT_LEDGER_METRICS_ENABLED", "false")

        settings = Settings(_env_file=None)

        assert settings.default_currency == "EUR"
        assert settings.csv_delimiter == ";"
        assert settings.metrics_enabled is False

    def test_delimiter_must_be_single_character(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, csv_delimiter=";;")

    def test_log_format_validated(self):
        assert Settings(_env_file=None, log_format="CONSOLE").log_format == "console"
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_format="xml")

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


# =============================================================================
# Logging
# =============================================================================

class TestSetupLogging:
    """Tests for structlog configuration."""

    @pytest.fixture(autouse=True)
    def restore_structlog(self):
        yield
        structlog.reset_defaults()

    @pytest.mark.parametrize("fmt", ["json", "console"])
    def test_configures_renderer(self, fmt):
        setup_logging(log_level="DEBUG", log_format=fmt)

        processors = structlog.get_config()["processors"]
        expected = (
            structlog.processors.JSONRenderer
            if fmt == "json"
            else structlog.dev.ConsoleRenderer
        )
        assert isinstance(processors[-1], expected)

    def test_json_output(self, capsys):
        setup_logging(log_level="INFO", log_format="json")

        structlog.get_logger("test").info("transactions_written", count=3)

        err = capsys.readouterr().err
        assert '"event": "transactions_written"' in err
        assert '"count": 3' in err


# =============================================================================
# Metrics
# =============================================================================

class TestMetrics:
    """Tests for the metric helpers."""

    def test_exposition_contains_metric_names(self):
        record_categorization("exposition-test", "successful")

        content = get_metrics().decode()

        assert "statement_ledger_categorization_total" in content
        assert "statement_ledger_transactions_built_total" in content
        assert "statement_ledger_categorizer_latency_seconds" in content

    def test_latency_observed(self):
        before = latency_count()

        with track_categorizer_latency():
            pass

        assert latency_count() == before + 1

    def test_latency_observed_on_error(self):
        before = latency_count()

        with pytest.raises(RuntimeError):
            with track_categorizer_latency():
                raise RuntimeError("categorizer down")

        assert latency_count() == before + 1
