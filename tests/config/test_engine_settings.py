"""Tests for environment-driven settings and logging setup."""

from __future__ import annotations

import logging

import pytest
import structlog
from pydantic import ValidationError

from src.analytics.attributes import by_organization
from src.analytics.cohorts import aggregate
from src.config.logging_config import configure_logging
from src.config.settings import Environment, LogLevel, Settings, get_settings


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in ("LOG_LEVEL", "ENVIRONMENT", "MIN_REQUIRED_RESPONDENTS"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings(_env_file=None)
        assert settings.LOG_LEVEL == LogLevel.INFO
        assert settings.ENVIRONMENT == Environment.DEV
        assert settings.MIN_REQUIRED_RESPONDENTS == 5
        assert settings.is_production is False

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "prod")
        monkeypatch.setenv("narrative_sample_limit", "3")
        settings = get_settings()
        assert settings.is_production is True
        assert settings.NARRATIVE_SAMPLE_LIMIT == 3

    def test_min_respondents_positive(self) -> None:
        with pytest.raises(ValidationError):
            Settings(MIN_REQUIRED_RESPONDENTS=0)


class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def _restore(self):
        root = logging.getLogger()
        root_level = root.level
        handlers = list(root.handlers)
        yield
        structlog.reset_defaults()
        for handler in list(root.handlers):
            if handler not in handlers:
                root.removeHandler(handler)
        root.setLevel(root_level)

    def test_sets_root_level(self) -> None:
        configure_logging(Settings(LOG_LEVEL=LogLevel.WARNING))
        assert logging.getLogger().level == logging.WARNING

    def test_json_outside_dev(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(Settings(ENVIRONMENT=Environment.PROD, LOG_LEVEL=LogLevel.INFO))
        structlog.get_logger("test").info("summary_built", org_id="org-1")
        out = capsys.readouterr().out
        assert '"event": "summary_built"' in out
        assert '"org_id": "org-1"' in out

    def test_level_filters_events(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(Settings(ENVIRONMENT=Environment.PROD, LOG_LEVEL=LogLevel.ERROR))
        structlog.get_logger("test").info("dropped")
        assert capsys.readouterr().out == ""

    def test_stdlib_records_rendered(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(Settings(ENVIRONMENT=Environment.PROD, LOG_LEVEL=LogLevel.DEBUG))
        aggregate([], by_organization, dedupe_by_respondent=True)
        out = capsys.readouterr().out
        assert '"logger": "src.analytics.cohorts"' in out
        assert '"level": "debug"' in out
        assert "Aggregated 0 responses into 0 cohorts" in out

    def test_stdlib_records_below_level_dropped(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(Settings(ENVIRONMENT=Environment.PROD, LOG_LEVEL=LogLevel.INFO))
        logging.getLogger("src.analytics.cohorts").debug("hidden")
        assert "hidden" not in capsys.readouterr().out

    def test_repeat_calls_install_one_handler(self) -> None:
        configure_logging(Settings(LOG_LEVEL=LogLevel.INFO))
        configure_logging(Settings(LOG_LEVEL=LogLevel.DEBUG))
        names = [h.get_name() for h in logging.getLogger().handlers]
        assert names.count("literacy-engine") == 1
