"""Tests for logging configuration helpers."""

import pytest
from marketplace.utils.logging import add_service, build_processors, get_log_level


@pytest.mark.parametrize(
    "env, expected",
    [("production", "INFO"), ("staging", "INFO"), ("development", "DEBUG"), ("test", "WARNING"), ("other", "INFO")],
)
def test_level_follows_environment(monkeypatch, env, expected):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.setenv("ENVIRONMENT", env)
    assert get_log_level() == expected


def test_explicit_level_wins(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    assert get_log_level() == "DEBUG"


def test_service_is_added():
    assert add_service(None, "info", {"event": "order_placed"})["service"] == "marketplace"


def test_production_renders_json():
    import structlog

    assert isinstance(build_processors("production")[-1], structlog.processors.JSONRenderer)
    assert isinstance(build_processors("development")[-1], structlog.dev.ConsoleRenderer)
