"""Pytest fixtures for beget_webhook test suite."""

import logging
import logging.handlers
from collections.abc import Generator

import pytest
from flask import Flask
from flask.testing import FlaskClient

from beget_webhook.app import create_app
from beget_webhook.providers.base import DnsProvider
from beget_webhook.providers.beget import BegetProvider

# Every variable Settings reads; cleared so the host environment cannot leak in
SETTINGS_ENV_VARS = (
    "BEGET_LOGIN",
    "BEGET_PASSWORD",
    "BEGET_API_URL",
    "BEGET_TIMEOUT",
    "HOST",
    "PORT",
    "TZ",
    "LOG_LEVEL",
    "LOG_COLOR",
)


class RecordingProvider(DnsProvider):
    """In-memory provider that records calls and can be told to fail."""

    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.calls: list[tuple[str, str, str | None]] = []
        self.closed = False

    def set_txt_record(self, domain: str, value: str) -> None:
        self.calls.append(("set", domain, value))
        if self.error is not None:
            raise self.error

    def clear_txt_record(self, domain: str) -> None:
        self.calls.append(("clear", domain, None))
        if self.error is not None:
            raise self.error

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove all settings variables from the environment."""
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def credentials_env(clean_env: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Environment with both Beget credentials set."""
    clean_env.setenv("BEGET_LOGIN", "test-login")
    clean_env.setenv("BEGET_PASSWORD", "test-password")
    return clean_env


@pytest.fixture
def beget_provider() -> Generator[BegetProvider]:
    """BegetProvider pointed at the default API URL (mock it with respx)."""
    provider = BegetProvider(login="test-login", password="test-password")
    yield provider
    provider.close()


@pytest.fixture
def recording_provider() -> RecordingProvider:
    """Provider double that records set/clear calls."""
    return RecordingProvider()


@pytest.fixture
def app(recording_provider: RecordingProvider) -> Flask:
    """Webhook app wired to the recording provider."""
    app = create_app(recording_provider)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app: Flask) -> FlaskClient:
    """Flask test client for the webhook app."""
    return app.test_client()


@pytest.fixture
def beget_client(beget_provider: BegetProvider) -> FlaskClient:
    """Flask test client for an app using the real Beget provider."""
    app = create_app(beget_provider)
    app.config["TESTING"] = True
    return app.test_client()


@pytest.fixture(autouse=True)
def restore_package_logger() -> Generator[None]:
    """Undo configure_logging() changes made during a test."""
    package_logger = logging.getLogger("beget_webhook")
    handlers = list(package_logger.handlers)
    level = package_logger.level
    propagate = package_logger.propagate
    try:
        yield
    finally:
        package_logger.handlers[:] = handlers
        package_logger.setLevel(level)
        package_logger.propagate = propagate


class LogCapture:
    """Helper class to capture and inspect log records."""

    def __init__(self, handler: logging.handlers.MemoryHandler) -> None:
        self._handler = handler

    @property
    def records(self) -> list[logging.LogRecord]:
        """Get all captured log records."""
        return self._handler.buffer

    def get_records(
        self, level: int | None = None, name: str | None = None
    ) -> list[logging.LogRecord]:
        """Get log records filtered by level and/or logger name.

        Args:
            level: Filter by log level (e.g., logging.INFO).
            name: Filter by logger name prefix (e.g., "beget_webhook.app").

        Returns:
            List of matching log records.
        """
        records = self.records
        if level is not None:
            records = [r for r in records if r.levelno == level]
        if name is not None:
            records = [r for r in records if r.name.startswith(name)]
        return records

    def get_messages(self, level: int | None = None, name: str | None = None) -> list[str]:
        """Get log messages filtered by level and/or logger name."""
        return [r.getMessage() for r in self.get_records(level, name)]

    def clear(self) -> None:
        """Clear all captured log records."""
        self._handler.buffer.clear()


@pytest.fixture
def log_capture() -> Generator[LogCapture]:
    """Capture logs from the beget_webhook package during a test.

    Usage:
        def test_something(log_capture):
            # do something that logs
            assert "Setting TXT record" in log_capture.get_messages(logging.INFO)
    """
    handler = logging.handlers.MemoryHandler(capacity=1000)
    handler.setLevel(logging.DEBUG)

    package_logger = logging.getLogger("beget_webhook")
    original_level = package_logger.level
    package_logger.setLevel(logging.DEBUG)
    package_logger.addHandler(handler)

    try:
        yield LogCapture(handler)
    finally:
        package_logger.removeHandler(handler)
        package_logger.setLevel(original_level)
        handler.close()
