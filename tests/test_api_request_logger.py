"""Tests for upstream API request logging."""

import logging

import pytest

from go_departures.adapters.api_request_logger import (
    log_api_request,
    redact_url,
    should_log_requests,
)

LOGGER_NAME = "go_departures.adapters.api_request_logger"


def test_should_log_requests_when_enabled(monkeypatch: pytest.MonkeyPatch) -> None:
    """Given GO_LOG_REQUESTS=true, when checking, then logging is enabled."""
    monkeypatch.setenv("GO_LOG_REQUESTS", "true")

    assert should_log_requests() is True


def test_should_log_requests_case_insensitive(monkeypatch: pytest.MonkeyPatch) -> None:
    """Given GO_LOG_REQUESTS=TRUE, when checking, then logging is enabled."""
    monkeypatch.setenv("GO_LOG_REQUESTS", "TRUE")

    assert should_log_requests() is True


@pytest.mark.parametrize("value", ["false", "1", "yes", ""])
def test_should_log_requests_only_for_true(monkeypatch: pytest.MonkeyPatch, value: str) -> None:
    """Given any other value, when checking, then logging stays disabled."""
    monkeypatch.setenv("GO_LOG_REQUESTS", value)

    assert should_log_requests() is False


def test_should_log_requests_when_not_set(monkeypatch: pytest.MonkeyPatch) -> None:
    """Given no GO_LOG_REQUESTS variable, when checking, then logging is disabled."""
    monkeypatch.delenv("GO_LOG_REQUESTS", raising=False)

    assert should_log_requests() is False


def test_redact_url_masks_api_key() -> None:
    """Given a URL with the API key, when redacting, then the key value is hidden."""
    url = "https://api.example.test/api/V1/Stop/All?lang=en&key=supersecret"

    redacted = redact_url(url)

    assert "supersecret" not in redacted
    assert redacted == "https://api.example.test/api/V1/Stop/All?lang=en&key=***REDACTED***"


def test_redact_url_without_query_is_unchanged() -> None:
    """Given a URL without a query, when redacting, then it is returned unchanged."""
    url = "https://api.example.test/api/V1/Stop/All"

    assert redact_url(url) == url


def test_log_api_request_logs_redacted_line(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    """Given logging enabled, when logging a request, then method, redacted URL and status appear."""
    monkeypatch.setenv("GO_LOG_REQUESTS", "true")

    with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
        log_api_request("GET", "https://api.example.test/x?key=secret", 200)

    assert "API Request: GET https://api.example.test/x?key=***REDACTED*** -> 200" in caplog.text
    assert "secret" not in caplog.text.replace("REDACTED", "")


def test_log_api_request_silent_when_disabled(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    """Given logging disabled, when logging a request, then nothing is emitted."""
    monkeypatch.delenv("GO_LOG_REQUESTS", raising=False)

    with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
        log_api_request("GET", "https://api.example.test/x?key=secret")

    assert caplog.text == ""
