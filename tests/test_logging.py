"""Tests for logging setup."""

import logging

import pytest

from errbit_notifier.logging import configure_logging, get_logger


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    httpx_level = logging.getLogger("httpx").level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("httpx").setLevel(httpx_level)


def test_configure_logging_installs_one_handler(restore_logging) -> None:
    configure_logging("errbit-notifier", level="DEBUG")

    root = logging.getLogger()
    assert len(root.handlers) == 1
    assert root.level == logging.DEBUG


def test_httpx_request_logs_quieted(restore_logging) -> None:
    """httpx stays at WARNING even when debug logging is on."""
    configure_logging("errbit-notifier", level="DEBUG")
    assert logging.getLogger("httpx").level == logging.WARNING

    configure_logging("errbit-notifier", level="ERROR")
    assert logging.getLogger("httpx").level == logging.ERROR


def test_get_logger_accepts_events() -> None:
    get_logger(__name__).debug("Notice accepted", id="abc")
