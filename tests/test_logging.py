"""Tests for issuetracker.logging (root level/format, access log switch)."""

import logging
from collections.abc import Iterator

import pytest

from issuetracker.config import LoggingConfig
from issuetracker.logging import (
    ACCESS_LOGGER,
    DEFAULT_FORMAT,
    LEVELS,
    IssueTrackerLogging,
    _resolve_level,
)


@pytest.fixture(autouse=True)
def restore_access_logger() -> Iterator[None]:
    access = logging.getLogger(ACCESS_LOGGER)
    saved = access.level
    yield
    access.setLevel(saved)


class TestResolveLevel:
    """_resolve_level maps level names to logging constants."""

    def test_known_levels(self) -> None:
        for name, value in LEVELS.items():
            assert _resolve_level(name) == value

    def test_case_and_whitespace_normalized(self) -> None:
        """Level is stripped and uppercased before lookup."""
        assert _resolve_level("debug") == logging.DEBUG
        assert _resolve_level("  warning\t") == logging.WARNING

    def test_unknown_level_returns_info(self) -> None:
        assert _resolve_level("TRACE") == logging.INFO
        assert _resolve_level("") == logging.INFO


class TestIssueTrackerLogging:
    """setup() applies LoggingConfig to the root and access loggers."""

    def test_setup_sets_root_level(self) -> None:
        for level_name, expected in LEVELS.items():
            IssueTrackerLogging(LoggingConfig(level=level_name, format="%(message)s")).setup()
            assert logging.root.level == expected

    def test_setup_applies_format(self) -> None:
        custom = "%(levelname)s || %(message)s"
        IssueTrackerLogging(LoggingConfig(level="INFO", format=custom)).setup()
        assert logging.root.handlers
        assert logging.root.handlers[0].formatter._fmt == custom

    def test_empty_format_uses_default(self) -> None:
        IssueTrackerLogging(LoggingConfig(level="INFO", format="")).setup()
        assert logging.root.handlers[0].formatter._fmt == DEFAULT_FORMAT

    def test_access_log_off_by_default(self) -> None:
        """Request lines are hidden even at DEBUG unless access_log is set."""
        IssueTrackerLogging(LoggingConfig(level="DEBUG")).setup()
        assert not logging.getLogger(ACCESS_LOGGER).isEnabledFor(logging.INFO)

    def test_access_log_enabled(self) -> None:
        """access_log=true lets request lines through at INFO."""
        IssueTrackerLogging(LoggingConfig(level="INFO", access_log=True)).setup()
        assert logging.getLogger(ACCESS_LOGGER).isEnabledFor(logging.INFO)

    def test_access_log_does_not_lower_root_level(self) -> None:
        """With root at WARNING, enabling access_log still shows no INFO lines."""
        IssueTrackerLogging(LoggingConfig(level="WARNING", access_log=True)).setup()
        assert not logging.getLogger(ACCESS_LOGGER).isEnabledFor(logging.INFO)
