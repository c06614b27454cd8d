"""Unit tests for the logging setup."""

import logging

import pytest

from search_repo.logging import LogLevel, get_logger, setup_logging


@pytest.mark.unit
class TestLogLevel:
    """Tests for LogLevel."""

    @pytest.mark.parametrize("value", ["debug", "DEBUG", LogLevel.DEBUG])
    def test_parse(self, value: str | LogLevel) -> None:
        assert LogLevel.parse(value) is LogLevel.DEBUG

    def test_parse_rejects_unknown_level(self) -> None:
        with pytest.raises(ValueError, match="Unknown log level 'verbose'"):
            LogLevel.parse("verbose")

    def test_numeric(self) -> None:
        assert LogLevel.ERROR.numeric == logging.ERROR


@pytest.mark.unit
class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_sets_root_level(self) -> None:
        logger = setup_logging(level=LogLevel.DEBUG)

        assert logger.name == "search-repo"
        assert logging.getLogger().level == logging.DEBUG

    def test_accepts_lowercase_strings(self) -> None:
        setup_logging(level="error")

        assert logging.getLogger().level == logging.ERROR

    def test_quiets_client_loggers(self) -> None:
        setup_logging(level=LogLevel.DEBUG)

        assert logging.getLogger("opensearch").level == logging.WARNING
        assert logging.getLogger("urllib3").level == logging.WARNING

    def test_quiet_loggers_follow_stricter_level(self) -> None:
        setup_logging(level=LogLevel.ERROR, quiet_loggers=["opensearch"])

        assert logging.getLogger("opensearch").level == logging.ERROR

    def test_format_without_timestamp(self) -> None:
        setup_logging(include_timestamp=False)

        formatter = logging.getLogger().handlers[0].formatter
        assert formatter is not None
        assert "asctime" not in formatter._fmt  # type: ignore[operator]

    def test_get_logger(self) -> None:
        assert get_logger("search_repo.ingest").name == "search_repo.ingest"
