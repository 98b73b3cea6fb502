"""Tests for core logging module."""

import logging
from io import StringIO

import pytest

from .lib import LOG_FORMAT, get_logger, resolve_level, setup_logging


class TestLogging:
    """Test core logging API."""

    @pytest.mark.unit
    def test_named_logger(self) -> None:
        logger = get_logger("compiler")
        assert logger.name == "compiler"
        assert isinstance(logger, logging.Logger)

    @pytest.mark.unit
    def test_default_name(self) -> None:
        assert get_logger().name == "markup-assist"

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "level,expected",
        [
            (logging.WARNING, logging.WARNING),
            ("debug", logging.DEBUG),
            ("ERROR", logging.ERROR),
            (" info ", logging.INFO),
            ("verbose", logging.INFO),
        ],
    )
    def test_resolve_level(self, level, expected) -> None:
        """Level names resolve case-insensitively; unknown names mean INFO."""
        assert resolve_level(level) == expected

    @pytest.mark.unit
    def test_log_format(self) -> None:
        """Records render as time, name, level and message."""
        stream = StringIO()
        handler = logging.StreamHandler(stream)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger = get_logger("format-check")
        logger.addHandler(handler)
        try:
            logger.warning("grammar written")
        finally:
            logger.removeHandler(handler)
        assert stream.getvalue().rstrip().endswith(
            " - format-check - WARNING - grammar written"
        )

    @pytest.mark.unit
    def test_setup_logging_accepts_names(self) -> None:
        """setup_logging takes the same level names as the config."""
        setup_logging(level="debug", stream=StringIO())
        setup_logging(level="not-a-level", stream=StringIO())
