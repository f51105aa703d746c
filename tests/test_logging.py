"""Tests for console logging setup."""

import io
import logging
import re

import pytest

from actorgen.logging import LOGGER_NAME, ConsoleFormatter, configure_logging


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


def _record(level=logging.INFO, msg="hello"):
    return logging.LogRecord("actorgen.test", level, __file__, 1, msg, None, None)


class TestConsoleFormatter:

    def test_plain(self):
        assert ConsoleFormatter().format(_record()) == "[INFO] hello"

    def test_timestamps(self):
        line = ConsoleFormatter(timestamps=True).format(_record(logging.DEBUG))
        assert re.fullmatch(r"\[DEBUG\]\[\d\d:\d\d:\d\d\] hello", line)

    def test_colors(self):
        line = ConsoleFormatter(use_colors=True).format(_record(logging.WARNING))
        assert line.startswith("\033[33m[WARNING]\033[0m")


class TestConfigureLogging:

    def test_default_level(self):
        stream = io.StringIO()
        logger = configure_logging(stream=stream)
        assert logger.level == logging.INFO
        logging.getLogger("actorgen.codegen").info("written")
        logging.getLogger("actorgen.codegen").debug("hidden")
        assert stream.getvalue() == "[INFO] written\n"

    def test_quiet(self):
        stream = io.StringIO()
        configure_logging(quiet=True, stream=stream)
        logging.getLogger("actorgen.usage").info("hidden")
        logging.getLogger("actorgen.usage").warning("shown")
        assert stream.getvalue() == "[WARNING] shown\n"

    def test_verbose(self):
        logger = configure_logging(verbose=True, stream=io.StringIO())
        assert logger.level == logging.DEBUG

    def test_reconfigure_replaces_handler(self):
        configure_logging(stream=io.StringIO())
        logger = configure_logging(stream=io.StringIO())
        assert len(logger.handlers) == 1
