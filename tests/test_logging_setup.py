"""Tests for logging setup module."""

import io
import logging

from mlw.logging_setup import ColorFormatter, set_verbose, setup_logging


class FakeTTY(io.StringIO):
    def isatty(self):
        return True


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_info_level_by_default(self):
        stream = io.StringIO()
        setup_logging(stream=stream)

        logger = logging.getLogger("mlw.test")
        logger.debug("hidden")
        logger.info("shown")
        logger.error("failed")

        output = stream.getvalue()
        assert "hidden" not in output
        assert "[INFO] mlw.test: shown" in output
        assert "[ERROR] mlw.test: failed" in output

    def test_verbose_emits_debug(self):
        stream = io.StringIO()
        setup_logging(verbose=True, stream=stream)

        logging.getLogger("mlw.test").debug("details")

        assert "[DEBUG] mlw.test: details" in stream.getvalue()

    def test_set_verbose(self):
        stream = io.StringIO()
        setup_logging(stream=stream)
        set_verbose(True)

        logging.getLogger("mlw.test").debug("now visible")

        assert "now visible" in stream.getvalue()

    def test_plain_output_when_not_a_tty(self):
        stream = io.StringIO()
        setup_logging(stream=stream)

        logging.getLogger("mlw.test").info("plain")

        assert "\033[" not in stream.getvalue()

    def test_colored_output_on_tty(self):
        stream = FakeTTY()
        handler = setup_logging(stream=stream)

        logging.getLogger("mlw.test").error("boom")

        assert isinstance(handler.formatter, ColorFormatter)
        assert stream.getvalue().startswith(ColorFormatter.COLORS["ERROR"])
        assert stream.getvalue().rstrip("\n").endswith(ColorFormatter.RESET)

    def test_repeated_setup_replaces_handler(self):
        first = io.StringIO()
        second = io.StringIO()
        setup_logging(stream=first)
        setup_logging(stream=second)

        logging.getLogger("mlw.test").info("once")

        assert first.getvalue() == ""
        assert "once" in second.getvalue()
