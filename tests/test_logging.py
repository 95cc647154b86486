"""
Tests for logging functionality.

Tests cover:
- Logger setup (stderr console handler, optional rotating file handler)
- Quiet mode (WARNING+ on console, INFO+ on file)
- Debug mode (DEBUG level on all handlers)
- Default mode (INFO level on console and file)
- Parser and renamer messages reaching the log

All tests are isolated from .env settings and filesystem state.
"""

import io
import logging
import logging.handlers
import sys
from unittest.mock import patch

import config
from parsers.release_parser import parse
from utils.logger import LOGGER_NAME, get_logger, set_debug_mode, set_quiet_mode, setup_logger


class LoggerStateMixin:
    """Swap the release logger's handlers for a captured console and a file."""

    def setup_handlers(self, log_dir):
        self.logger = logging.getLogger(LOGGER_NAME)
        self.saved_handlers = list(self.logger.handlers)
        self.logger.handlers.clear()
        self.logger.setLevel(logging.INFO)

        self.console_stream = io.StringIO()
        self.console_handler = logging.StreamHandler(self.console_stream)
        self.console_handler.setLevel(logging.INFO)
        self.console_handler.setFormatter(logging.Formatter("%(levelname)s - %(message)s"))
        self.logger.addHandler(self.console_handler)

        self.log_file = log_dir / "test.log"
        self.file_handler = logging.handlers.RotatingFileHandler(
            str(self.log_file), maxBytes=1024 * 1024, backupCount=1
        )
        self.file_handler.setLevel(logging.INFO)
        self.file_handler.setFormatter(logging.Formatter("%(levelname)s - %(message)s"))
        self.logger.addHandler(self.file_handler)

    def teardown_method(self):
        """Restore the original handlers."""
        self.file_handler.close()
        self.logger.handlers.clear()
        self.logger.handlers.extend(self.saved_handlers)
        self.logger.setLevel(logging.INFO)

    def file_output(self):
        self.file_handler.flush()
        return self.log_file.read_text()


class TestLoggerSetup:
    """Tests for basic logger setup and configuration."""

    def test_setup_logger_console_handler_uses_stderr(self):
        """Console output must not end up on stdout."""
        with patch.object(config, "LOG_TO_FILE", False):
            logger = setup_logger("test_console")

        stream_handlers = [
            h for h in logger.handlers
            if isinstance(h, logging.StreamHandler)
            and not isinstance(h, logging.handlers.RotatingFileHandler)
        ]
        assert len(stream_handlers) == 1
        assert stream_handlers[0].stream is sys.stderr

    def test_setup_logger_without_file_logging(self):
        """No file handler when file logging is disabled."""
        with patch.object(config, "LOG_TO_FILE", False):
            logger = setup_logger("test_no_file")

        assert not any(isinstance(h, logging.handlers.RotatingFileHandler) for h in logger.handlers)

    def test_setup_logger_creates_file_handler(self, tmp_path):
        """An explicit log file adds a rotating file handler."""
        log_file = tmp_path / "logs" / "test.log"
        logger = setup_logger("test_file", log_file=str(log_file))

        file_handlers = [
            h for h in logger.handlers
            if isinstance(h, logging.handlers.RotatingFileHandler)
        ]
        assert len(file_handlers) == 1
        assert file_handlers[0].maxBytes == config.LOG_MAX_BYTES
        assert log_file.parent.is_dir()

        for handler in file_handlers:
            handler.close()

    def test_setup_logger_default_level_is_info(self):
        """Logger default level should be INFO."""
        with patch.object(config, "LOG_TO_FILE", False):
            logger = setup_logger("test_level")
        assert logger.level == logging.INFO

    def test_setup_logger_formatter_format(self):
        """Logger formatter should use expected format."""
        with patch.object(config, "LOG_TO_FILE", False):
            logger = setup_logger("test_formatter")

        for handler in logger.handlers:
            fmt = handler.formatter._fmt
            assert "%(asctime)s" in fmt
            assert "%(levelname)" in fmt
            assert "%(message)s" in fmt

    def test_get_logger_returns_existing_logger(self):
        """get_logger should return existing logger if already configured."""
        with patch.object(config, "LOG_TO_FILE", False):
            logger1 = setup_logger("test_existing")
        logger2 = get_logger("test_existing")

        assert logger1 is logger2

    def test_setup_logger_no_duplicate_handlers(self):
        """Calling setup_logger twice should not add duplicate handlers."""
        with patch.object(config, "LOG_TO_FILE", False):
            logger1 = setup_logger("test_duplicate")
            handler_count = len(logger1.handlers)
            logger2 = setup_logger("test_duplicate")

        assert len(logger2.handlers) == handler_count


class TestQuietMode(LoggerStateMixin):
    """Tests for quiet mode logging behavior."""

    def test_quiet_mode_console_shows_warning_only(self, tmp_path):
        """In quiet mode, console should only show WARNING and above."""
        self.setup_handlers(tmp_path)
        set_quiet_mode(True)

        self.logger.info("info message")
        self.logger.warning("warning message")
        self.logger.error("error message")

        output = self.console_stream.getvalue()
        assert "info message" not in output
        assert "warning message" in output
        assert "error message" in output

    def test_quiet_mode_file_shows_info(self, tmp_path):
        """In quiet mode, file should still show INFO and above."""
        self.setup_handlers(tmp_path)
        set_quiet_mode(True)

        self.logger.info("info message")

        assert "info message" in self.file_output()
        assert self.file_handler.level == logging.INFO

    def test_quiet_mode_can_be_disabled(self, tmp_path):
        """Quiet mode can be toggled off to restore INFO on console."""
        self.setup_handlers(tmp_path)
        set_quiet_mode(True)
        self.logger.info("quiet info")

        set_quiet_mode(False)
        self.logger.info("normal info")

        output = self.console_stream.getvalue()
        assert "quiet info" not in output
        assert "normal info" in output


class TestDebugMode(LoggerStateMixin):
    """Tests for debug mode logging behavior."""

    def test_debug_mode_shows_debug_everywhere(self, tmp_path):
        """In debug mode, console and file show DEBUG."""
        self.setup_handlers(tmp_path)
        set_debug_mode(True)

        self.logger.debug("debug message")

        assert "debug message" in self.console_stream.getvalue()
        assert "debug message" in self.file_output()
        assert self.logger.level == logging.DEBUG

    def test_debug_mode_logs_parse_results(self, tmp_path):
        """The parser reports each parsed release at DEBUG level."""
        self.setup_handlers(tmp_path)
        set_debug_mode(True)

        parse("Brave.2012.R5.DVDRip.XViD.LiNE-UNiQUE")

        assert "Parsed 'Brave.2012.R5.DVDRip.XViD.LiNE-UNiQUE'" in self.console_stream.getvalue()

    def test_debug_mode_can_be_disabled(self, tmp_path):
        """Debug mode can be toggled off to restore INFO level."""
        self.setup_handlers(tmp_path)
        set_debug_mode(True)
        set_debug_mode(False)

        self.logger.debug("debug hidden")
        self.logger.info("info visible")

        output = self.console_stream.getvalue()
        assert "debug hidden" not in output
        assert "info visible" in output


class TestDefaultMode(LoggerStateMixin):
    """Tests for default (no flags) logging behavior."""

    def test_default_mode_console_and_file_match(self, tmp_path):
        """In default mode, console and file show the same INFO messages."""
        self.setup_handlers(tmp_path)

        self.logger.debug("debug message")
        self.logger.info("test message")

        console_output = self.console_stream.getvalue()
        file_output = self.file_output()

        assert "test message" in console_output
        assert "test message" in file_output
        assert "debug message" not in console_output
        assert "debug message" not in file_output

    def test_parse_is_silent_at_info(self, tmp_path):
        """Parsing logs nothing above DEBUG."""
        self.setup_handlers(tmp_path)

        parse("Brave.2012.R5.DVDRip.XViD.LiNE-UNiQUE")

        assert self.console_stream.getvalue() == ""
