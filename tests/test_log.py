"""
Tests for toysqlite/log.py
"""

import pytest
import logging
from toysqlite.log import (
    ComponentLogger, LogLevel, get_logger, set_global_level, parse_level,
    log_tokenize, log_token, log_token_error, log_shell_command
)
from toysqlite.sql.tokenizer import Tokenizer


@pytest.fixture(autouse=True)
def restore_levels():
    yield
    set_global_level(LogLevel.WARNING)


class TestComponentLogger:
    """Test ComponentLogger class."""

    def test_logger_creation(self):
        logger = ComponentLogger("test", LogLevel.DEBUG)
        assert logger.logger.name == "test"
        assert logger.logger.level == LogLevel.DEBUG

    def test_single_handler(self):
        ComponentLogger("test.handlers")
        logger = ComponentLogger("test.handlers")
        assert len(logger.logger.handlers) == 1

    def test_set_level(self):
        logger = ComponentLogger("test", LogLevel.INFO)
        assert logger.logger.level == LogLevel.INFO

        logger.set_level(LogLevel.DEBUG)
        assert logger.logger.level == LogLevel.DEBUG

    def test_log_methods_exist(self):
        logger = ComponentLogger("test")

        # Should not raise
        logger.critical("critical")
        logger.error("error")
        logger.warning("warning")
        logger.info("info")
        logger.debug("debug")
        logger.trace("trace")

    def test_trace_level_name(self):
        assert logging.getLevelName(LogLevel.TRACE) == 'TRACE'


class TestGlobalLoggers:
    """Test global logger management."""

    def test_get_logger(self):
        logger1 = get_logger("test_component")
        logger2 = get_logger("test_component")

        # Should return the same instance
        assert logger1 is logger2
        assert logger1.logger.name == "toysqlite.test_component"

    def test_different_components(self):
        logger1 = get_logger("component1")
        logger2 = get_logger("component2")

        assert logger1 is not logger2
        assert logger1.logger.name != logger2.logger.name

    def test_set_global_level(self):
        logger1 = get_logger("comp1")
        logger2 = get_logger("comp2")

        logger1.set_level(LogLevel.INFO)
        logger2.set_level(LogLevel.WARNING)

        set_global_level(LogLevel.DEBUG)

        assert logger1.logger.level == LogLevel.DEBUG
        assert logger2.logger.level == LogLevel.DEBUG

    def test_global_level_applies_to_new_loggers(self):
        set_global_level(LogLevel.TRACE)
        assert get_logger("created_after").logger.level == LogLevel.TRACE


class TestParseLevel:
    """Test level parsing."""

    @pytest.mark.parametrize('text, expected', [
        ('debug', LogLevel.DEBUG),
        ('TRACE', LogLevel.TRACE),
        (' warning ', LogLevel.WARNING),
        ('15', 15),
        (20, 20),
    ])
    def test_valid(self, text, expected):
        assert parse_level(text) == expected

    def test_invalid(self):
        with pytest.raises(ValueError):
            parse_level('chatty')


class TestLoggingHelpers:
    """Test specialized logging helper functions."""

    def test_helpers_do_not_raise(self):
        token = Tokenizer('#').next_token()
        log_tokenize('SELECT 1')
        log_token(token)
        log_token_error(token)
        log_shell_command('.help')

    def test_error_token_is_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="toysqlite.tokenizer"):
            Tokenizer('SELECT #').tokenize()
        assert any('unexpected character' in r.getMessage() for r in caplog.records)

    def test_tokens_are_traced(self, caplog):
        with caplog.at_level(LogLevel.TRACE, logger="toysqlite.tokenizer"):
            Tokenizer('SELECT').tokenize()
        messages = [r.getMessage() for r in caplog.records]
        assert any('SELECT' in m and m.startswith('Scanned') for m in messages)
