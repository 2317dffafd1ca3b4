"""
Logging and debugging utilities for toysqlite.
Provides per-component loggers for tracing the tokenizer and the shell.
"""

import logging
import sys
from enum import IntEnum
from typing import Union


class LogLevel(IntEnum):
    """Log levels used by toysqlite components."""
    CRITICAL = 50
    ERROR = 40
    WARNING = 30
    INFO = 20
    DEBUG = 10
    TRACE = 5


logging.addLevelName(LogLevel.TRACE, 'TRACE')


class ComponentLogger:
    """
    Logger for one toysqlite component (tokenizer, shell, ...).
    """

    def __init__(self, name: str = "toysqlite", level: int = LogLevel.WARNING):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level)

        # Only add handler if none exists
        if not self.logger.handlers:
            handler = logging.StreamHandler(sys.stderr)
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def set_level(self, level: int) -> None:
        """Set the logging level."""
        self.logger.setLevel(level)

    def critical(self, msg: str, *args, **kwargs) -> None:
        self.logger.critical(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs) -> None:
        self.logger.error(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs) -> None:
        self.logger.warning(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        self.logger.info(msg, *args, **kwargs)

    def debug(self, msg: str, *args, **kwargs) -> None:
        self.logger.debug(msg, *args, **kwargs)

    def trace(self, msg: str, *args, **kwargs) -> None:
        """Log trace message (very verbose)."""
        if self.logger.isEnabledFor(LogLevel.TRACE):
            self.logger.log(LogLevel.TRACE, msg, *args, **kwargs)


# Logger instances per component
_loggers = {}
_global_level: int = LogLevel.WARNING


def parse_level(level: Union[int, str]) -> int:
    """
    Turn a level name ('debug', 'TRACE', ...) or number into a level.

    Raises:
        ValueError: if the name is not a known level
    """
    if isinstance(level, int):
        return level
    text = level.strip().upper()
    if text.isdigit():
        return int(text)
    try:
        return LogLevel[text]
    except KeyError:
        raise ValueError(f"Unknown log level: {level!r}") from None


def get_logger(component: str = "toysqlite") -> ComponentLogger:
    """
    Get or create a logger for a specific component.

    Args:
        component: Name of the component (e.g., 'tokenizer', 'shell')

    Returns:
        ComponentLogger instance for the component
    """
    if component not in _loggers:
        _loggers[component] = ComponentLogger(f"toysqlite.{component}", _global_level)
    return _loggers[component]


def set_global_level(level: int) -> None:
    """Set logging level for all components, including ones created later."""
    global _global_level
    _global_level = level
    for logger in _loggers.values():
        logger.set_level(level)


def log_tokenize(source: str, component: str = "tokenizer") -> None:
    """Log the start of a scan."""
    get_logger(component).debug("Tokenizing %r", source)


def log_token(token, component: str = "tokenizer") -> None:
    """Log a produced token."""
    get_logger(component).trace("Scanned %r", token)


def log_token_error(token, component: str = "tokenizer") -> None:
    """Log an error token."""
    get_logger(component).debug(
        "%s at %d:%d: %r", token.message, token.line, token.column, token.lexeme
    )


def log_shell_command(command: str, component: str = "shell") -> None:
    """Log a command received by the shell."""
    get_logger(component).debug("Command: %s", command)
