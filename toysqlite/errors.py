"""
Exceptions raised by toysqlite outside the tokenizer.

The tokenizer itself reports bad input as ERROR tokens and never raises.
"""


class ToySQLiteError(Exception):
    """Base exception for toysqlite."""
    pass


class ConfigError(ToySQLiteError):
    """Raised when a configuration value is invalid."""
    pass
