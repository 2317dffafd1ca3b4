"""
Shell configuration.
Reads settings from environment variables with sensible defaults.
"""

import os
from typing import Optional

from toysqlite.errors import ConfigError
from toysqlite.log import parse_level


class Settings:
    """Shell settings loaded from environment variables."""

    def __init__(self):
        # Prompt shown before each line of input
        self.PROMPT: str = os.environ.get("TOYSQLITE_PROMPT", "toy-sqlite > ")

        # Where readline history is kept between sessions; empty disables it
        history_file = os.environ.get(
            "TOYSQLITE_HISTORY_FILE", os.path.join("~", ".toysqlite_history")
        )
        self.HISTORY_FILE: Optional[str] = (
            os.path.expanduser(history_file) if history_file else None
        )

        raw_length = os.environ.get("TOYSQLITE_HISTORY_LENGTH", "1000")
        try:
            self.HISTORY_LENGTH: int = int(raw_length)
        except ValueError:
            raise ConfigError(
                f"TOYSQLITE_HISTORY_LENGTH must be an integer, got {raw_length!r}"
            ) from None

        raw_level = os.environ.get("TOYSQLITE_LOG_LEVEL", "WARNING")
        try:
            self.LOG_LEVEL: int = parse_level(raw_level)
        except ValueError as e:
            raise ConfigError(f"TOYSQLITE_LOG_LEVEL: {e}") from None
