"""
Interactive shell for toysqlite.
Reads SQL lines and prints the tokens the tokenizer produces for them.
"""

import sys
import argparse
from typing import Optional

try:
    import readline
except ImportError:
    readline = None

import toysqlite
from toysqlite.config import Settings
from toysqlite.errors import ConfigError
from toysqlite.log import get_logger, log_shell_command, parse_level, set_global_level
from toysqlite.sql.tokenizer import TokenType, Tokenizer


logger = get_logger("shell")


class Shell:
    """
    Interactive tokenizer shell.

    Supports SQL input (echoed back as tokens) and special dot-commands.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize the shell.

        Args:
            settings: Shell settings (default: read from the environment)
        """
        self.settings = settings if settings is not None else Settings()
        self.running = True
        self.exit_code = 0

    def run(self) -> None:
        """Run the interactive shell."""
        self.load_history()
        self.print_welcome()

        try:
            while self.running:
                try:
                    line = input(self.settings.PROMPT)
                except KeyboardInterrupt:
                    print("\nUse .exit to quit")
                    continue
                except EOFError:
                    print()
                    break

                self.process_command(line)
        finally:
            self.save_history()

    def print_welcome(self) -> None:
        """Print welcome message."""
        print("Welcome to toy-sqlite!")
        print("Enter '.help' for usage hints, '.exit' to quit.")
        print()

    def process_command(self, command: str) -> None:
        """
        Dispatch one line of input.

        Args:
            command: The raw line typed by the user
        """
        command = command.strip()
        if not command:
            return

        log_shell_command(command)

        if command.startswith('.'):
            self.handle_special_command(command)
            return

        print(f"Tokenizing: '{command}'")
        self.print_tokens(command)
        print("(Parser not implemented yet)")

    def handle_special_command(self, command: str) -> None:
        """
        Handle special shell commands (starting with .).

        Args:
            command: The special command
        """
        if command == '.exit' or command == '.quit':
            print("Goodbye!")
            self.running = False
            self.exit_code = 0

        elif command == '.help':
            self.print_help()

        elif command == '.tokens':
            self.tokens_prompt()

        else:
            print(f"Unknown command: {command}")
            print("Type .help for list of commands")

    def print_help(self) -> None:
        """Print help message."""
        print("Special commands:")
        print("  .help          Show this help message")
        print("  .tokens        Read one SQL line and show its tokens")
        print("  .exit          Exit the shell")
        print("  .quit          Exit the shell")
        print()
        print("SQL statements (tokenized only, not executed yet):")
        print("  CREATE TABLE ...")
        print("  INSERT INTO ...")
        print("  SELECT ...")

    def tokens_prompt(self) -> None:
        """Ask for a single SQL line and print its tokens."""
        print("Enter a SQL command to tokenize:")
        try:
            sql = input("test> ")
        except EOFError:
            print()
            return

        if sql.strip():
            print("Tokens:")
            self.print_tokens(sql)

    def print_tokens(self, sql: str) -> bool:
        """
        Print every token of ``sql`` on one line.

        Args:
            sql: Text to tokenize

        Returns:
            False if scanning stopped on an ERROR token
        """
        rendered = []
        ok = True
        for token in Tokenizer(sql):
            rendered.append(token.render())
            if token.type == TokenType.ERROR:
                ok = False
        print(' '.join(rendered))
        return ok

    def load_history(self) -> None:
        """Read persisted line history, if readline is available."""
        if readline is None or not self.settings.HISTORY_FILE:
            return
        readline.set_history_length(self.settings.HISTORY_LENGTH)
        try:
            readline.read_history_file(self.settings.HISTORY_FILE)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Could not read history file %s: %s", self.settings.HISTORY_FILE, e)

    def save_history(self) -> None:
        """Write line history back to disk, if readline is available."""
        if readline is None or not self.settings.HISTORY_FILE:
            return
        try:
            readline.write_history_file(self.settings.HISTORY_FILE)
        except OSError as e:
            logger.warning("Could not write history file %s: %s", self.settings.HISTORY_FILE, e)


def main(args: Optional[list] = None) -> int:
    """
    Main entry point for the shell.

    Args:
        args: Command-line arguments (default: sys.argv[1:])

    Returns:
        Exit code
    """
    parser = argparse.ArgumentParser(
        description='toysqlite - SQL tokenizer shell',
        prog='toysqlite'
    )
    parser.add_argument(
        '-c', '--command',
        help='Tokenize a single SQL command and exit',
        metavar='SQL'
    )
    parser.add_argument(
        '--log-level',
        help='Logging level (TRACE, DEBUG, INFO, WARNING, ERROR)',
        metavar='LEVEL'
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {toysqlite.__version__}'
    )

    if args is None:
        args = sys.argv[1:]

    parsed_args = parser.parse_args(args)

    try:
        settings = Settings()
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    level = settings.LOG_LEVEL
    if parsed_args.log_level:
        try:
            level = parse_level(parsed_args.log_level)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 2
    set_global_level(level)

    shell = Shell(settings)

    # Single command mode
    if parsed_args.command is not None:
        return 0 if shell.print_tokens(parsed_args.command) else 1

    # Interactive mode
    shell.run()
    return shell.exit_code


if __name__ == '__main__':
    sys.exit(main())
