"""
SQL Tokenizer - Scans SQL source text into tokens.
Produces one token at a time on demand; tokens are views into the source.
"""

import copy
from dataclasses import dataclass, field
from enum import Enum, auto
from types import MappingProxyType
from typing import Iterator, List, Optional

from toysqlite.log import log_token, log_token_error, log_tokenize


class TokenType(Enum):
    """Types of tokens in SQL."""
    # Keywords
    SELECT = auto()
    FROM = auto()
    WHERE = auto()
    INSERT = auto()
    INTO = auto()
    VALUES = auto()
    CREATE = auto()
    TABLE = auto()
    INT = auto()
    TEXT = auto()
    DROP = auto()
    DELETE = auto()
    UPDATE = auto()
    SET = auto()
    BETWEEN = auto()
    LIKE = auto()
    IN = auto()
    LIMIT = auto()
    ORDER_BY = auto()

    # Logical operators
    AND = auto()
    OR = auto()
    NOT = auto()

    # Operators
    EQUAL = auto()            # =
    NOT_EQUAL = auto()        # != or <>
    LESS = auto()             # <
    GREATER = auto()          # >
    LESS_EQUAL = auto()       # <=
    GREATER_EQUAL = auto()    # >=
    PLUS = auto()             # +
    MINUS = auto()            # -
    STAR = auto()             # *
    SLASH = auto()            # /
    PERCENT = auto()          # %

    # Delimiters
    COMMA = auto()            # ,
    SEMICOLON = auto()        # ;
    DOT = auto()              # .
    LPAREN = auto()           # (
    RPAREN = auto()           # )
    LBRACE = auto()           # {
    RBRACE = auto()           # }

    # Literals
    IDENTIFIER = auto()
    STRING = auto()
    NUMBER = auto()
    NULL = auto()

    # Special
    EOF = auto()
    ERROR = auto()


# SQL keywords mapping (exact, case-sensitive)
KEYWORDS = MappingProxyType({
    'SELECT': TokenType.SELECT,
    'FROM': TokenType.FROM,
    'WHERE': TokenType.WHERE,
    'INSERT': TokenType.INSERT,
    'INTO': TokenType.INTO,
    'VALUES': TokenType.VALUES,
    'CREATE': TokenType.CREATE,
    'TABLE': TokenType.TABLE,
    'INT': TokenType.INT,
    'TEXT': TokenType.TEXT,
    'DROP': TokenType.DROP,
    'DELETE': TokenType.DELETE,
    'UPDATE': TokenType.UPDATE,
    'SET': TokenType.SET,
    'BETWEEN': TokenType.BETWEEN,
    'LIKE': TokenType.LIKE,
    'IN': TokenType.IN,
    'LIMIT': TokenType.LIMIT,
    'ORDER BY': TokenType.ORDER_BY,
    'AND': TokenType.AND,
    'OR': TokenType.OR,
    'NOT': TokenType.NOT,
    'NULL': TokenType.NULL,
})

# Multi-word keywords, keyed by their leading word
MULTI_WORD_KEYWORDS = MappingProxyType({
    'ORDER': ('BY', TokenType.ORDER_BY),
})

# Single-character operators and delimiters
SINGLE_CHAR_TOKENS = MappingProxyType({
    '*': TokenType.STAR,
    ',': TokenType.COMMA,
    ';': TokenType.SEMICOLON,
    '.': TokenType.DOT,
    '(': TokenType.LPAREN,
    ')': TokenType.RPAREN,
    '{': TokenType.LBRACE,
    '}': TokenType.RBRACE,
    '+': TokenType.PLUS,
    '-': TokenType.MINUS,
    '/': TokenType.SLASH,
    '%': TokenType.PERCENT,
    '=': TokenType.EQUAL,
})

KEYWORD_TYPES = frozenset(KEYWORDS.values())

LOGICAL_TYPES = frozenset({TokenType.AND, TokenType.OR, TokenType.NOT})

LITERAL_TYPES = frozenset({
    TokenType.IDENTIFIER,
    TokenType.STRING,
    TokenType.NUMBER,
    TokenType.NULL,
})

OPERATOR_TYPES = frozenset({
    TokenType.EQUAL, TokenType.NOT_EQUAL,
    TokenType.LESS, TokenType.GREATER,
    TokenType.LESS_EQUAL, TokenType.GREATER_EQUAL,
    TokenType.PLUS, TokenType.MINUS,
    TokenType.STAR, TokenType.SLASH, TokenType.PERCENT,
    TokenType.COMMA, TokenType.SEMICOLON, TokenType.DOT,
    TokenType.LPAREN, TokenType.RPAREN,
    TokenType.LBRACE, TokenType.RBRACE,
    TokenType.BETWEEN, TokenType.LIKE, TokenType.IN,
}) | LOGICAL_TYPES

TERMINAL_TYPES = frozenset({TokenType.EOF, TokenType.ERROR})

_LABELS = {
    TokenType.ORDER_BY: 'ORDER BY',
    TokenType.EQUAL: '=',
    TokenType.NOT_EQUAL: '<>',
    TokenType.LESS: '<',
    TokenType.GREATER: '>',
    TokenType.LESS_EQUAL: '<=',
    TokenType.GREATER_EQUAL: '>=',
    TokenType.PLUS: '+',
    TokenType.MINUS: '-',
    TokenType.STAR: '*',
    TokenType.SLASH: '/',
    TokenType.PERCENT: '%',
    TokenType.COMMA: ',',
    TokenType.SEMICOLON: ';',
    TokenType.DOT: '.',
    TokenType.LPAREN: '(',
    TokenType.RPAREN: ')',
    TokenType.LBRACE: '{',
    TokenType.RBRACE: '}',
}

# Error messages carried by ERROR tokens
UNTERMINATED_STRING = 'unterminated string literal'
MALFORMED_EXPONENT = 'malformed numeric exponent'
UNEXPECTED_CHARACTER = 'unexpected character'
EXPECTED_EQUAL_AFTER_BANG = "expected '=' after '!'"
UNTERMINATED_COMMENT = 'unterminated block comment'


def token_type_to_string(token_type: TokenType) -> str:
    """Return the display label for a token type."""
    return _LABELS.get(token_type, token_type.name)


# Character classes are ASCII only; '' (end of input) belongs to none of them
def is_identifier_start(char: str) -> bool:
    return len(char) == 1 and char.isascii() and (char.isalpha() or char in '_$')


def is_identifier_char(char: str) -> bool:
    return len(char) == 1 and char.isascii() and (char.isalnum() or char in '_$')


def is_digit(char: str) -> bool:
    return len(char) == 1 and '0' <= char <= '9'


@dataclass(frozen=True)
class Token:
    """
    Represents a single token.

    The lexeme is not stored separately: it is the slice
    ``source[start:start + length]`` of the text that was scanned.
    """
    type: TokenType
    start: int
    length: int
    line: int
    column: int
    source: str = field(default='', repr=False)
    message: Optional[str] = None

    @property
    def lexeme(self) -> str:
        return self.source[self.start:self.start + self.length]

    @property
    def end(self) -> int:
        return self.start + self.length

    @property
    def value(self):
        """
        Literal value of the token.

        NUMBER gives an int or float, STRING gives its contents with
        quotes removed and escapes resolved, NULL and EOF give None.
        Everything else gives the lexeme.
        """
        if self.type == TokenType.NUMBER:
            text = self.lexeme
            if any(c in text for c in '.eE'):
                return float(text)
            return int(text)
        if self.type == TokenType.STRING:
            return _unescape(self.lexeme[1:-1])
        if self.type in (TokenType.NULL, TokenType.EOF):
            return None
        return self.lexeme

    def is_keyword(self) -> bool:
        return self.type in KEYWORD_TYPES

    def is_literal(self) -> bool:
        return self.type in LITERAL_TYPES

    def is_operator(self) -> bool:
        return self.type in OPERATOR_TYPES

    def is_logical(self) -> bool:
        return self.type in LOGICAL_TYPES

    def is_terminal(self) -> bool:
        return self.type in TERMINAL_TYPES

    def match(self, *types: TokenType) -> bool:
        """Check whether the token is of any of the given types."""
        return self.type in types

    def text_equals(self, text: str) -> bool:
        """Check whether the lexeme is exactly ``text``."""
        return self.length == len(text) and self.source.startswith(text, self.start)

    def render(self) -> str:
        """Render the token for display, e.g. ``[IDENTIFIER: 'id' at 1:8]``."""
        text = f"[{token_type_to_string(self.type)}: {self.lexeme!r} at {self.line}:{self.column}]"
        if self.message:
            text += f" ({self.message})"
        return text

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.lexeme!r}, {self.line}:{self.column})"


def _unescape(body: str) -> str:
    chars = []
    escaped = False
    for char in body:
        if escaped:
            chars.append(char)
            escaped = False
        elif char == '\\':
            escaped = True
        else:
            chars.append(char)
    return ''.join(chars)


def format_token(token: Token) -> str:
    return token.render()


class Tokenizer:
    """
    SQL tokenizer over a single source string.

    The tokenizer is a small cursor (offset, line, start of line) that
    moves forward only. Tokens are pulled with ``next_token``; once the
    end of the input is reached every further call returns EOF.
    Malformed input never raises, it produces ERROR tokens instead.
    """

    def __init__(self, source: str):
        """
        Initialize the tokenizer.

        Args:
            source: SQL source text to scan
        """
        if not isinstance(source, str):
            raise TypeError(f"source must be str, not {type(source).__name__}")
        self.source = source
        self.current = 0
        self.line_start = 0
        self.line = 1
        log_tokenize(source)

    @property
    def column(self) -> int:
        return self.current - self.line_start + 1

    def _is_at_end(self) -> bool:
        return self.current >= len(self.source)

    def _peek(self) -> str:
        """Look at the current character without consuming it."""
        if self._is_at_end():
            return ''
        return self.source[self.current]

    def _peek_next(self) -> str:
        """Look one character past the current one."""
        if self.current + 1 >= len(self.source):
            return ''
        return self.source[self.current + 1]

    def _advance(self) -> str:
        """Consume and return the current character."""
        char = self.source[self.current]
        self.current += 1
        return char

    def _newline(self) -> None:
        self.line += 1
        self.line_start = self.current

    def _skip_line_comment(self) -> None:
        """Skip a -- comment, leaving the newline in place."""
        while not self._is_at_end() and self._peek() != '\n':
            self._advance()

    def _skip_block_comment(self) -> Optional[Token]:
        """
        Skip a (possibly nested) /* ... */ comment.

        Returns:
            None on success, or an ERROR token when the input ends
            before the outermost comment is closed
        """
        start, line, column = self.current, self.line, self.column
        self._advance()
        self._advance()
        depth = 1

        while depth > 0:
            if self._is_at_end():
                return self._make_error(start, line, column, UNTERMINATED_COMMENT)
            char = self._peek()
            if char == '/' and self._peek_next() == '*':
                self._advance()
                self._advance()
                depth += 1
            elif char == '*' and self._peek_next() == '/':
                self._advance()
                self._advance()
                depth -= 1
            else:
                self._advance()
                if char == '\n':
                    self._newline()
        return None

    def _skip_trivia(self) -> Optional[Token]:
        """Skip whitespace and comments in any order."""
        while not self._is_at_end():
            char = self._peek()
            if char in ' \t\r':
                self._advance()
            elif char == '\n':
                self._advance()
                self._newline()
            elif char == '-' and self._peek_next() == '-':
                self._skip_line_comment()
            elif char == '/' and self._peek_next() == '*':
                error = self._skip_block_comment()
                if error is not None:
                    return error
            else:
                break
        return None

    def _make_token(self, token_type: TokenType, start: int, line: int, column: int) -> Token:
        return Token(token_type, start, self.current - start, line, column, self.source)

    def _make_error(self, start: int, line: int, column: int, message: str) -> Token:
        token = Token(TokenType.ERROR, start, self.current - start, line, column,
                      self.source, message)
        log_token_error(token)
        return token

    def _scan_word(self) -> str:
        start = self.current
        while is_identifier_char(self._peek()):
            self._advance()
        return self.source[start:self.current]

    def _read_identifier(self, start: int, line: int, column: int) -> Token:
        """Read an identifier or keyword."""
        word = self._scan_word()

        if word in MULTI_WORD_KEYWORDS:
            follower, token_type = MULTI_WORD_KEYWORDS[word]
            trial = copy.copy(self)
            while trial._peek() in (' ', '\t'):
                trial._advance()
            if trial.current > self.current and is_identifier_start(trial._peek()):
                if trial._scan_word() == follower:
                    self.current = trial.current
                    return self._make_token(token_type, start, line, column)

        token_type = KEYWORDS.get(word, TokenType.IDENTIFIER)
        return self._make_token(token_type, start, line, column)

    def _read_number(self, start: int, line: int, column: int) -> Token:
        """Read a numeric literal (integer, decimal, exponent)."""
        while is_digit(self._peek()):
            self._advance()

        if self._peek() == '.' and is_digit(self._peek_next()):
            self._advance()
            while is_digit(self._peek()):
                self._advance()

        if self._peek() in ('e', 'E'):
            self._advance()
            if self._peek() in ('+', '-'):
                self._advance()
            if not is_digit(self._peek()):
                return self._make_error(start, line, column, MALFORMED_EXPONENT)
            while is_digit(self._peek()):
                self._advance()

        return self._make_token(TokenType.NUMBER, start, line, column)

    def _read_string(self, start: int, line: int, column: int) -> Token:
        """Read a string literal closed by the quote that opened it."""
        quote = self._advance()

        while True:
            if self._is_at_end():
                return self._make_error(start, line, column, UNTERMINATED_STRING)
            char = self._advance()
            if char == quote:
                break
            if char == '\\':
                if self._is_at_end():
                    return self._make_error(start, line, column, UNTERMINATED_STRING)
                char = self._advance()
            if char == '\n':
                self._newline()

        return self._make_token(TokenType.STRING, start, line, column)

    def _read_operator(self, start: int, line: int, column: int) -> Token:
        """Read the longest operator starting at the current character."""
        char = self._advance()

        if char == '<':
            if self._peek() == '=':
                self._advance()
                return self._make_token(TokenType.LESS_EQUAL, start, line, column)
            if self._peek() == '>':
                self._advance()
                return self._make_token(TokenType.NOT_EQUAL, start, line, column)
            return self._make_token(TokenType.LESS, start, line, column)

        if char == '>':
            if self._peek() == '=':
                self._advance()
                return self._make_token(TokenType.GREATER_EQUAL, start, line, column)
            return self._make_token(TokenType.GREATER, start, line, column)

        if char == '!':
            if self._peek() == '=':
                self._advance()
                return self._make_token(TokenType.NOT_EQUAL, start, line, column)
            return self._make_error(start, line, column, EXPECTED_EQUAL_AFTER_BANG)

        return self._make_token(SINGLE_CHAR_TOKENS[char], start, line, column)

    def next_token(self) -> Token:
        """
        Get the next token from the source.

        Returns:
            The next token; EOF once the input is exhausted
        """
        error = self._skip_trivia()
        if error is not None:
            return error

        start, line, column = self.current, self.line, self.column

        if self._is_at_end():
            token = self._make_token(TokenType.EOF, start, line, column)
        else:
            char = self._peek()
            if is_identifier_start(char):
                token = self._read_identifier(start, line, column)
            elif is_digit(char):
                token = self._read_number(start, line, column)
            elif char in ('"', "'"):
                token = self._read_string(start, line, column)
            elif char in SINGLE_CHAR_TOKENS or char in '<>!':
                token = self._read_operator(start, line, column)
            else:
                self._advance()
                token = self._make_error(start, line, column, UNEXPECTED_CHARACTER)

        log_token(token)
        return token

    def peek_token(self) -> Token:
        """
        Look at the next token without consuming it.

        The scan runs on a copy of the cursor, so this tokenizer is left
        exactly where it was.
        """
        return copy.copy(self).next_token()

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens up to and including the first EOF or ERROR."""
        while True:
            token = self.next_token()
            yield token
            if token.is_terminal():
                return

    def tokenize(self) -> List[Token]:
        """
        Tokenize the rest of the source.

        Returns:
            List of tokens, ending with EOF or the first ERROR
        """
        return list(self)


def tokenize(source: str) -> List[Token]:
    """
    Convenience function to tokenize SQL source.

    Args:
        source: SQL source text

    Returns:
        List of tokens, ending with EOF or the first ERROR
    """
    return Tokenizer(source).tokenize()
