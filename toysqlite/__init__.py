"""
toysqlite - an interactive shell around a tokenizer for a small SQL dialect.

Lines typed into the shell are scanned into tokens and echoed back;
there is no parser or storage engine yet.
"""

__version__ = '0.1.0'
__license__ = 'MIT'

from toysqlite.sql.tokenizer import Token, TokenType, Tokenizer, tokenize, token_type_to_string

__all__ = [
    'Token',
    'TokenType',
    'Tokenizer',
    'tokenize',
    'token_type_to_string',
]
