from typing import Optional

from minilang.tokens import Token


class MiniError(Exception):
    """Base class for every error raised while processing a fragment."""
    kind = 'Error'

    def __init__(self, message: str):
        super().__init__(f"{self.kind}: {message}")
        self.message = message


class LexError(MiniError):
    """Raised by the lexer on an unterminated string or unknown character."""
    kind = 'LexError'


class ParseError(MiniError):
    """Raised when the token stream does not match the grammar."""
    kind = 'ParseError'

    def __init__(self, message: str, token: Optional[Token] = None):
        super().__init__(message)
        self.token = token


class MiniNameError(MiniError):
    kind = 'NameError'


class MiniTypeError(MiniError):
    kind = 'TypeError'


class MiniArithmeticError(MiniError):
    kind = 'ArithmeticError'
