# minilang language package
# A small imperative scripting language: lexer, recursive-descent parser and
# tree-walking interpreter over a scoped environment.
from .environment import Environment
from .errors import (
    MiniError, LexError, ParseError,
    MiniNameError, MiniTypeError, MiniArithmeticError,
)
from .interpreter import Interpreter, execute, run_program
from .lexer import tokenize, render_tokens
from .parser import Parser, parse_program

__all__ = [
    'Environment',
    'MiniError',
    'LexError',
    'ParseError',
    'MiniNameError',
    'MiniTypeError',
    'MiniArithmeticError',
    'Interpreter',
    'execute',
    'run_program',
    'tokenize',
    'render_tokens',
    'Parser',
    'parse_program',
]
