"""Interactive read-evaluate loop.

Lines are collected until one ends with ``;`` or ``}`` while every ``{``
typed so far has been closed. The collected text is then lexed, parsed and
executed as one fragment against an environment that lives for the whole
session. Errors are reported and the buffer is discarded, but the session
carries on. ``exit;`` on a line of its own, or end of input, ends the
session.
"""

import builtins
from typing import IO, Callable, List, Optional

from minilang.ast import Stmt
from minilang.errors import MiniError
from minilang.interpreter import Interpreter
from minilang.parser import parse_program

BANNER = "minilang interpreter (type 'exit;' to quit)"
PROMPT = '>>> '
EXIT_COMMAND = 'exit;'
FRAGMENT_TERMINATORS = (';', '}')


def brace_depth(text: str) -> int:
    """Count unclosed '{' in text, ignoring braces inside string literals."""
    depth = 0
    in_string = False
    for c in text:
        if c == '"':
            in_string = not in_string
        elif not in_string:
            if c == '{':
                depth += 1
            elif c == '}':
                depth -= 1
    return depth


class Session:
    def __init__(self, interpreter: Optional[Interpreter] = None,
                 parse: Callable[[str], List[Stmt]] = parse_program,
                 out: Optional[IO[str]] = None):
        self.interpreter = interpreter if interpreter is not None else Interpreter(out=out)
        self.parse = parse
        self.out = out
        self.buffer: List[str] = []

    def completes_fragment(self, line: str) -> bool:
        # a ';' inside a block typed over several lines does not end the fragment
        if not line.strip().endswith(FRAGMENT_TERMINATORS):
            return False
        return brace_depth(''.join(self.buffer)) <= 0

    def feed(self, line: str) -> bool:
        """Accept one input line. Returns False once the session should end."""
        if line.strip() == EXIT_COMMAND:
            return False
        self.buffer.append(line + '\n')
        if self.completes_fragment(line):
            source = ''.join(self.buffer)
            self.buffer = []
            self.run_fragment(source)
        return True

    def run_fragment(self, source: str) -> bool:
        """Parse and execute one fragment, reporting any error. Returns True on success."""
        self.interpreter.debug(f"fragment: {source.strip()}")
        try:
            statements = self.parse(source)
            self.interpreter.run(statements)
        except MiniError as e:
            print(f"Error: {e}", file=self.out)
            return False
        return True

    def loop(self):
        """Read lines with ``input()`` until ``exit;`` or end of input."""
        print(BANNER, file=self.out)
        while True:
            try:
                line = builtins.input(PROMPT)
            except EOFError:
                break
            if not self.feed(line):
                break
