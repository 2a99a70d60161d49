from typing import Dict, Iterator, List
from contextlib import contextmanager

from minilang.errors import MiniNameError
from minilang.types import Value


class Environment:
    """Stack of scopes mapping variable names to values.

    The first scope is the global one and is never popped. Assignment
    updates the innermost scope that already binds a name and only creates
    a new binding, in the innermost scope, when no scope has it.
    """
    def __init__(self):
        self.scopes: List[Dict[str, Value]] = [{}]

    @property
    def depth(self) -> int:
        return len(self.scopes)

    def enter_scope(self):
        self.scopes.append({})

    def exit_scope(self):
        if len(self.scopes) == 1:
            raise RuntimeError('cannot exit the global scope')
        self.scopes.pop()

    @contextmanager
    def scope(self) -> Iterator['Environment']:
        """Push a scope for the duration of a ``with`` block, popping it on any exit."""
        self.enter_scope()
        try:
            yield self
        finally:
            self.exit_scope()

    def get(self, name: str) -> Value:
        for scope in reversed(self.scopes):
            if name in scope:
                return scope[name]
        raise MiniNameError(f'undefined variable {name}')

    def set(self, name: str, value: Value):
        for scope in reversed(self.scopes):
            if name in scope:
                scope[name] = value
                return
        self.scopes[-1][name] = value

    def is_defined(self, name: str) -> bool:
        return any(name in scope for scope in self.scopes)
