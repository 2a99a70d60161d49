"""Runtime values for minilang.

A value is one of four immutable variants: ``Number`` (always a float),
``Boolean``, ``String`` and ``Null``. The evaluator dispatches on these
classes explicitly; Python's own truthiness and coercions are never relied
upon.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union
import math


@dataclass(frozen=True)
class Number:
    value: float

    def __repr__(self) -> str:
        return f"Number({self.value!r})"


@dataclass(frozen=True)
class Boolean:
    value: bool

    def __repr__(self) -> str:
        return f"Boolean({self.value!r})"


@dataclass(frozen=True)
class String:
    value: str

    def __repr__(self) -> str:
        return f"String({self.value!r})"


@dataclass(frozen=True)
class Null:
    """Marker for the absent value."""

    def __repr__(self) -> str:
        return 'Null'


Value = Union[Number, Boolean, String, Null]

NULL = Null()
TRUE = Boolean(True)
FALSE = Boolean(False)


def boolean(flag: bool) -> Boolean:
    return TRUE if flag else FALSE


def type_name(value: Value) -> str:
    """Return the language-level type name of a runtime value."""
    if isinstance(value, Number):
        return 'Number'
    if isinstance(value, Boolean):
        return 'Boolean'
    if isinstance(value, String):
        return 'String'
    if isinstance(value, Null):
        return 'Null'
    raise TypeError(f"not a runtime value: {value!r}")


def to_string(value: Value) -> str:
    """Textual form written by ``print``.

    Numbers use Python's float repr, so ``2`` prints as ``2.0``.
    """
    if isinstance(value, Number):
        return repr(value.value)
    if isinstance(value, Boolean):
        return 'true' if value.value else 'false'
    if isinstance(value, String):
        return value.value
    if isinstance(value, Null):
        return 'null'
    raise TypeError(f"not a runtime value: {value!r}")


# beyond this integral floats keep their repr instead of a long digit string
INTEGRAL_TEXT_LIMIT = 1e16


def concat_text(value: Value) -> str:
    """Textual form used when a value is joined to a string with ``+``.

    Same as ``to_string`` except that integral numbers drop the fractional
    part: ``"x=" + 5`` gives ``x=5``.
    """
    if isinstance(value, Number):
        number = value.value
        if math.isfinite(number) and number == int(number) and abs(number) < INTEGRAL_TEXT_LIMIT:
            return str(int(number))
    return to_string(value)
