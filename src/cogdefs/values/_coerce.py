"""Coercion of untyped input into variable values.

Persisted project data often carries variable values as strings (or as
whatever a client happened to send). ``convert_var_value_to_type`` turns any
such input into the native representation of a declared ``VariableType``
without raising on malformed values:

- boolean: text is true only if it is exactly ``"true"``; anything else is
  tested for presence (see ``is_empty_value``).
- string: empty values become ``""``; anything else its textual form.
- number: numeric parse; non-numeric input becomes ``nan``.

Empty values are ``None``, ``False``, ``0``, ``0.0``, ``nan`` and ``""``.
Everything else, including empty lists and dicts, is present. Note that
numeric zero is empty, so ``0`` coerced to a string is ``""``.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from decimal import Decimal

from cogdefs.model.variables import VariableType, VarValue


class CoercionError(ValueError):
    """Raised when a coercion is requested for an unknown variable kind."""


# ---------------------------------------------------------------------------
# Presence
# ---------------------------------------------------------------------------

def is_empty_value(value: object) -> bool:
    """True for the inputs treated as absent by boolean and string coercion."""
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, float):
        return value == 0 or math.isnan(value)
    if isinstance(value, int):
        return value == 0
    return False


# ---------------------------------------------------------------------------
# Number
# ---------------------------------------------------------------------------

_DECIMAL_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")
_RADIX_RE = re.compile(r"^0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)$")
_INFINITY = {"Infinity": math.inf, "+Infinity": math.inf, "-Infinity": -math.inf}


def _int_to_float(value: int) -> float:
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


def _parse_number(text: str) -> float:
    text = text.strip()
    if not text:
        return 0.0
    if text in _INFINITY:
        return _INFINITY[text]
    if _DECIMAL_RE.match(text):
        return float(text)
    if _RADIX_RE.match(text):
        return _int_to_float(int(text, 0))
    return math.nan


def to_number(value: object) -> float:
    """Numeric coercion. Unparseable input yields ``nan``."""
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, int):
        return _int_to_float(value)
    if isinstance(value, float):
        return value
    if isinstance(value, str):
        return _parse_number(value)
    return math.nan


# ---------------------------------------------------------------------------
# String
# ---------------------------------------------------------------------------

_EXPONENT_RE = re.compile(r"e([+-])0*(\d)")


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    text = repr(value)
    if "e" not in text:
        return text
    if 1e-6 <= abs(value) < 1e21:
        return format(Decimal(text), "f")
    return _EXPONENT_RE.sub(r"e\1\2", text)


def to_text(value: object) -> str:
    """Textual form of a value, as clients render it."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return ",".join(to_text(item) for item in value)
    if isinstance(value, Mapping):
        return "[object Object]"
    return str(value)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def convert_var_value_to_type(value: object, var_type: VariableType | str) -> VarValue:
    """Coerce *value* to the native representation of *var_type*.

    Never raises for malformed values. An unknown *var_type* is a caller
    error and raises ``CoercionError``.
    """
    try:
        kind = VariableType(var_type)
    except ValueError:
        raise CoercionError(f"Unknown variable type: {var_type!r}") from None

    if kind == VariableType.BOOLEAN:
        if isinstance(value, str):
            return value == "true"
        return not is_empty_value(value)

    if kind == VariableType.STRING:
        if is_empty_value(value):
            return ""
        return to_text(value)

    if kind == VariableType.NUMBER:
        return to_number(value)

    raise CoercionError(f"Unhandled variable type: {kind!r}")
