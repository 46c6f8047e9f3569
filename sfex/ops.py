"""Arithmetic, equality and ordering of runtime values.

Numbers (``Decimal``) are combined exactly, FastNumbers (``float``) with
machine arithmetic, and a mix of the two falls back to FastNumber.
"""

from __future__ import annotations

import math
import operator
import sys
from decimal import MAX_EMAX, MAX_PREC, MIN_EMIN, Decimal, localcontext

from sfex.value import (
    Maybe,
    SfxList,
    SfxValueError,
    Vector,
    WeakRef,
    format_number,
    to_display_string,
    type_name,
)

_DIVISION_PRECISION = 100
_EPSILON = sys.float_info.epsilon


def _is_number(value) -> bool:
    return isinstance(value, (Decimal, int)) and not isinstance(value, bool)


def _is_numeric(value) -> bool:
    return _is_number(value) or isinstance(value, float)


def _kind(left, right) -> str | None:
    """Classify a pair of operands: 'exact', 'fast', or None if not both numeric."""
    if _is_number(left) and _is_number(right):
        return "exact"
    if _is_numeric(left) and _is_numeric(right):
        return "fast"
    return None


def _exact(operation, left, right) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = MAX_PREC
        ctx.Emax = MAX_EMAX
        ctx.Emin = MIN_EMIN
        return operation(Decimal(left), Decimal(right))


def _as_float(value) -> float:
    return float(value)


def _float_text(value: float) -> str:
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return to_display_string(value)


def _concat_text(value) -> str | None:
    """Text a value contributes when joined with a string, or None if it cannot."""
    if isinstance(value, bool):
        return "True" if value else "False"
    if _is_number(value):
        return format_number(value)
    if isinstance(value, float):
        return _float_text(value)
    if isinstance(value, str):
        return value
    if isinstance(value, (WeakRef, Maybe)):
        return to_display_string(value)
    return None


def _quoted_names(left, right) -> tuple[str, str]:
    return f'"{type_name(left)}"', f'"{type_name(right)}"'


def add(left, right):
    """``left + right``: numbers, string concatenation, lists and vectors."""
    kind = _kind(left, right)
    if kind == "exact":
        return _exact(operator.add, left, right)
    if kind == "fast":
        return _as_float(left) + _as_float(right)
    if isinstance(left, str) or isinstance(right, str):
        left_text = _concat_text(left)
        right_text = _concat_text(right)
        if left_text is not None and right_text is not None:
            return left_text + right_text
    elif isinstance(left, list) and isinstance(right, list):
        return SfxList([*left, *right])
    elif isinstance(left, Vector) and isinstance(right, Vector):
        if len(left) != len(right):
            raise SfxValueError("Vectors must have same length for addition")
        return Vector(a + b for a, b in zip(left, right))
    a, b = _quoted_names(left, right)
    raise SfxValueError(f"Cannot add {a} and {b}")


def subtract(left, right):
    """``left - right`` for numbers and vectors."""
    kind = _kind(left, right)
    if kind == "exact":
        return _exact(operator.sub, left, right)
    if kind == "fast":
        return _as_float(left) - _as_float(right)
    if isinstance(left, Vector) and isinstance(right, Vector):
        if len(left) != len(right):
            raise SfxValueError("Vectors must have same length")
        return Vector(a - b for a, b in zip(left, right))
    a, b = _quoted_names(right, left)
    raise SfxValueError(f"Cannot subtract {a} from {b}")


def multiply(left, right):
    """``left * right`` for numbers."""
    kind = _kind(left, right)
    if kind == "exact":
        return _exact(operator.mul, left, right)
    if kind == "fast":
        return _as_float(left) * _as_float(right)
    a, b = _quoted_names(left, right)
    raise SfxValueError(f"Cannot multiply {a} and {b}")


def divide(left, right):
    """``left / right`` for numbers; dividing by zero raises."""
    kind = _kind(left, right)
    if kind == "exact":
        dividend, divisor = Decimal(left), Decimal(right)
        if divisor == 0:
            raise SfxValueError("Division by zero")
        with localcontext() as ctx:
            ctx.prec = _DIVISION_PRECISION
            ctx.Emax = MAX_EMAX
            ctx.Emin = MIN_EMIN
            return dividend / divisor
    if kind == "fast":
        dividend, divisor = _as_float(left), _as_float(right)
        if divisor == 0.0:
            raise SfxValueError("Division by zero")
        return dividend / divisor
    a, b = _quoted_names(left, right)
    raise SfxValueError(f"Cannot divide {a} by {b}")


def modulo(left, right):
    """Remainder of ``left / right``, taking the sign of ``left``."""
    kind = _kind(left, right)
    if kind == "exact":
        if Decimal(right) == 0:
            raise SfxValueError("Modulo by zero")
        return _exact(operator.mod, left, right)
    if kind == "fast":
        dividend, divisor = _as_float(left), _as_float(right)
        if divisor == 0.0:
            raise SfxValueError("Modulo by zero")
        try:
            return math.fmod(dividend, divisor)
        except ValueError:
            return math.nan
    a, b = _quoted_names(left, right)
    raise SfxValueError(f"Cannot modulo {a} by {b}")


def equals(left, right) -> bool:
    """Value equality; values of unrelated types are never equal."""
    kind = _kind(left, right)
    if kind == "exact":
        return Decimal(left) == Decimal(right)
    if kind == "fast":
        if isinstance(left, float) and isinstance(right, float):
            return left == right
        return abs(_as_float(left) - _as_float(right)) < _EPSILON
    if isinstance(left, bool) and isinstance(right, bool):
        return left == right
    if isinstance(left, str) and isinstance(right, str):
        return left == right
    return False


def _sign(a, b) -> int:
    return (a > b) - (a < b)


def compare(left, right) -> int:
    """Order two values: -1 if ``left`` is smaller, 0 if equal, 1 if larger."""
    kind = _kind(left, right)
    if kind == "exact":
        return _sign(Decimal(left), Decimal(right))
    if kind == "fast":
        a, b = _as_float(left), _as_float(right)
        for original, converted in ((left, a), (right, b)):
            if _is_number(original) and math.isinf(converted):
                raise SfxValueError("Number too large for FastNumber comparison")
        if math.isnan(a) or math.isnan(b):
            raise SfxValueError("Cannot compare NaN values")
        return _sign(a, b)
    if isinstance(left, str) and isinstance(right, str):
        return _sign(left, right)
    a, b = _quoted_names(left, right)
    raise SfxValueError(f"Cannot compare {a} and {b}")