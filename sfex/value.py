"""Runtime values of the SFX language and the operations that inspect them.

Values map onto Python types:

* Number: ``decimal.Decimal`` (exact decimal arithmetic)
* FastNumber: ``float``
* String: ``str``
* Boolean: ``bool``
* List: ``SfxList``
* Map: ``SfxMap``
* Vector: ``Vector``
* NativeFunction: any callable
* Option: ``Maybe``
* WeakRef: ``WeakRef``
* Error: ``ErrorInfo``
"""

from __future__ import annotations

import math
import re
import weakref
from dataclasses import dataclass
from decimal import ROUND_DOWN, Decimal, InvalidOperation, localcontext

import regex

_NUMBER_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_GRAPHEME_RE = regex.compile(r"\X")
_DISPLAY_SCALE = Decimal("1e-10")
_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1


class SfxValueError(Exception):
    """Raised when an operation on runtime values fails."""


@dataclass(frozen=True)
class ErrorInfo:
    """An error value carrying a category, a subtype and a message."""

    category: str
    subtype: str
    message: str

    def __str__(self) -> str:
        return f"Error.{self.category}.{self.subtype}: {self.message}"


class SfxList(list):
    """A mutable list value, shared by reference."""


class SfxMap(dict):
    """A mutable map value with string keys, shared by reference."""


class Vector(tuple):
    """An immutable vector of floating point components."""

    __slots__ = ()

    def __new__(cls, components=()):
        return super().__new__(cls, (float(c) for c in components))


class _Nothing:
    __slots__ = ()

    def __repr__(self) -> str:
        return "<nothing>"


_NOTHING = _Nothing()


@dataclass(frozen=True)
class Maybe:
    """An optional value: ``Maybe(x)`` holds ``x``, ``Maybe()`` holds nothing."""

    value: object = _NOTHING

    @property
    def is_some(self) -> bool:
        return self.value is not _NOTHING

    @property
    def is_none(self) -> bool:
        return self.value is _NOTHING

    def unwrap(self):
        """Return the held value, or raise if there is none."""
        if self.is_none:
            raise SfxValueError("Cannot unwrap None value")
        return self.value

    def unwrap_or(self, default):
        """Return the held value, or ``default`` if there is none."""
        return default if self.is_none else self.value


class WeakRef:
    """A weak reference to a list or map value."""

    __slots__ = ("_ref", "kind")

    def __init__(self, target):
        if isinstance(target, SfxList):
            kind = "List"
        elif isinstance(target, SfxMap):
            kind = "Map"
        else:
            raise SfxValueError(f"Cannot create weak reference from {type_name(target)}")
        self._ref = weakref.ref(target)
        self.kind = kind

    def is_valid(self) -> bool:
        """True while the referenced object is still alive."""
        return self._ref() is not None

    def get(self):
        """Return the referenced object, or raise if it was collected."""
        target = self._ref()
        if target is None:
            raise SfxValueError("Weak reference no longer valid (object was collected)")
        return target

    def __repr__(self) -> str:
        return to_display_string(self)


def _is_number(value) -> bool:
    return isinstance(value, (Decimal, int)) and not isinstance(value, bool)


def _graphemes(text: str) -> list[str]:
    return _GRAPHEME_RE.findall(text)


def from_number_string(text: str) -> Decimal:
    """Parse a decimal literal into an exact Number."""
    if not isinstance(text, str) or not _NUMBER_RE.fullmatch(text):
        raise SfxValueError(f"Invalid number: {text!r}")
    try:
        return Decimal(text)
    except InvalidOperation as exc:
        raise SfxValueError(f"Invalid number: {text!r}") from exc


def format_number(number) -> str:
    """Render a Number for display, truncated to 10 places without trailing zeros."""
    number = Decimal(number)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, len(number.as_tuple().digits) + 20)
        text = format(number, "f")
        if "." not in text:
            return text
        truncated = number.quantize(_DISPLAY_SCALE, rounding=ROUND_DOWN)
        return format(truncated, "f").rstrip("0").rstrip(".")


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f")


def type_name(value) -> str:
    """Name of the runtime type of ``value``."""
    if isinstance(value, bool):
        return "Boolean"
    if _is_number(value):
        return "Number"
    if isinstance(value, float):
        return "FastNumber"
    if isinstance(value, str):
        return "String"
    if isinstance(value, Vector):
        return "Vector"
    if isinstance(value, list):
        return "List"
    if isinstance(value, dict):
        return "Map"
    if isinstance(value, WeakRef):
        return f"WeakRef ({value.kind})"
    if isinstance(value, Maybe):
        return "Option"
    if isinstance(value, ErrorInfo):
        return "Error"
    if callable(value):
        return "NativeFunction"
    return type(value).__name__


def is_truthy(value) -> bool:
    """Truthiness of a runtime value."""
    if isinstance(value, bool):
        return value
    if _is_number(value) or isinstance(value, float):
        return value != 0
    if isinstance(value, (str, list, dict, Vector)):
        return len(value) > 0
    if isinstance(value, WeakRef):
        return value.is_valid()
    if isinstance(value, Maybe):
        return value.is_some
    return True


def _to_i64(number) -> int:
    number = Decimal(number)
    if not number.is_finite():
        raise SfxValueError("Index must be integer")
    result = int(number)
    if not _I64_MIN <= result <= _I64_MAX:
        raise SfxValueError("Index must be integer")
    return result


def index(container, idx):
    """Look up ``idx`` in a list, string (1-based) or map."""
    if _is_number(idx):
        if isinstance(container, str):
            position = _to_i64(idx)
            if position == 0:
                raise SfxValueError(
                    "SFX strings start at 1. Use index 1 for the first character."
                )
            clusters = _graphemes(container)
            offset = position - 1 if position > 0 else len(clusters) + position
            if 0 <= offset < len(clusters):
                return clusters[offset]
            raise SfxValueError(f"Index {position} out of bounds")
        if isinstance(container, list):
            position = _to_i64(idx)
            if position == 0:
                raise SfxValueError("SFX lists start at 1, not 0")
            if position < 0:
                raise SfxValueError("Negative indices not supported yet")
            if position <= len(container):
                return container[position - 1]
            raise SfxValueError(f"Index {position} out of bounds")
    if isinstance(container, dict) and isinstance(idx, str):
        try:
            return container[idx]
        except KeyError:
            raise SfxValueError(f"Key '{idx}' not found") from None
    raise SfxValueError(f'Cannot index "{type_name(container)}" with "{type_name(idx)}"')


def length(value) -> int:
    """Length of a string (in grapheme clusters), list, vector or map."""
    if isinstance(value, str):
        return len(_graphemes(value))
    if isinstance(value, (list, dict, Vector)):
        return len(value)
    raise SfxValueError(f'"{type_name(value)}" has no length')


def clone_deep(value):
    """Copy a value so that no list or map is shared with the original."""
    if isinstance(value, list):
        return SfxList(clone_deep(item) for item in value)
    if isinstance(value, dict):
        return SfxMap((key, clone_deep(item)) for key, item in value.items())
    if isinstance(value, Maybe) and value.is_some:
        return Maybe(clone_deep(value.value))
    return value


def to_display_string(value) -> str:
    """Render a value the way the ``print`` statement shows it."""
    if isinstance(value, bool):
        return "True" if value else "False"
    if _is_number(value):
        return format_number(value)
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, str):
        return value
    if isinstance(value, Vector):
        return f"Vector[{len(value)}]"
    if isinstance(value, list):
        return "[" + ", ".join(to_display_string(item) for item in value) + "]"
    if isinstance(value, dict):
        entries = ", ".join(f"{key}: {to_display_string(item)}" for key, item in value.items())
        return "{" + entries + "}"
    if isinstance(value, WeakRef):
        state = "valid" if value.is_valid() else "collected"
        return f"<WeakRef to {value.kind} ({state})>"
    if isinstance(value, Maybe):
        return f"Some({to_display_string(value.value)})" if value.is_some else "None"
    if isinstance(value, ErrorInfo):
        return str(value)
    if callable(value):
        return "<native function>"
    return str(value)


def to_debug_string(value) -> str:
    """Like ``to_display_string`` but with strings quoted."""
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, list) and not isinstance(value, Vector):
        return "[" + ", ".join(to_debug_string(item) for item in value) + "]"
    return to_display_string(value)


def to_weak_ref(value) -> WeakRef:
    """Create a weak reference to a list or map."""
    if isinstance(value, (SfxList, SfxMap)):
        return WeakRef(value)
    raise SfxValueError(f"Cannot create weak reference from {type_name(value)}")