"""Structured error values grouped into categories and subtypes."""

from __future__ import annotations

from collections.abc import Callable

from sfex.value import ErrorInfo, SfxValueError, to_display_string

CATEGORIES: dict[str, tuple[str, ...]] = {
    "System": (
        "FileNotFound",
        "NetworkError",
        "PermissionDenied",
        "Timeout",
        "ResourceExhausted",
        "IOError",
    ),
    "Logic": (
        "DivisionByZero",
        "InvalidOperation",
        "NullReference",
        "InvalidState",
        "NotImplemented",
        "Assertion",
    ),
    "Lookup": (
        "UndefinedVariable",
        "KeyNotFound",
        "IndexOutOfBounds",
        "MethodNotFound",
        "PropertyNotFound",
    ),
    "Validation": (
        "InvalidType",
        "OutOfBounds",
        "InvalidFormat",
        "ConstraintViolation",
        "ParseError",
    ),
    "Panic": (
        "TaskPanicked",
        "RuntimeCrash",
        "Aborted",
        "StackOverflow",
        "OutOfMemory",
    ),
}


def error_constructor(category: str, subtype: str) -> Callable[..., ErrorInfo]:
    """Return a function that builds errors of the given category and subtype.

    The built error takes its message from the first argument, or falls back
    to ``"<category>.<subtype>"`` when called without arguments.
    """

    def construct(*args) -> ErrorInfo:
        message = to_display_string(args[0]) if args else f"{category}.{subtype}"
        return ErrorInfo(category=category, subtype=subtype, message=message)

    construct.__name__ = f"{category}_{subtype}"
    construct.__doc__ = f"Build an Error.{category}.{subtype} value."
    return construct


def make_error(category: str, subtype: str, *args) -> ErrorInfo:
    """Build an error of a known category and subtype."""
    subtypes = CATEGORIES.get(category)
    if subtypes is None:
        raise SfxValueError(f"Unknown error category '{category}'")
    if subtype not in subtypes:
        raise SfxValueError(f"Unknown error subtype '{category}.{subtype}'")
    return error_constructor(category, subtype)(*args)


def is_error(value) -> bool:
    """True when ``value`` is an error value."""
    return isinstance(value, ErrorInfo)


def _require_error(error) -> ErrorInfo:
    if not isinstance(error, ErrorInfo):
        raise SfxValueError("Argument must be an Error")
    return error


def get_message(error) -> str:
    """Message of an error value."""
    return _require_error(error).message


def get_category(error) -> str:
    """Category of an error value."""
    return _require_error(error).category


def get_subtype(error) -> str:
    """Subtype of an error value."""
    return _require_error(error).subtype