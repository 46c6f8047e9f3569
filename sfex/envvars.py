"""Access to process environment variables and ``.env`` files."""

from __future__ import annotations

import os
from decimal import Decimal

from sfex.value import SfxMap, SfxValueError, to_display_string


def get(key, default="") -> str:
    """Value of environment variable ``key``, or ``default`` when unset."""
    return os.environ.get(to_display_string(key), to_display_string(default))


def has(key) -> bool:
    """True when environment variable ``key`` is set."""
    return to_display_string(key) in os.environ


def all_vars() -> SfxMap:
    """Every environment variable as a map of strings."""
    return SfxMap(os.environ.items())


def _strip_quotes(value: str) -> str:
    if value[:1] == value[-1:] and value[:1] in ('"', "'"):
        return value[1:-1]
    return value


def load(filepath) -> Decimal:
    """Set environment variables from a ``KEY=value`` file; return how many were set."""
    path = to_display_string(filepath)
    try:
        with open(path, encoding="utf-8") as handle:
            content = handle.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise SfxValueError(f"Failed to load .env file: {exc}") from exc

    count = 0
    for raw_line in content.split("\n"):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            continue
        key = key.strip()
        if not key:
            continue
        os.environ[key] = _strip_quotes(value.strip())
        count += 1
    return Decimal(count)