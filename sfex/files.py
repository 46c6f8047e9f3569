"""Reading, writing and listing files on the local filesystem."""

from __future__ import annotations

import os
import re
from decimal import Decimal
from pathlib import Path

from sfex.value import SfxList, SfxValueError, to_display_string

_USIZE_RE = re.compile(r"\+?[0-9]+")
_DEFAULT_LINE_COUNT = 1000
_CHUNK_SIZE = 64 * 1024


def _is_number(value) -> bool:
    return isinstance(value, (Decimal, int)) and not isinstance(value, bool)


def _parse_usize(number, fallback: int) -> int:
    text = str(number)
    if _USIZE_RE.fullmatch(text):
        return int(text)
    return fallback


def read(path) -> str:
    """Whole text of the file at ``path``, or an empty string if it cannot be read."""
    try:
        with open(to_display_string(path), encoding="utf-8", newline="") as handle:
            return handle.read()
    except (OSError, UnicodeDecodeError):
        return ""


def write(path, content) -> bool:
    """Write the display text of ``content`` to ``path``, replacing the file."""
    try:
        with open(to_display_string(path), "w", encoding="utf-8", newline="") as handle:
            handle.write(to_display_string(content))
    except OSError as exc:
        raise SfxValueError(f"Failed to write file: {exc}") from exc
    return True


def exists(path) -> bool:
    """True when something exists at ``path``."""
    return Path(to_display_string(path)).exists()


def _matches(name: str, pattern: str | None) -> bool:
    if pattern is None:
        return True
    if pattern.startswith("*."):
        return name.endswith(pattern[2:])
    if "*" in pattern:
        parts = pattern.split("*")
        if len(parts) == 2:
            prefix, suffix = parts
            return name.startswith(prefix) and name.endswith(suffix)
        return True
    return name == pattern


def list_files(directory, pattern=None) -> SfxList:
    """Full paths of the regular files in ``directory`` whose names match ``pattern``.

    ``*.ext`` matches by ending, ``prefix*suffix`` by both ends, and a pattern
    without ``*`` must equal the name.
    """
    folder = to_display_string(directory)
    wanted = None if pattern is None else to_display_string(pattern)
    try:
        entries = list(os.scandir(folder))
    except OSError as exc:
        raise SfxValueError(f"Failed to read directory: {exc}") from exc
    return SfxList(
        os.path.join(folder, entry.name)
        for entry in entries
        if os.path.isfile(os.path.join(folder, entry.name)) and _matches(entry.name, wanted)
    )


def _strip_newline(raw: bytes) -> bytes:
    if raw.endswith(b"\n"):
        raw = raw[:-1]
        if raw.endswith(b"\r"):
            raw = raw[:-1]
    return raw


def read_lines(path, start_line, count) -> SfxList:
    """Up to ``count`` lines of a file, starting at line ``start_line`` (1-based)."""
    file_path = to_display_string(path)
    if not _is_number(start_line):
        raise SfxValueError("start_line must be a number")
    first = _parse_usize(start_line, 1)
    if first < 1:
        raise SfxValueError("start_line must be >= 1 (1-based indexing)")
    if not _is_number(count):
        raise SfxValueError("count must be a number")
    limit = _parse_usize(count, _DEFAULT_LINE_COUNT)

    try:
        handle = open(file_path, "rb")
    except OSError as exc:
        raise SfxValueError(f"Failed to open file: {exc}") from exc

    offset = first - 1
    lines = SfxList()
    with handle:
        for position, raw in enumerate(handle):
            if position < offset:
                continue
            if position >= offset + limit:
                break
            try:
                lines.append(_strip_newline(raw).decode("utf-8"))
            except UnicodeDecodeError:
                break
    return lines


def count_lines(path) -> Decimal:
    """Number of lines in a file, read in chunks rather than all at once."""
    try:
        handle = open(to_display_string(path), "rb")
    except OSError as exc:
        raise SfxValueError(f"Failed to open file: {exc}") from exc

    total = 0
    last = b""
    with handle:
        for chunk in iter(lambda: handle.read(_CHUNK_SIZE), b""):
            total += chunk.count(b"\n")
            last = chunk[-1:]
    if last and last != b"\n":
        total += 1
    return Decimal(total)