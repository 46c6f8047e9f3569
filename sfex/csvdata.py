"""CSV parsing into lists of row maps keyed by the header line."""

from __future__ import annotations

import csv
import io
import re
from collections.abc import Iterable
from decimal import Decimal

from sfex.value import (
    SfxList,
    SfxMap,
    SfxValueError,
    from_number_string,
    to_display_string,
)

_USIZE_RE = re.compile(r"\+?[0-9]+")


def _field_value(field: str):
    try:
        return from_number_string(field)
    except SfxValueError:
        return field


def _records(lines: Iterable[str]):
    """Yield non-empty CSV records."""
    reader = csv.reader(lines)
    while True:
        try:
            record = next(reader)
        except StopIteration:
            return
        except csv.Error as exc:
            raise SfxValueError(f"CSV Record Error: {exc}") from exc
        if record:
            yield record


def _row_map(headers: list[str], record: list[str]) -> SfxMap:
    if len(record) != len(headers):
        raise SfxValueError(
            f"CSV Record Error: found record with {len(record)} fields, "
            f"but the previous record has {len(headers)} fields"
        )
    return SfxMap((name, _field_value(field)) for name, field in zip(headers, record))


def _header(records) -> list[str] | None:
    try:
        return next(records)
    except StopIteration:
        return None
    except SfxValueError as exc:
        raise SfxValueError(f"CSV Header Error: {exc}") from exc


def parse_csv(text) -> SfxList:
    """Parse CSV text with a header line into a list of maps.

    Fields that read as numbers become Numbers; the rest stay strings.
    """
    data = to_display_string(text)
    if data.startswith("\ufeff"):
        data = data[1:]
    records = _records(io.StringIO(data, newline=""))
    headers = _header(records)
    if headers is None:
        return SfxList()
    return SfxList(_row_map(headers, record) for record in records)


def _parse_usize(number, fallback: int) -> int:
    text = str(number)
    if _USIZE_RE.fullmatch(text):
        return int(text)
    return fallback


def read_rows(filepath, start_row, count) -> SfxList:
    """Read ``count`` data rows of a CSV file starting at ``start_row`` (1-based)."""
    path = to_display_string(filepath)
    if isinstance(start_row, bool) or not isinstance(start_row, (Decimal, int)):
        raise SfxValueError("start_row must be a number")
    first = _parse_usize(start_row, 1)
    if first < 1:
        raise SfxValueError("start_row must be >= 1 (1-based indexing)")
    if isinstance(count, bool) or not isinstance(count, (Decimal, int)):
        raise SfxValueError("count must be a number")
    limit = _parse_usize(count, 1000)

    try:
        handle = open(path, encoding="utf-8-sig", newline="")
    except OSError as exc:
        raise SfxValueError(f"Failed to open file: {exc}") from exc

    rows = SfxList()
    with handle:
        try:
            records = _records(handle)
            headers = _header(records)
            if headers is None:
                return rows
            for position, record in enumerate(records, start=1):
                if position < first:
                    continue
                if len(rows) >= limit:
                    break
                rows.append(_row_map(headers, record))
        except UnicodeDecodeError as exc:
            raise SfxValueError(f"CSV Record Error: {exc}") from exc
    return rows