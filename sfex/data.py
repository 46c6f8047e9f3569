"""Detecting, describing and summarising structured data files."""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path

from sfex.value import (
    SfxList,
    SfxMap,
    SfxValueError,
    to_display_string,
)

_SAMPLE_SIZE = 8192
_BOM = b"\xef\xbb\xbf"
_USIZE_RE = re.compile(r"\+?[0-9]+")
_DEFAULT_MAX_DEPTH = 10
_PARSEABLE = frozenset({"JSON", "XML", "HTML", "TOML", "CSV"})

_EXTENSION_FORMATS = {
    "json": "JSON",
    "xml": "XML",
    "html": "HTML",
    "htm": "HTML",
    "toml": "TOML",
    "csv": "CSV",
    "yaml": "YAML",
    "yml": "YAML",
}

_MEDIA_TYPES = {
    "JSON": "application/json",
    "JavaScript Object Notation": "application/json",
    "XML": "text/xml",
    "Extensible Markup Language": "text/xml",
    "HTML": "text/html",
    "HyperText Markup Language": "text/html",
    "TOML": "application/toml",
    "Tom's Obvious Minimal Language": "application/toml",
    "CSV": "text/csv",
    "Comma-Separated Values": "text/csv",
    "YAML": "application/yaml",
    "YAML Ain't Markup Language": "application/yaml",
}


@dataclass(frozen=True)
class _Sniffed:
    """What the leading bytes of a file say about its format."""

    name: str
    media_type: str
    kind: str
    extension: str


_EMPTY = _Sniffed("Empty", "application/x-empty", "Other", "empty")
_PLAIN_TEXT = _Sniffed("Plain Text", "text/plain", "Text", "txt")
_BINARY = _Sniffed("Arbitrary Binary Data", "application/octet-stream", "Other", "bin")

_MAGIC: tuple[tuple[bytes, _Sniffed], ...] = (
    (b"\x89PNG\r\n\x1a\n", _Sniffed("Portable Network Graphics", "image/png", "Image", "png")),
    (b"\xff\xd8\xff", _Sniffed("Joint Photographic Experts Group", "image/jpeg", "Image", "jpg")),
    (b"GIF87a", _Sniffed("Graphics Interchange Format", "image/gif", "Image", "gif")),
    (b"GIF89a", _Sniffed("Graphics Interchange Format", "image/gif", "Image", "gif")),
    (b"%PDF-", _Sniffed("Portable Document Format", "application/pdf", "Document", "pdf")),
    (b"PK\x03\x04", _Sniffed("ZIP", "application/zip", "Archive", "zip")),
    (b"\x1f\x8b", _Sniffed("Gzip", "application/gzip", "Archive", "gz")),
)


def _looks_like_text(sample: bytes) -> bool:
    if b"\x00" in sample:
        return False
    try:
        sample.decode("utf-8")
    except UnicodeDecodeError as exc:
        # A multi-byte character cut off by the end of the sample is still text.
        return exc.reason == "unexpected end of data" and exc.start >= len(sample) - 3
    return True


def _sniff(sample: bytes) -> _Sniffed:
    if not sample:
        return _EMPTY
    for magic, found in _MAGIC:
        if sample.startswith(magic):
            return found
    return _PLAIN_TEXT if _looks_like_text(sample) else _BINARY


def sanitize_content(raw: bytes) -> str:
    """Decode bytes as UTF-8, dropping a leading byte-order mark and replacing bad bytes."""
    if raw.startswith(_BOM):
        raw = raw[len(_BOM):]
    return raw.decode("utf-8", errors="replace")


def _line_suggests_toml(line: str) -> bool:
    line = line.strip()
    bracketed = line.startswith("[") and line.endswith("]")
    return bracketed or ("=" in line and not line.startswith("<"))


def guess_format_priority(content: str, filepath=None) -> list[str]:
    """Candidate formats for ``content``, most likely first.

    The file extension, when given, ranks first; then the shape of the text.
    """
    candidates: list[str] = []

    def push(name: str) -> None:
        if name not in candidates:
            candidates.append(name)

    trimmed = content.strip()

    if filepath is not None:
        suffix = Path(str(filepath)).suffix
        by_extension = _EXTENSION_FORMATS.get(suffix[1:].lower()) if suffix else None
        if by_extension is not None:
            candidates.append(by_extension)

    if trimmed.startswith(("{", "[")):
        push("JSON")

    if trimmed.startswith("<"):
        if trimmed.lower().startswith("<!doctype html") or "</html>" in trimmed:
            push("HTML")
        else:
            push("XML")
            push("HTML")

    first_lines = trimmed.split("\n")[:5] if trimmed else []
    if any(_line_suggests_toml(line) for line in first_lines):
        push("TOML")

    if "\n" in trimmed and ("," in trimmed or ";" in trimmed):
        if not candidates or "CSV" in candidates:
            push("CSV")

    return candidates


def media_type_for_format(fmt: str, fallback: str) -> str:
    """Media type of a known format name, or ``fallback``."""
    return _MEDIA_TYPES.get(fmt, fallback)


def _read_sample(path: str) -> bytes:
    try:
        with open(path, "rb") as handle:
            return handle.read(_SAMPLE_SIZE)
    except OSError as exc:
        raise SfxValueError(f"Failed to read file: {exc}") from exc


def _resolve(path: str) -> tuple[_Sniffed, str, str, list[str]]:
    sample = _read_sample(path)
    sniffed = _sniff(sample)
    priorities = guess_format_priority(sanitize_content(sample), path)
    fmt, media = sniffed.name, sniffed.media_type
    vague = fmt == "Plain Text" or media == "application/octet-stream"
    if vague and priorities:
        fmt = priorities[0]
        media = media_type_for_format(fmt, sniffed.media_type)
    return sniffed, fmt, media, priorities


def detect(filepath) -> SfxMap:
    """Format, media type, kind, extension and candidate formats of a file."""
    path = to_display_string(filepath)
    sniffed, fmt, media, priorities = _resolve(path)
    return SfxMap(
        Format=fmt,
        MediaType=media,
        Kind=sniffed.kind,
        Extension=sniffed.extension,
        Candidates=SfxList(priorities),
    )


def detect_from_string(content) -> SfxMap:
    """Most likely format of a piece of text."""
    priorities = guess_format_priority(to_display_string(content))
    best = priorities[0] if priorities else "Plain Text"
    return SfxMap(
        Format=best,
        MediaType=media_type_for_format(best, "text/plain"),
        Kind="Text",
    )


def describe(filepath) -> SfxMap:
    """Format, media type, extension, size and parseability of a file."""
    path = to_display_string(filepath)
    try:
        size = Path(path).stat().st_size
    except OSError as exc:
        raise SfxValueError(f"IO Error: {exc}") from exc
    sniffed, fmt, media, _ = _resolve(path)
    return SfxMap(
        Format=fmt,
        MediaType=media,
        Extension=sniffed.extension,
        Size=Decimal(size),
        Parseable=fmt in _PARSEABLE,
    )


def _depth_limit(max_depth) -> int:
    if isinstance(max_depth, bool) or not isinstance(max_depth, (Decimal, int)):
        return _DEFAULT_MAX_DEPTH
    text = str(max_depth)
    return int(text) if _USIZE_RE.fullmatch(text) else _DEFAULT_MAX_DEPTH


def _analyze(value, depth: int, max_depth: int):
    if depth > max_depth:
        return "..."
    if isinstance(value, dict):
        return SfxMap(
            (key, _analyze(item, depth + 1, max_depth)) for key, item in value.items()
        )
    if isinstance(value, list):
        summary = SfxMap(type="List", count=Decimal(len(value)))
        if value:
            summary["sample_item"] = _analyze(value[0], depth + 1, max_depth)
        return summary
    if isinstance(value, bool):
        return "Boolean"
    if isinstance(value, str):
        return "String"
    if isinstance(value, (Decimal, int)):
        return "Number"
    return to_display_string(value).split("(", 1)[0]


def structure(data, max_depth=None):
    """Outline of the shape of ``data``, descending at most ``max_depth`` levels."""
    return _analyze(data, 0, _depth_limit(max_depth))