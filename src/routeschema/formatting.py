"""Rendering compiled patterns back into paths."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from urllib.parse import quote, unquote

from routeschema.errors import FormatError
from routeschema.segments import SEPARATOR, SegmentKind

if TYPE_CHECKING:
    from collections.abc import Mapping

    from routeschema.segments import CompiledPattern

# Characters left unescaped by URI component encoding, besides [A-Za-z0-9_.~-].
_COMPONENT_SAFE = "!*'()"


def encode_component(value: Any) -> str:
    """Percent-encode *value* as a single path component."""
    return quote(str(value), safe=_COMPONENT_SAFE)


def decode_component(part: str) -> str | None:
    """Decode a percent-encoded path component, ``None`` if it isn't valid UTF-8."""
    try:
        return unquote(part, errors="strict")
    except UnicodeDecodeError:
        return None


def format_path(compiled: CompiledPattern, raw: Mapping[str, Any]) -> str:
    """Substitute every parameter of *compiled* from *raw*.

    Optional parameters without a value are dropped from the path; a
    required parameter without a value raises :class:`FormatError`.
    """
    parts: list[str] = []
    for segment in compiled.segments:
        if not segment.is_param:
            parts.append(segment.literal)
            continue
        value = raw.get(segment.name)
        if value is None:
            if segment.optional:
                continue
            msg = f"Missing required parameter {segment.name!r} for pattern {compiled.pattern!r}"
            raise FormatError(
                msg,
                [{"type": "missing", "loc": (segment.name,), "msg": "Field required"}],
            )
        parts.append(encode_component(value))
    return SEPARATOR.join(parts)


def partial_format_path(compiled: CompiledPattern, raw: Mapping[str, Any]) -> str:
    """Substitute the parameters present in *raw*, keep the rest as placeholders.

    The result is itself a pattern: unknown parameters stay ``:name`` or
    ``:name?`` and optional static segments keep their ``?`` marker.
    """
    parts: list[str] = []
    for segment in compiled.segments:
        if not segment.is_param or segment.name not in raw:
            parts.append(segment.token)
            continue
        value = raw[segment.name]
        if value is None:
            if segment.kind is SegmentKind.OPTIONAL_PARAM:
                continue
            parts.append(segment.token)
            continue
        parts.append(encode_component(value))
    return SEPARATOR.join(parts)
