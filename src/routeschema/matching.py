"""Matching concrete paths against compiled patterns."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from routeschema.formatting import decode_component
from routeschema.segments import SEPARATOR, SegmentKind

if TYPE_CHECKING:
    from routeschema._types import RawParams
    from routeschema.segments import CompiledPattern

logger = logging.getLogger("routeschema")


def match_path(compiled: CompiledPattern, path: str, *, exact: bool = True) -> RawParams | None:
    """Return the raw parameters bound by *path*, or ``None`` on mismatch.

    Walks the path components and the pattern segments in a single forward
    pass. Optional static segments consume a component only when it equals
    their literal and are never retried, so an optional literal that equals
    the value meant for a following parameter is taken as the literal.
    """
    parts = path.split(SEPARATOR)
    segments = compiled.segments
    params: RawParams = {}
    part_index = 0
    segment_index = 0

    while part_index < len(parts):
        part = parts[part_index]
        if segment_index >= len(segments):
            if exact:
                return _mismatch(compiled, path, f"unexpected trailing component {part!r}")
            break

        segment = segments[segment_index]
        if segment.is_param:
            value = decode_component(part)
            if value is None:
                return _mismatch(compiled, path, f"undecodable component {part!r}")
            params[segment.name] = value
            part_index += 1
        elif segment.kind is SegmentKind.OPTIONAL_STATIC:
            if part == segment.literal:
                part_index += 1
        elif part == segment.literal:
            part_index += 1
        else:
            return _mismatch(compiled, path, f"expected {segment.literal!r}, got {part!r}")
        segment_index += 1

    for segment in segments[segment_index:]:
        if not segment.optional:
            return _mismatch(compiled, path, f"missing required segment {segment.token!r}")

    return params


def _mismatch(compiled: CompiledPattern, path: str, reason: str) -> None:
    logger.debug("path %r doesn't match %r: %s", path, compiled.pattern, reason)
    return None
