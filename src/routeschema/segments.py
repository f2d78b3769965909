"""Pattern compilation into typed segments.

A pattern such as ``/org/:organizationId/settings?/:tab?`` is split on ``/``
and each component becomes one :class:`Segment`:

- ``org``    static literal
- ``:name``  required parameter
- ``:name?`` optional parameter
- ``text?``  optional static literal
"""

from __future__ import annotations

import enum
import functools
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger("routeschema")

SEPARATOR = "/"
PARAM_PREFIX = ":"
OPTIONAL_SUFFIX = "?"


class SegmentKind(enum.Enum):
    STATIC = "static"
    PARAM = "param"
    OPTIONAL_STATIC = "optional_static"
    OPTIONAL_PARAM = "optional_param"


class Segment:
    """One compiled component of a pattern."""

    __slots__ = ("kind", "literal", "name")

    def __init__(self, kind: SegmentKind, *, literal: str = "", name: str = "") -> None:
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "literal", literal)
        object.__setattr__(self, "name", name)

    def __setattr__(self, key: str, value: object) -> None:
        msg = f"{type(self).__name__} is immutable"
        raise AttributeError(msg)

    @property
    def optional(self) -> bool:
        return self.kind in (SegmentKind.OPTIONAL_STATIC, SegmentKind.OPTIONAL_PARAM)

    @property
    def is_param(self) -> bool:
        return self.kind in (SegmentKind.PARAM, SegmentKind.OPTIONAL_PARAM)

    @property
    def token(self) -> str:
        """The pattern component this segment was compiled from."""
        text = PARAM_PREFIX + self.name if self.is_param else self.literal
        return text + OPTIONAL_SUFFIX if self.optional else text

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Segment):
            return NotImplemented
        return (self.kind, self.literal, self.name) == (other.kind, other.literal, other.name)

    def __hash__(self) -> int:
        return hash((self.kind, self.literal, self.name))

    def __repr__(self) -> str:
        return f"Segment({self.kind.name}, {self.token!r})"


class CompiledPattern:
    """Immutable, ordered sequence of segments for one pattern string."""

    __slots__ = ("pattern", "segments")

    def __init__(self, pattern: str, segments: tuple[Segment, ...]) -> None:
        object.__setattr__(self, "pattern", pattern)
        object.__setattr__(self, "segments", segments)

    def __setattr__(self, key: str, value: object) -> None:
        msg = f"{type(self).__name__} is immutable"
        raise AttributeError(msg)

    @property
    def param_names(self) -> tuple[str, ...]:
        """Parameter names in pattern order, duplicates included."""
        return tuple(s.name for s in self.segments if s.is_param)

    def __add__(self, other: CompiledPattern) -> CompiledPattern:
        if not isinstance(other, CompiledPattern):
            return NotImplemented
        return CompiledPattern(
            f"{self.pattern}{SEPARATOR}{other.pattern}",
            self.segments + other.segments,
        )

    def __iter__(self) -> Iterator[Segment]:
        return iter(self.segments)

    def __len__(self) -> int:
        return len(self.segments)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CompiledPattern):
            return NotImplemented
        return self.segments == other.segments

    def __hash__(self) -> int:
        return hash(self.segments)

    def __repr__(self) -> str:
        return f"CompiledPattern({self.pattern!r})"


def compile_segment(component: str) -> Segment:
    """Compile a single ``/``-free pattern component."""
    optional = component.endswith(OPTIONAL_SUFFIX)
    body = component[: -len(OPTIONAL_SUFFIX)] if optional else component
    if body.startswith(PARAM_PREFIX):
        kind = SegmentKind.OPTIONAL_PARAM if optional else SegmentKind.PARAM
        return Segment(kind, name=body[len(PARAM_PREFIX) :])
    kind = SegmentKind.OPTIONAL_STATIC if optional else SegmentKind.STATIC
    return Segment(kind, literal=body)


@functools.lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> CompiledPattern:
    """Compile ``/org/:organizationId`` into a :class:`CompiledPattern`.

    Never fails: every string is a valid pattern.
    """
    segments = tuple(compile_segment(c) for c in pattern.split(SEPARATOR))
    logger.debug("compiled pattern %r into %d segments", pattern, len(segments))
    return CompiledPattern(pattern, segments)
