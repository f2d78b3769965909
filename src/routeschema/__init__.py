"""Bidirectional path patterns validated with pydantic."""

__version__ = "0.1.0"

from routeschema.errors import (
    FormatError,
    ParamsError,
    ParamValidationError,
    PatternError,
    PatternMismatchError,
    RouteError,
)
from routeschema.route import Route
from routeschema.segments import CompiledPattern, Segment, SegmentKind, compile_pattern
from routeschema.validators import (
    AdapterValidator,
    IntersectionValidator,
    ModelValidator,
    ParseResult,
    StringifyValidator,
    Validator,
    as_validator,
)

__all__ = [
    "AdapterValidator",
    "CompiledPattern",
    "FormatError",
    "IntersectionValidator",
    "ModelValidator",
    "ParamValidationError",
    "ParamsError",
    "ParseResult",
    "PatternError",
    "PatternMismatchError",
    "Route",
    "RouteError",
    "Segment",
    "SegmentKind",
    "StringifyValidator",
    "Validator",
    "as_validator",
    "compile_pattern",
]
