"""Exceptions raised while matching, validating and formatting paths."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pydantic import ValidationError

    from routeschema._types import Issue

PATTERN_MISMATCH = "pattern_mismatch"


class RouteError(Exception):
    """Base class for every error raised by routeschema."""


class PatternError(RouteError, ValueError):
    """A route was built from a pattern it cannot support."""


class ParamsError(RouteError):
    """A path could not be turned into validated parameters.

    ``issues`` uses the shape of pydantic's ``ValidationError.errors()``:
    one dict per problem with at least ``type``, ``loc`` and ``msg``.
    """

    def __init__(self, issues: list[Issue]) -> None:
        self.issues = issues
        super().__init__(_summarize(issues))

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.issues == other.issues  # type: ignore[attr-defined]

    __hash__ = Exception.__hash__

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.issues!r})"


class PatternMismatchError(ParamsError):
    """The path's shape does not fit the compiled pattern."""

    def __init__(self) -> None:
        super().__init__(
            [{"type": PATTERN_MISMATCH, "loc": (), "msg": "path doesn't match pattern"}],
        )


class ParamValidationError(ParamsError):
    """The validator rejected the extracted parameters."""

    @classmethod
    def from_pydantic(cls, exc: ValidationError) -> ParamValidationError:
        error = cls(exc.errors(include_url=False))
        error.__cause__ = exc
        return error


class FormatError(RouteError):
    """Parameters could not be rendered into a path."""

    def __init__(self, message: str, issues: list[Issue] | None = None) -> None:
        self.issues: list[Issue] = issues or []
        super().__init__(message)


def _summarize(issues: list[Issue]) -> str:
    parts: list[str] = []
    for issue in issues:
        loc = ".".join(str(p) for p in issue.get("loc", ()))
        msg = issue.get("msg", issue.get("type", "invalid"))
        parts.append(f"{loc}: {msg}" if loc else str(msg))
    return "; ".join(parts) or "invalid parameters"
