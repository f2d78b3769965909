"""Routes: a compiled pattern paired with its parameter validators."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from routeschema.errors import FormatError, ParamValidationError, PatternError, PatternMismatchError
from routeschema.formatting import format_path, partial_format_path
from routeschema.matching import match_path
from routeschema.segments import CompiledPattern, compile_pattern
from routeschema.validators import ParseResult, StringifyValidator, Validator, as_validator

if TYPE_CHECKING:
    from routeschema._types import RawParams
    from routeschema.segments import Segment

logger = logging.getLogger("routeschema")


class Route:
    """A path pattern bound to a schema, usable in both directions.

    Parameters
    ----------
    pattern:
        ``/``-delimited pattern, e.g. ``/org/:organizationId/users/:userId?``,
        or an already compiled pattern.
    schema:
        Validator for the raw string parameters extracted from a path. A
        pydantic model class or any type accepted by ``TypeAdapter`` works.
    format_schema:
        Inverse of *schema*, turning structured parameters back into
        strings. Defaults to stringifying every value.
    partial_format_schema:
        Like *format_schema* but with every field optional. Defaults to
        ``format_schema.partial()``.
    exact:
        When ``True``, paths with components beyond the pattern don't match.
    """

    __slots__ = ("_compiled", "exact", "format_schema", "partial_format_schema", "pattern", "schema")

    def __init__(
        self,
        pattern: str | CompiledPattern,
        schema: Any,
        *,
        format_schema: Any = None,
        partial_format_schema: Any = None,
        exact: bool = True,
    ) -> None:
        self._compiled = pattern if isinstance(pattern, CompiledPattern) else compile_pattern(pattern)
        self.pattern = self._compiled.pattern
        _check_unique_names(self._compiled.param_names, self.pattern)
        self.schema: Validator = as_validator(schema)
        self.format_schema: Validator = (
            StringifyValidator() if format_schema is None else as_validator(format_schema)
        )
        self.partial_format_schema: Validator = (
            self.format_schema.partial()
            if partial_format_schema is None
            else as_validator(partial_format_schema)
        )
        self.exact = exact

    @property
    def segments(self) -> tuple[Segment, ...]:
        return self._compiled.segments

    @property
    def param_names(self) -> tuple[str, ...]:
        return self._compiled.param_names

    # ------------------------------------------------------------------
    # Path -> parameters
    # ------------------------------------------------------------------

    def match(self, path: str) -> RawParams | None:
        """Return the raw string parameters if *path* fits, else ``None``."""
        return match_path(self._compiled, path, exact=self.exact)

    def safe_parse(self, path: str) -> ParseResult:
        """Match and validate *path* without raising."""
        raw = self.match(path)
        if raw is None:
            return ParseResult.fail(PatternMismatchError())
        return self.schema.safe_parse(raw)

    def parse(self, path: str) -> Any:
        """Match and validate *path*.

        Raises :class:`PatternMismatchError` or :class:`ParamValidationError`.
        """
        result = self.safe_parse(path)
        if not result.success:
            raise result.error  # type: ignore[misc]
        return result.data

    # ------------------------------------------------------------------
    # Parameters -> path
    # ------------------------------------------------------------------

    def format(self, params: Any) -> str:
        """Render a concrete path; every required parameter must be given."""
        raw = _inverse(self.format_schema, params, self.pattern)
        return format_path(self._compiled, raw)

    def partial_format(self, params: Any) -> str:
        """Render a path, leaving parameters missing from *params* as placeholders."""
        raw = _inverse(self.partial_format_schema, params, self.pattern)
        return partial_format_path(self._compiled, raw)

    # ------------------------------------------------------------------
    # Composition
    # ------------------------------------------------------------------

    def extend(
        self,
        subpattern: str,
        subschema: Any,
        *,
        format_schema: Any = None,
        partial_format_schema: Any = None,
        exact: bool | None = None,
    ) -> Route:
        """Return a new route for ``{pattern}/{subpattern}``.

        Each schema of the new route is the intersection of this route's
        schema and the matching sub-schema. *exact* defaults to this
        route's setting.
        """
        sub_format = StringifyValidator() if format_schema is None else as_validator(format_schema)
        sub_partial = (
            sub_format.partial() if partial_format_schema is None else as_validator(partial_format_schema)
        )
        route = Route(
            self._compiled + compile_pattern(subpattern),
            self.schema & subschema,
            format_schema=self.format_schema & sub_format,
            partial_format_schema=self.partial_format_schema & sub_partial,
            exact=self.exact if exact is None else exact,
        )
        logger.debug("extended %r into %r", self.pattern, route.pattern)
        return route

    def __repr__(self) -> str:
        return f"Route({self.pattern!r}, {self.schema!r}, exact={self.exact})"


# ------------------------------------------------------------------
# Module-level helpers
# ------------------------------------------------------------------


def _check_unique_names(names: tuple[str, ...], pattern: str) -> None:
    duplicates = sorted(name for name, count in Counter(names).items() if count > 1)
    if duplicates:
        msg = f"Duplicate parameter name(s) {', '.join(map(repr, duplicates))} in pattern {pattern!r}"
        raise PatternError(msg)


def _inverse(schema: Validator, params: Any, pattern: str) -> Mapping[str, Any]:
    try:
        raw = schema.parse(params)
    except ParamValidationError as exc:
        msg = f"Cannot format {pattern!r}: {exc}"
        raise FormatError(msg, exc.issues) from exc
    if not isinstance(raw, Mapping):
        msg = f"Format schema {schema!r} must produce a mapping, got {type(raw).__name__}"
        raise FormatError(msg)
    return raw
