"""Pluggable parameter validators backed by pydantic.

A :class:`Validator` turns one mapping into another. Routes use three of
them: the parse schema (raw strings to structured values), the format schema
(structured values back to strings) and its partial variant, where every
field is optional.
"""

from __future__ import annotations

import abc
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Annotated, Any, Optional

from pydantic import BaseModel, TypeAdapter, ValidationError, create_model

from routeschema.errors import ParamValidationError

if TYPE_CHECKING:
    from routeschema._types import Issue

logger = logging.getLogger("routeschema")


class ParseResult:
    """Tagged outcome of :meth:`Validator.safe_parse`."""

    __slots__ = ("data", "error", "success")

    def __init__(self, success: bool, data: Any = None, error: Exception | None = None) -> None:
        self.success = success
        self.data = data
        self.error = error

    @classmethod
    def ok(cls, data: Any) -> ParseResult:
        return cls(True, data=data)

    @classmethod
    def fail(cls, error: Exception) -> ParseResult:
        return cls(False, error=error)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParseResult):
            return NotImplemented
        return (self.success, self.data, self.error) == (other.success, other.data, other.error)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if self.success:
            return f"ParseResult(success=True, data={self.data!r})"
        return f"ParseResult(success=False, error={self.error!r})"


class Validator(abc.ABC):
    """Validates and transforms a parameter mapping."""

    @abc.abstractmethod
    def validate(self, value: Any) -> Any:
        """Return the transformed value or raise :class:`ParamValidationError`."""

    def safe_parse(self, value: Any) -> ParseResult:
        try:
            data = self.validate(value)
        except ParamValidationError as exc:
            logger.debug("%r rejected %r: %s", self, value, exc)
            return ParseResult.fail(exc)
        return ParseResult.ok(data)

    def parse(self, value: Any) -> Any:
        return self.validate(value)

    def partial(self) -> Validator:
        """A variant accepting any subset of the fields. Defaults to ``self``."""
        return self

    def and_(self, other: Any) -> IntersectionValidator:
        return IntersectionValidator(self, as_validator(other))

    def __and__(self, other: Any) -> IntersectionValidator:
        return self.and_(other)


class ModelValidator(Validator):
    """Validate with a pydantic model and return its fields as a dict.

    Unset fields that default to ``None`` are left out of the result, so an
    absent optional parameter stays absent; other defaults are kept. With
    *exclude_unset*, every field that was not supplied is left out, which is
    what the partial variant needs.
    """

    def __init__(self, model: type[BaseModel], *, exclude_unset: bool = False) -> None:
        self.model = model
        self.exclude_unset = exclude_unset

    def validate(self, value: Any) -> dict[str, Any]:
        if isinstance(value, BaseModel) and not isinstance(value, self.model):
            value = value.model_dump(exclude_unset=True)
        try:
            instance = self.model.model_validate(value)
        except ValidationError as exc:
            raise ParamValidationError.from_pydantic(exc) from exc
        if self.exclude_unset:
            return instance.model_dump(exclude_unset=True)
        unset = self.model.model_fields.keys() - instance.model_fields_set
        return instance.model_dump(exclude={name for name in unset if getattr(instance, name) is None})

    def partial(self) -> ModelValidator:
        return ModelValidator(_partial_model(self.model), exclude_unset=True)

    def __repr__(self) -> str:
        return f"ModelValidator({self.model.__name__})"


class AdapterValidator(Validator):
    """Validate with a pydantic ``TypeAdapter`` for an arbitrary type.

    Useful for ``TypedDict`` schemas or plain ``dict[str, str]``.
    """

    def __init__(self, tp: Any) -> None:
        self.type = tp
        self.adapter: TypeAdapter[Any] = TypeAdapter(tp)

    def validate(self, value: Any) -> Any:
        try:
            return self.adapter.validate_python(value)
        except ValidationError as exc:
            raise ParamValidationError.from_pydantic(exc) from exc

    def __repr__(self) -> str:
        return f"AdapterValidator({self.type!r})"


_CONTAINERS = (Mapping, list, tuple, set, frozenset, BaseModel)


class StringifyValidator(Validator):
    """Default format schema: render every value with ``str()``.

    ``None`` values are dropped and booleans render as ``true``/``false``.
    Containers can't be a single path component and are rejected.
    """

    _adapter: TypeAdapter[dict[str, Any]] = TypeAdapter(dict[str, Any])

    def validate(self, value: Any) -> dict[str, str]:
        if isinstance(value, BaseModel):
            value = value.model_dump(exclude_unset=True)
        try:
            checked = self._adapter.validate_python(value)
        except ValidationError as exc:
            raise ParamValidationError.from_pydantic(exc) from exc
        issues: list[Issue] = [
            {"type": "scalar_type", "loc": (key,), "msg": "Input should be a single value", "input": v}
            for key, v in checked.items()
            if isinstance(v, _CONTAINERS)
        ]
        if issues:
            raise ParamValidationError(issues)
        return {key: _stringify(v) for key, v in checked.items() if v is not None}

    def __eq__(self, other: object) -> bool:
        return isinstance(other, StringifyValidator)

    def __hash__(self) -> int:
        return hash(StringifyValidator)

    def __repr__(self) -> str:
        return "StringifyValidator()"


class IntersectionValidator(Validator):
    """Both validators must accept the input; their outputs are merged.

    Issues from both sides are reported together. A key produced by both
    sides with different values is an ``intersection_conflict`` issue.
    """

    def __init__(self, left: Validator, right: Validator) -> None:
        self.left = left
        self.right = right

    def validate(self, value: Any) -> Any:
        issues: list[Issue] = []
        results: list[Any] = []
        for validator in (self.left, self.right):
            try:
                results.append(validator.validate(value))
            except ParamValidationError as exc:
                issues.extend(exc.issues)
        if issues:
            raise ParamValidationError(issues)

        left, right = results
        if not (isinstance(left, Mapping) and isinstance(right, Mapping)):
            if left == right:
                return left
            raise ParamValidationError(
                [{"type": "intersection_conflict", "loc": (), "msg": "Intersection results could not be merged"}],
            )

        merged = dict(left)
        for key, v in right.items():
            if key in merged and merged[key] != v:
                issues.append(
                    {
                        "type": "intersection_conflict",
                        "loc": (key,),
                        "msg": "Intersection results could not be merged",
                        "input": (merged[key], v),
                    },
                )
            merged[key] = v
        if issues:
            raise ParamValidationError(issues)
        return merged

    def partial(self) -> IntersectionValidator:
        return IntersectionValidator(self.left.partial(), self.right.partial())

    def __repr__(self) -> str:
        return f"({self.left!r} & {self.right!r})"


def as_validator(schema: Any) -> Validator:
    """Coerce a schema object into a :class:`Validator`.

    Accepts validators, pydantic model classes and anything else pydantic's
    ``TypeAdapter`` understands.
    """
    if isinstance(schema, Validator):
        return schema
    if isinstance(schema, type) and issubclass(schema, BaseModel):
        return ModelValidator(schema)
    if schema is None or isinstance(schema, BaseModel):
        msg = f"Expected a Validator, a BaseModel subclass or a type, got {schema!r}"
        raise TypeError(msg)
    try:
        return AdapterValidator(schema)
    except Exception as exc:
        msg = f"Cannot build a validator from {schema!r}"
        raise TypeError(msg) from exc


# ------------------------------------------------------------------
# Module-level helpers
# ------------------------------------------------------------------


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _partial_model(model: type[BaseModel]) -> type[BaseModel]:
    """Derive a model from *model* where every field defaults to ``None``."""
    fields: dict[str, Any] = {}
    for name, field in model.model_fields.items():
        annotation: Any = field.annotation
        if field.metadata:
            annotation = Annotated[(annotation, *field.metadata)]
        fields[name] = (Optional[annotation], None)
    return create_model(f"Partial{model.__name__}", __base__=model, **fields)
