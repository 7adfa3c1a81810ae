"""Field validation helpers shared by services and the HTTP error handlers."""

from collections.abc import Iterable, Mapping, Sequence
from typing import Annotated, Any, TypeVar

from pydantic import AfterValidator, BaseModel, StringConstraints, ValidationError

from src.bilemo.core.errors import EntityValidationError, FieldError

M = TypeVar("M", bound=BaseModel)

# Request locations FastAPI prefixes to error locations
_LOCATION_ROOTS = {"body", "query", "path", "header", "cookie"}


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("This value should not be blank.")
    return value


# Non-blank string of 2 to 255 characters
BoundedText = Annotated[
    str,
    StringConstraints(min_length=2, max_length=255),
    AfterValidator(_not_blank),
]


def field_name(loc: Sequence[Any]) -> str:
    """Turn a pydantic error location into a dotted field name."""
    parts = [str(part) for part in loc]
    if parts and parts[0] in _LOCATION_ROOTS and len(parts) > 1:
        parts = parts[1:]
    return ".".join(parts) if parts else "__root__"


def to_field_errors(errors: Iterable[Mapping[str, Any]]) -> list[FieldError]:
    """Convert pydantic error dictionaries to ``FieldError`` items."""
    return [
        FieldError(field=field_name(error.get("loc", ())), message=error["msg"])
        for error in errors
    ]


def validate(model: type[M], data: Mapping[str, Any]) -> list[FieldError]:
    """Return every constraint ``data`` violates for ``model``; empty when valid."""
    try:
        model.model_validate(data)
    except ValidationError as exc:
        return to_field_errors(exc.errors())
    return []


def validate_or_raise(model: type[M], data: Mapping[str, Any]) -> M:
    """Validate ``data`` into ``model`` or raise with all accumulated field errors."""
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise EntityValidationError(to_field_errors(exc.errors())) from exc
