"""Request validation layer.

Parses raw payloads against the product schemas and turns every pydantic
failure into an ordered list of ``FieldViolation`` entries wrapped in a
domain ``ValidationError``. FastAPI's own request validation failures go
through ``violations_from_errors`` too, so all 400 responses look alike.
"""
from __future__ import annotations

from typing import Any, Iterable, Mapping, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from totem.core.errors import FieldViolation, ValidationError
from totem.schemas.product import ProductCreate, ProductFilter, ProductUpdate

VALIDATION_FAILED = "Validação falhou"

# Location prefixes FastAPI adds to say where a parameter came from.
_REQUEST_SOURCES = {"body", "query", "path", "header", "cookie"}

ModelT = TypeVar("ModelT", bound=BaseModel)


def violations_from_errors(errors: Iterable[Mapping[str, Any]]) -> list[FieldViolation]:
    """Convert pydantic/FastAPI error dicts into field violations, keeping order."""
    violations: list[FieldViolation] = []
    for error in errors:
        loc = list(error.get("loc", ()))
        if loc and loc[0] in _REQUEST_SOURCES:
            loc = loc[1:]
        field = ".".join(str(part) for part in loc)
        violations.append(FieldViolation(field=field, message=str(error.get("msg", ""))))
    return violations


def validate(schema: type[ModelT], raw: Any) -> ModelT:
    """Parse ``raw`` with ``schema`` or raise a ValidationError listing every violation.

    Args:
        schema: Pydantic model class describing the expected shape
        raw: Decoded JSON body or query mapping

    Returns:
        A fully normalised model instance

    Raises:
        ValidationError: If any field fails its checks
    """
    try:
        return schema.model_validate(raw)
    except PydanticValidationError as exc:
        raise ValidationError(VALIDATION_FAILED, violations_from_errors(exc.errors())) from exc


def validate_create(raw: Any) -> ProductCreate:
    return validate(ProductCreate, raw)


def validate_update(raw: Any) -> ProductUpdate:
    return validate(ProductUpdate, raw)


def validate_filters(raw: Mapping[str, Any]) -> ProductFilter:
    """Validate list filters; keys that were not supplied are dropped first."""
    return validate(ProductFilter, {key: value for key, value in raw.items() if value is not None})
