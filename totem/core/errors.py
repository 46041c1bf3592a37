"""Domain error taxonomy.

Services raise these for expected, client-facing failures. The global
responder in ``totem.api.errors`` renders them by their ``kind``; anything
that is not an ``AppError`` is an unclassified internal failure.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorKind(Enum):
    """Failure kinds with their HTTP status and machine-readable code."""

    NOT_FOUND = (404, "NOT_FOUND")
    CONFLICT = (409, "CONFLICT")
    VALIDATION = (400, "VALIDATION_ERROR")
    UNCLASSIFIED = (500, "INTERNAL_SERVER_ERROR")

    def __init__(self, status_code: int, code: str) -> None:
        self.status_code = status_code
        self.code = code


@dataclass(frozen=True)
class FieldViolation:
    """A single field-level validation failure."""

    field: str
    message: str

    def as_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


class AppError(Exception):
    """Base class for operational errors sent back to the client."""

    kind: ErrorKind = ErrorKind.UNCLASSIFIED

    def __init__(self, message: str, *, kind: ErrorKind | None = None) -> None:
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    @property
    def code(self) -> str:
        return self.kind.code

    @property
    def details(self) -> Any:
        return None


class NotFoundError(AppError):
    """A lookup by id or SKU matched no row."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, resource: str = "Recurso") -> None:
        super().__init__(f"{resource} não encontrado")


class ConflictError(AppError):
    """The write would break SKU uniqueness."""

    kind = ErrorKind.CONFLICT


class ValidationError(AppError):
    """Input failed schema checks; carries every violation in order."""

    kind = ErrorKind.VALIDATION

    def __init__(self, message: str, violations: list[FieldViolation] | None = None) -> None:
        super().__init__(message)
        self.violations = list(violations or [])

    @property
    def details(self) -> list[dict[str, str]]:
        return [violation.as_dict() for violation in self.violations]
