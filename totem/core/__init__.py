"""Core application utilities and infrastructure."""
from .config import Settings, get_settings
from .errors import (
    AppError,
    ConflictError,
    ErrorKind,
    FieldViolation,
    NotFoundError,
    ValidationError,
)

__all__ = [
    "Settings",
    "get_settings",
    "AppError",
    "ConflictError",
    "ErrorKind",
    "FieldViolation",
    "NotFoundError",
    "ValidationError",
]
