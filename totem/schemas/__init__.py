"""Public schema exports."""

from .product import (
    AvailabilityResponse,
    ErrorResponse,
    ProductCreate,
    ProductFilter,
    ProductResponse,
    ProductUpdate,
)

__all__ = [
    "AvailabilityResponse",
    "ErrorResponse",
    "ProductCreate",
    "ProductFilter",
    "ProductResponse",
    "ProductUpdate",
]
