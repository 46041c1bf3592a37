"""Services module for business logic."""
from __future__ import annotations

from .product_repository import ProductRepository
from .product_service import ProductService
from .validation import validate, validate_create, validate_filters, validate_update

__all__ = [
    "ProductRepository",
    "ProductService",
    "validate",
    "validate_create",
    "validate_filters",
    "validate_update",
]
