"""Product business rules on top of the repository."""
from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy.exc import IntegrityError

from totem.core.errors import ConflictError, NotFoundError
from totem.models.product import Product
from totem.schemas.product import ProductCreate, ProductFilter, ProductUpdate
from totem.services.product_repository import ProductRepository

logger = logging.getLogger(__name__)

PRODUCT_RESOURCE = "Produto"
SKU_TAKEN_ON_CREATE = "Produto com este SKU já existe"
SKU_TAKEN_ON_UPDATE = "Já existe outro produto com este SKU"


def _is_unique_violation(error: IntegrityError) -> bool:
    error_str = str(error.orig).lower()
    return "unique" in error_str or "duplicate" in error_str


class ProductService:
    """CRUD and lookup operations for products.

    The SKU check before each write is best-effort; the unique index on
    ``products.sku`` is authoritative, and an ``IntegrityError`` raised by it
    is reported as the same ConflictError.
    """

    def __init__(self, repository: ProductRepository) -> None:
        self._repository = repository

    def get_all(self, filters: ProductFilter | None = None) -> Sequence[Product]:
        """Return products matching every supplied filter, ordered by name."""
        return self._repository.list_with_filters(filters or ProductFilter())

    def get_by_id(self, product_id: int) -> Product:
        product = self._repository.get_by_id(product_id)
        if product is None:
            raise NotFoundError(PRODUCT_RESOURCE)
        return product

    def get_by_sku(self, sku: str) -> Product:
        product = self._repository.get_by_sku(sku)
        if product is None:
            raise NotFoundError(PRODUCT_RESOURCE)
        return product

    def create(self, data: ProductCreate) -> Product:
        """Persist a new product.

        Raises:
            ConflictError: If another product already uses the SKU
        """
        if self._repository.get_by_sku(data.sku) is not None:
            logger.warning(f"Attempted to create product with duplicate SKU: {data.sku}")
            raise ConflictError(SKU_TAKEN_ON_CREATE)

        try:
            product = self._repository.create(data)
        except IntegrityError as e:
            if not _is_unique_violation(e):
                raise
            logger.warning(f"Unique index rejected product SKU: {data.sku}")
            raise ConflictError(SKU_TAKEN_ON_CREATE) from e

        logger.info(f"Product created - id: {product.id}, sku: {product.sku}")
        return product

    def update(self, product_id: int, data: ProductUpdate) -> Product:
        """Apply a partial update.

        Raises:
            NotFoundError: If no product has ``product_id``
            ConflictError: If the new SKU belongs to another product
        """
        product = self.get_by_id(product_id)
        changes = data.changes()

        new_sku = changes.get("sku")
        if new_sku is not None and new_sku != product.sku:
            if self._repository.get_by_sku(new_sku) is not None:
                logger.warning(f"Attempted to update product {product_id} with duplicate SKU: {new_sku}")
                raise ConflictError(SKU_TAKEN_ON_UPDATE)

        try:
            product = self._repository.update_fields(product, changes)
        except IntegrityError as e:
            if not _is_unique_violation(e):
                raise
            logger.warning(f"Unique index rejected SKU change for product {product_id}")
            raise ConflictError(SKU_TAKEN_ON_UPDATE) from e

        logger.info(f"Product updated - id: {product_id}, fields: {sorted(changes)}")
        return product

    def delete(self, product_id: int) -> None:
        if not self._repository.delete(product_id):
            raise NotFoundError(PRODUCT_RESOURCE)
        logger.info(f"Product deleted - id: {product_id}")

    def is_available(self, sku: str, quantity: int) -> bool:
        """Tell whether ``sku`` exists with at least ``quantity`` units; unknown SKUs are unavailable."""
        product = self._repository.get_by_sku(sku)
        return product is not None and product.stock >= quantity
