"""Product repository for database access."""
from __future__ import annotations

from typing import Any, Mapping, Sequence

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from totem.models.product import MAX_INTEGER, Product, utcnow
from totem.schemas.product import ProductCreate, ProductFilter

UPDATABLE_FIELDS = ("sku", "name", "price", "stock", "category")


class ProductRepository:
    """Handles database operations for Product entities."""

    def __init__(self, session: Session) -> None:
        """Initialize repository with a SQLAlchemy session.

        Args:
            session: Active database session for executing queries
        """
        self._session = session

    def get_by_id(self, product_id: int) -> Product | None:
        """Fetch a product by its database ID.

        Args:
            product_id: Database identifier

        Returns:
            Product instance if found, None otherwise (including IDs outside the column's range)
        """
        if not 0 < product_id <= MAX_INTEGER:
            return None
        return self._session.get(Product, product_id)

    def get_by_sku(self, sku: str) -> Product | None:
        """Fetch a product by SKU (exact, case-sensitive).

        Args:
            sku: Stock keeping unit identifier

        Returns:
            Product instance if found, None otherwise
        """
        return self._session.scalars(select(Product).where(Product.sku == sku)).first()

    def list_with_filters(self, filter_params: ProductFilter) -> Sequence[Product]:
        """Fetch every product matching all supplied filters, ordered by name.

        Args:
            filter_params: ProductFilter instance with optional filters

        Returns:
            Sequence of matching products (possibly empty)
        """
        stmt = select(Product)

        if filter_params.category is not None:
            stmt = stmt.where(Product.category == filter_params.category)

        if filter_params.only_in_stock:
            stmt = stmt.where(Product.stock > 0)

        if filter_params.search is not None:
            stmt = stmt.where(
                or_(
                    Product.name.icontains(filter_params.search, autoescape=True),
                    Product.sku.icontains(filter_params.search, autoescape=True),
                )
            )

        return self._session.scalars(stmt.order_by(Product.name.asc(), Product.id.asc())).all()

    def count(self) -> int:
        """Return total number of products in the database."""
        return self._session.query(Product).count()

    def create(self, product: ProductCreate) -> Product:
        """Insert a new product.

        Args:
            product: Validated creation payload

        Returns:
            Created Product instance with id and timestamps populated

        Raises:
            IntegrityError: If the SKU unique index is violated
        """
        db_product = Product(**product.model_dump())
        self._session.add(db_product)
        try:
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        self._session.refresh(db_product)
        return db_product

    def update_fields(self, db_product: Product, changes: Mapping[str, Any]) -> Product:
        """Apply the supplied fields to a product and re-stamp ``updated_at``.

        Args:
            db_product: Persistent product to modify
            changes: Field name to new value; unknown keys are ignored

        Returns:
            The refreshed Product instance

        Raises:
            IntegrityError: If a new SKU violates the unique index
        """
        for field in UPDATABLE_FIELDS:
            if field in changes:
                setattr(db_product, field, changes[field])
        db_product.updated_at = utcnow()

        try:
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        self._session.refresh(db_product)
        return db_product

    def delete(self, product_id: int) -> bool:
        """Delete a product by ID.

        Args:
            product_id: Database identifier

        Returns:
            True if product was deleted, False if not found
        """
        db_product = self.get_by_id(product_id)
        if db_product is None:
            return False

        self._session.delete(db_product)
        self._session.commit()
        return True
