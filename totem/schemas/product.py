"""Pydantic schemas for product resources."""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from totem.models.product import MAX_INTEGER


SkuStr = Annotated[str, Field(min_length=1, max_length=50)]
NameStr = Annotated[str, Field(min_length=3, max_length=255)]
CategoryStr = Annotated[str, Field(min_length=1, max_length=100)]
PriceDecimal = Annotated[Decimal, Field(max_digits=10, decimal_places=2)]
StockInt = Annotated[int, Field(le=MAX_INTEGER)]

PRICE_NOT_POSITIVE = "Preço deve ser positivo"
STOCK_NEGATIVE = "Estoque não pode ser negativo"


class _ProductFieldRules(BaseModel):
    """Normalisation and range rules shared by create and update payloads."""

    @field_validator("sku", "name", "category", mode="before", check_fields=False)
    @classmethod
    def strip_whitespace(cls, value: object) -> object:
        if isinstance(value, str):
            value = value.strip()
        return value

    @field_validator("price", check_fields=False)
    @classmethod
    def ensure_positive_price(cls, value: Decimal) -> Decimal:
        if value <= 0:
            raise PydanticCustomError("price_not_positive", PRICE_NOT_POSITIVE)
        return value

    @field_validator("stock", check_fields=False)
    @classmethod
    def ensure_non_negative_stock(cls, value: int) -> int:
        if value < 0:
            raise PydanticCustomError("stock_negative", STOCK_NEGATIVE)
        return value


class ProductCreate(_ProductFieldRules):
    """Payload used when creating a product. Every business field is required."""

    sku: SkuStr = Field(description="Unique stock keeping unit identifier")
    name: NameStr = Field(description="Display name for the product")
    price: PriceDecimal = Field(description="Unit price, strictly positive")
    stock: StockInt = Field(description="Units available, zero or more")
    category: CategoryStr = Field(description="Free-form category label")

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"sku": "BEB-0011", "name": "Produto Novo", "price": 10.5, "stock": 100, "category": "bebida"}
            ]
        }
    )


class ProductUpdate(_ProductFieldRules):
    """Payload used when updating a product.

    Every field is optional and absent fields are left untouched. The
    defaults are never validated, so an explicit ``null`` is still rejected
    by the field type.
    """

    sku: SkuStr = Field(default=None, description="Unique stock keeping unit identifier")
    name: NameStr = Field(default=None, description="Display name for the product")
    price: PriceDecimal = Field(default=None, description="Unit price, strictly positive")
    stock: StockInt = Field(default=None, description="Units available, zero or more")
    category: CategoryStr = Field(default=None, description="Free-form category label")

    model_config = ConfigDict(
        json_schema_extra={"examples": [{"name": "Produto Atualizado", "price": 12.5, "stock": 80}]}
    )

    def changes(self) -> dict[str, object]:
        """Return only the fields the client actually sent."""
        return self.model_dump(exclude_unset=True)


class ProductFilter(BaseModel):
    """Query parameters for filtering products."""

    model_config = ConfigDict(populate_by_name=True)

    category: str | None = Field(default=None, description="Exact category match")
    in_stock: Literal["true", "false"] | None = Field(
        default=None,
        alias="inStock",
        description="'true' keeps only products with stock > 0",
    )
    search: str | None = Field(default=None, description="Case-insensitive match on name or SKU")

    @field_validator("category", "search")
    @classmethod
    def blank_as_missing(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            return None
        return value

    @property
    def only_in_stock(self) -> bool:
        return self.in_stock == "true"


class ProductResponse(BaseModel):
    """Response model returned by API endpoints."""

    id: int = Field(description="Database identifier")
    sku: str = Field(description="Unique stock keeping unit identifier")
    name: str = Field(description="Display name for the product")
    price: float = Field(description="Unit price")
    stock: int = Field(description="Units available")
    category: str = Field(description="Category label")
    created_at: datetime = Field(serialization_alias="createdAt", description="Creation timestamp")
    updated_at: datetime = Field(serialization_alias="updatedAt", description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)


class AvailabilityResponse(BaseModel):
    """Whether a SKU can fulfil the requested quantity."""

    sku: str
    quantity: int
    available: bool


class FieldViolationSchema(BaseModel):
    """One entry of a validation error's ``details`` list."""

    field: str = Field(examples=["name"])
    message: str = Field(examples=["Field required"])


class ErrorBody(BaseModel):
    """Inner object of the error envelope."""

    code: str = Field(examples=["NOT_FOUND"])
    message: str = Field(examples=["Produto não encontrado"])
    details: list[FieldViolationSchema] | str | None = Field(
        default=None,
        description="Field violations for VALIDATION_ERROR; error text for 500s outside production",
    )


class ErrorResponse(BaseModel):
    """Envelope used for every non-2xx response."""

    error: ErrorBody
