"""Product catalog API endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from totem.core.db import get_session
from totem.core.errors import NotFoundError
from totem.schemas.product import (
    AvailabilityResponse,
    ErrorResponse,
    ProductCreate,
    ProductResponse,
    ProductUpdate,
)
from totem.services.product_repository import ProductRepository
from totem.services.product_service import PRODUCT_RESOURCE, ProductService
from totem.services.validation import validate_filters

router = APIRouter(prefix="/products", tags=["Products"])

NOT_FOUND_RESPONSE = {404: {"model": ErrorResponse, "description": "Product not found"}}
VALIDATION_RESPONSE = {400: {"model": ErrorResponse, "description": "Invalid input"}}
CONFLICT_RESPONSE = {409: {"model": ErrorResponse, "description": "SKU already in use"}}


def get_product_repository(session: Session = Depends(get_session)) -> ProductRepository:
    """Dependency to get ProductRepository instance."""
    return ProductRepository(session)


def get_product_service(repository: ProductRepository = Depends(get_product_repository)) -> ProductService:
    """Dependency to get a ProductService bound to the request's session."""
    return ProductService(repository)


def parse_product_id(product_id: str = Path(description="Product database ID")) -> int:
    """Read the path ID. A segment that is not a plain number names no product."""
    if not (product_id.isascii() and product_id.isdigit()):
        raise NotFoundError(PRODUCT_RESOURCE)
    return int(product_id)


@router.get(
    "",
    response_model=list[ProductResponse],
    status_code=status.HTTP_200_OK,
    summary="List all products",
    description=(
        "Retrieve every product, optionally filtered by exact category, stock availability "
        "and a case-insensitive search on name or SKU. Results are ordered by name."
    ),
    responses=VALIDATION_RESPONSE,
)
def list_products(
    category: str | None = Query(default=None, description="Filter by category (exact match)"),
    in_stock: str | None = Query(
        default=None,
        alias="inStock",
        description="'true' to keep only products with stock > 0; 'false' applies no filter",
    ),
    search: str | None = Query(default=None, description="Search in name or SKU (case-insensitive)"),
    service: ProductService = Depends(get_product_service),
) -> list[ProductResponse]:
    """
    List products with optional filters.

    Args:
        category: Optional exact category filter
        in_stock: Optional "true"/"false" stock filter
        search: Optional substring matched against name and SKU
        service: ProductService instance (injected)

    Returns:
        Matching products ordered by name
    """
    filters = validate_filters({"category": category, "inStock": in_stock, "search": search})
    return [ProductResponse.model_validate(p) for p in service.get_all(filters)]


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new product",
    description="Create a new product. SKU must be unique (case-sensitive).",
    responses={**VALIDATION_RESPONSE, **CONFLICT_RESPONSE},
)
def create_product(
    product: ProductCreate,
    service: ProductService = Depends(get_product_service),
) -> ProductResponse:
    """
    Create a new product.

    Args:
        product: Validated ProductCreate payload
        service: ProductService instance (injected)

    Returns:
        Created ProductResponse

    Raises:
        ConflictError: 409 if SKU already exists
    """
    return ProductResponse.model_validate(service.create(product))


@router.get(
    "/sku/{sku}",
    response_model=ProductResponse,
    summary="Get product by SKU",
    responses=NOT_FOUND_RESPONSE,
)
def get_product_by_sku(
    sku: str,
    service: ProductService = Depends(get_product_service),
) -> ProductResponse:
    """Look a product up by its exact SKU."""
    return ProductResponse.model_validate(service.get_by_sku(sku))


@router.get(
    "/sku/{sku}/availability",
    response_model=AvailabilityResponse,
    summary="Check stock availability",
    description="Tell whether the SKU exists with at least `quantity` units. Unknown SKUs are unavailable.",
    responses=VALIDATION_RESPONSE,
)
def check_availability(
    sku: str,
    quantity: int = Query(default=1, ge=1, description="Units requested"),
    service: ProductService = Depends(get_product_service),
) -> AvailabilityResponse:
    return AvailabilityResponse(sku=sku, quantity=quantity, available=service.is_available(sku, quantity))


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    summary="Get product by ID",
    responses=NOT_FOUND_RESPONSE,
)
def get_product(
    product_id: int = Depends(parse_product_id),
    service: ProductService = Depends(get_product_service),
) -> ProductResponse:
    """
    Get a product by ID.

    Raises:
        NotFoundError: 404 if product not found
    """
    return ProductResponse.model_validate(service.get_by_id(product_id))


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    summary="Update a product",
    description=(
        "Partially update a product. Only the fields present in the body are changed. "
        "A new SKU must not belong to another product."
    ),
    responses={**NOT_FOUND_RESPONSE, **VALIDATION_RESPONSE, **CONFLICT_RESPONSE},
)
def update_product(
    product: ProductUpdate,
    product_id: int = Depends(parse_product_id),
    service: ProductService = Depends(get_product_service),
) -> ProductResponse:
    """
    Update a product by ID.

    Raises:
        NotFoundError: 404 if product not found
        ConflictError: 409 if the new SKU is taken
    """
    return ProductResponse.model_validate(service.update(product_id, product))


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a product by ID",
    description="Delete a product by its database ID. Returns 204 No Content on success.",
    responses=NOT_FOUND_RESPONSE,
)
def delete_product(
    product_id: int = Depends(parse_product_id),
    service: ProductService = Depends(get_product_service),
) -> None:
    service.delete(product_id)
