#!/usr/bin/env python3
"""Recreate the products table and load the reference kiosk catalog."""
import logging
import sys

from totem.core.config import get_settings
from totem.core.db import get_engine, session_scope
from totem.core.errors import ValidationError
from totem.models import Base
from totem.services.product_repository import ProductRepository
from totem.services.validation import validate_create

logger = logging.getLogger(__name__)
logging.basicConfig(
    level=logging.INFO,
    format="[%(asctime)s] %(levelname)s - %(message)s",
)

SEED_PRODUCTS = [
    {"sku": "BEB-0001", "name": "Coca-Cola 350ml", "price": 5.5, "stock": 25, "category": "refrigerante"},
    {"sku": "BEB-0002", "name": "Guaraná Antarctica 350ml", "price": 4.5, "stock": 30, "category": "refrigerante"},
    {"sku": "BEB-0003", "name": "Água Mineral 500ml", "price": 3.0, "stock": 50, "category": "agua"},
    {"sku": "BEB-0004", "name": "Suco de Laranja 300ml", "price": 6.0, "stock": 0, "category": "suco"},
    {"sku": "BEB-0005", "name": "Cerveja Heineken 350ml", "price": 8.0, "stock": 40, "category": "cerveja"},
    {"sku": "BEB-0006", "name": "Energético Red Bull 250ml", "price": 12.0, "stock": 15, "category": "energetico"},
    {"sku": "BEB-0007", "name": "Pepsi 350ml", "price": 5.0, "stock": 20, "category": "refrigerante"},
    {"sku": "BEB-0008", "name": "Água de Coco 330ml", "price": 4.0, "stock": 35, "category": "agua"},
    {"sku": "BEB-0009", "name": "Suco de Uva Integral 1L", "price": 12.0, "stock": 10, "category": "suco"},
    {"sku": "BEB-0010", "name": "Cerveja Budweiser 350ml", "price": 7.5, "stock": 30, "category": "cerveja"},
]


def seed() -> int:
    """Drop and recreate the schema, then insert ``SEED_PRODUCTS``.

    Returns:
        Number of products inserted
    """
    logger.info(f"Seeding database at {get_settings().database_url}")
    engine = get_engine()
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)

    payloads = [validate_create(raw) for raw in SEED_PRODUCTS]
    with session_scope(engine) as session:
        repository = ProductRepository(session)
        for payload in payloads:
            repository.create(payload)
        total = repository.count()

    logger.info(f"✓ Created {total} products")
    return total


def main() -> int:
    try:
        seed()
    except ValidationError as e:
        logger.error(f"✗ Seed data is invalid: {e.details}")
        return 1
    except Exception as e:
        logger.error(f"✗ Error seeding database: {e}", exc_info=True)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
