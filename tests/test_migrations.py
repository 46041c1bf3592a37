"""Tests for the Alembic upgrade helper."""
from __future__ import annotations

from pathlib import Path

import pytest
from sqlalchemy import create_engine, inspect
from sqlalchemy.exc import IntegrityError

from totem.core.migrations import upgrade_to_head


@pytest.fixture
def migrated_url(tmp_path: Path) -> str:
    url = f"sqlite:///{tmp_path / 'migrated.db'}"
    upgrade_to_head(url)
    return url


def test_upgrade_creates_products_table(migrated_url: str):
    engine = create_engine(migrated_url)
    inspector = inspect(engine)

    assert {"products", "alembic_version"} <= set(inspector.get_table_names())
    columns = {c["name"] for c in inspector.get_columns("products")}
    assert columns == {"id", "sku", "name", "price", "stock", "category", "created_at", "updated_at"}
    assert "ix_products_category" in {i["name"] for i in inspector.get_indexes("products")}
    engine.dispose()


def test_upgrade_is_idempotent(migrated_url: str):
    upgrade_to_head(migrated_url)

    engine = create_engine(migrated_url)
    with engine.connect() as conn:
        revisions = conn.exec_driver_sql("SELECT version_num FROM alembic_version").scalars().all()
    engine.dispose()
    assert revisions == ["001_initial"]


def test_migrated_schema_enforces_unique_sku(migrated_url: str):
    engine = create_engine(migrated_url)
    insert = (
        "INSERT INTO products (sku, name, price, stock, category, created_at, updated_at) "
        "VALUES ('A-1', 'Produto', 1, 1, 'misc', '2026-01-01 00:00:00', '2026-01-01 00:00:00')"
    )
    with engine.begin() as conn:
        conn.exec_driver_sql(insert)

    with pytest.raises(IntegrityError):
        with engine.begin() as conn:
            conn.exec_driver_sql(insert)
    engine.dispose()
