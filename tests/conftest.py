"""Pytest configuration and shared fixtures."""
from __future__ import annotations

import os

# Settings are cached on first import, so the test environment must be in place first.
os.environ["ENVIRONMENT"] = "test"
os.environ.setdefault("DATABASE_URL", "sqlite://")

from typing import Any, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from totem.core.db import get_session
from totem.main import app
from totem.models import Base
from totem.schemas.product import ProductCreate
from totem.services.product_repository import ProductRepository

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite://")


@pytest.fixture
def db_engine() -> Generator[Engine, None, None]:
    """Create a fresh schema for every test (in-memory SQLite by default)."""
    kwargs: dict[str, Any] = {"future": True}
    if TEST_DATABASE_URL.startswith("sqlite"):
        kwargs.update(connect_args={"check_same_thread": False}, poolclass=StaticPool)
    engine = create_engine(TEST_DATABASE_URL, **kwargs)

    Base.metadata.create_all(engine)
    yield engine

    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db_session(db_engine: Engine) -> Generator[Session, None, None]:
    """Provide a database session bound to the test engine."""
    SessionLocal = sessionmaker(bind=db_engine, autoflush=False, autocommit=False, expire_on_commit=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def repository(db_session: Session) -> ProductRepository:
    return ProductRepository(db_session)


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """Create a FastAPI test client with overridden database session."""

    def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def make_product(**overrides: Any) -> ProductCreate:
    """Build a valid ProductCreate, overriding any field."""
    data: dict[str, Any] = {
        "sku": "BEB-0001",
        "name": "Coca-Cola 350ml",
        "price": 5.5,
        "stock": 25,
        "category": "refrigerante",
    }
    data.update(overrides)
    return ProductCreate(**data)


@pytest.fixture
def product_factory(repository: ProductRepository):
    """Insert products straight through the repository."""

    def _create(**overrides: Any):
        return repository.create(make_product(**overrides))

    return _create
