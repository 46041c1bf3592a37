"""Tests for the global error responder."""
from __future__ import annotations

from typing import Generator

import pytest
from fastapi import FastAPI, status
from fastapi.testclient import TestClient

from totem.api.errors import error_body, render_app_error
from totem.api.products import get_product_service
from totem.core.config import Settings
from totem.core.errors import ConflictError, FieldViolation, NotFoundError, ValidationError
from totem.main import create_app


class ExplodingService:
    """Stands in for ProductService and fails in an unexpected way."""

    def get_by_id(self, product_id: int):
        raise RuntimeError("database exploded")


def build_app(environment: str) -> FastAPI:
    app = create_app(Settings(environment=environment, database_url="sqlite://", log_to_file=False))
    app.dependency_overrides[get_product_service] = ExplodingService
    return app


@pytest.fixture
def development_client() -> Generator[TestClient, None, None]:
    with TestClient(build_app("development"), raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def production_client() -> Generator[TestClient, None, None]:
    with TestClient(build_app("production"), raise_server_exceptions=False) as test_client:
        yield test_client


class TestRendering:
    """Rendering of domain errors into the envelope."""

    def test_error_body_omits_missing_details(self) -> None:
        assert error_body("NOT_FOUND", "x") == {"error": {"code": "NOT_FOUND", "message": "x"}}

    def test_not_found(self) -> None:
        response = render_app_error(NotFoundError("Produto"))

        assert response.status_code == 404
        assert response.body == (
            '{"error":{"code":"NOT_FOUND","message":"Produto não encontrado"}}'.encode()
        )

    def test_conflict_has_no_details(self) -> None:
        response = render_app_error(ConflictError("dup"))

        assert response.status_code == 409
        assert b"details" not in response.body

    def test_validation_keeps_violation_order(self) -> None:
        error = ValidationError(
            "Validação falhou",
            [FieldViolation("sku", "Field required"), FieldViolation("price", "Preço deve ser positivo")],
        )

        response = render_app_error(error)

        assert response.status_code == 400
        assert error.details == [
            {"field": "sku", "message": "Field required"},
            {"field": "price", "message": "Preço deve ser positivo"},
        ]

    def test_validation_with_no_violations_still_has_details(self) -> None:
        assert ValidationError("Validação falhou").details == []


class TestUnclassifiedErrors:
    """Errors that are not AppError subclasses."""

    def test_development_exposes_message(self, development_client: TestClient) -> None:
        response = development_client.get("/products/1")

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == {
            "error": {
                "code": "INTERNAL_SERVER_ERROR",
                "message": "Erro interno do servidor",
                "details": "database exploded",
            }
        }

    def test_production_hides_message(self, production_client: TestClient) -> None:
        response = production_client.get("/products/1")

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == {
            "error": {"code": "INTERNAL_SERVER_ERROR", "message": "Erro interno do servidor"}
        }


class TestUnknownRoutes:
    """Requests that match no route."""

    def test_unknown_path(self, client: TestClient) -> None:
        response = client.get("/non-existent-route")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"error": {"code": "NOT_FOUND", "message": "Rota não encontrada"}}

    def test_unsupported_method(self, client: TestClient) -> None:
        response = client.patch("/products/1", json={})

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"error": {"code": "NOT_FOUND", "message": "Rota não encontrada"}}
