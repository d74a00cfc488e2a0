"""Tests for the error taxonomy and its HTTP rendering."""

import pytest
from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI, HTTPException
from httpx import ASGITransport, AsyncClient

from src.tracker.core.exceptions import (
    AppError,
    AuthenticationError,
    Conflict,
    DeliveryError,
    EntitlementExceeded,
    NotFound,
    Unauthorized,
    setup_exception_handlers,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def error_app() -> FastAPI:
    """Minimal app whose routes raise each kind of error."""
    app = FastAPI()
    setup_exception_handlers(app)
    app.add_middleware(CorrelationIdMiddleware)

    errors = {
        "not-found": NotFound("Project 1 not found"),
        "unauthorized": Unauthorized("Only the project owner can perform this action"),
        "conflict": Conflict("Invitation was already used"),
        "delivery": DeliveryError("Invitation saved but not delivered"),
        "entitlement": EntitlementExceeded("The FREE plan allows 3 projects"),
        "auth": AuthenticationError("Invalid email or password"),
    }

    @app.get("/raise/{name}")
    async def raise_error(name: str) -> None:
        raise errors[name]

    @app.get("/http")
    async def raise_http() -> None:
        raise HTTPException(status_code=418, detail="teapot")

    @app.get("/boom")
    async def boom() -> None:
        raise RuntimeError("unexpected")

    return app


@pytest.fixture
async def error_client(error_app: FastAPI):
    transport = ASGITransport(app=error_app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


class TestTaxonomy:
    def test_all_errors_share_base(self):
        for cls in (NotFound, Unauthorized, Conflict, DeliveryError, EntitlementExceeded):
            assert issubclass(cls, AppError)

    def test_message_is_kept(self):
        assert Conflict("taken").message == "taken"
        assert str(Conflict("taken")) == "taken"


class TestHandlers:
    @pytest.mark.parametrize(
        ("name", "status_code", "kind"),
        [
            ("not-found", 404, "not_found"),
            ("unauthorized", 403, "unauthorized"),
            ("conflict", 409, "conflict"),
            ("delivery", 502, "delivery_error"),
            ("entitlement", 403, "entitlement_exceeded"),
            ("auth", 401, "authentication_error"),
        ],
    )
    async def test_domain_error_rendering(self, error_client, name, status_code, kind):
        """Domain errors render kind, detail and request_id."""
        response = await error_client.get(f"/raise/{name}")

        assert response.status_code == status_code
        body = response.json()
        assert body["kind"] == kind
        assert body["detail"]
        assert body["request_id"]

    async def test_request_id_echoes_header(self, error_client):
        """The response request_id matches the correlation header."""
        response = await error_client.get("/raise/not-found")

        assert response.json()["request_id"] == response.headers["X-Request-ID"]

    async def test_http_exception(self, error_client):
        response = await error_client.get("/http")

        assert response.status_code == 418
        assert response.json()["kind"] == "http_error"
        assert response.json()["detail"] == "teapot"

    async def test_unknown_route_has_request_id(self, error_client):
        response = await error_client.get("/nope")

        assert response.status_code == 404
        assert response.json()["request_id"]

    async def test_unhandled_exception_is_500(self, error_client):
        """Unexpected errors never leak their message."""
        response = await error_client.get("/boom")

        assert response.status_code == 500
        body = response.json()
        assert body["kind"] == "internal_error"
        assert "unexpected" not in body["detail"]
