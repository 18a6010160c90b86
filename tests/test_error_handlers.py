"""
Tests for error envelopes
Domain errors map to status codes and never leak internals outside dev
"""
from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient

from film_distribution.config import config
from film_distribution.exceptions import (
    ConstraintViolation,
    StoreFailure,
    UpstreamFailure,
    error_detail,
    register_exception_handlers,
)
from film_distribution.logging_config import RequestIDMiddleware


def make_client() -> TestClient:
    app = FastAPI()
    app.add_middleware(RequestIDMiddleware)
    register_exception_handlers(app)

    @app.get("/conflict")
    async def conflict():
        raise ConstraintViolation("Username already exists", constraint="users.username")

    @app.get("/store-down")
    async def store_down():
        raise StoreFailure("UserRepository.create", ConnectionError("could not connect to postgresql://u:p@db/app"))

    @app.get("/upstream")
    async def upstream():
        raise UpstreamFailure("stripe", "Payment provider unavailable")

    @app.get("/nested")
    async def nested():
        raise HTTPException(status_code=400, detail=error_detail("Invalid amount"))

    @app.get("/boom")
    async def boom():
        raise RuntimeError("secret internals at /srv/app/storage.py")

    return TestClient(app, raise_server_exceptions=False)


class TestErrorEnvelopes:

    def test_constraint_violation_is_409(self):
        response = make_client().get("/conflict")

        assert response.status_code == 409
        assert response.json()["message"] == "Username already exists"
        assert response.json()["code"] == "CONFLICT"

    def test_store_failure_is_503_without_details(self):
        response = make_client().get("/store-down")

        assert response.status_code == 503
        assert response.json()["message"] == "Database temporarily unavailable"
        assert "postgresql://" not in response.text

    def test_upstream_failure_uses_nested_envelope(self):
        response = make_client().get("/upstream")

        assert response.status_code == 502
        assert response.json()["error"]["message"] == "Payment provider unavailable"

    def test_nested_http_error(self):
        response = make_client().get("/nested", headers={"X-Request-ID": "req-7"})

        assert response.status_code == 400
        assert response.json()["error"] == {"message": "Invalid amount", "code": "BAD_REQUEST"}
        assert response.json()["request_id"] == "req-7"

    def test_unexpected_error_hides_details_outside_dev(self):
        assert not config.is_dev

        response = make_client().get("/boom")

        assert response.status_code == 500
        assert response.json()["message"] == "Internal server error"
        assert "/srv/app" not in response.text
