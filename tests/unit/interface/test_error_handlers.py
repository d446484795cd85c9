"""Unit tests for the API error handlers."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from wildlanka.config import Settings
from wildlanka.domain.error import (
    AuthenticationRequiredError,
    NotFoundError,
    PersistenceError,
)
from wildlanka.interface.error import APIError, register_error_handlers


def build_client(environment: str) -> TestClient:
    """App whose routes raise each error the handlers know about."""
    app = FastAPI()
    app.state.settings = Settings(environment=environment)
    register_error_handlers(app)

    @app.get("/unauthenticated")
    async def unauthenticated():
        raise AuthenticationRequiredError()

    @app.get("/missing")
    async def missing():
        raise NotFoundError("Account", "auth0|nobody")

    @app.get("/storage")
    async def storage():
        raise PersistenceError("relation \"accounts\" does not exist")

    @app.get("/update")
    async def update():
        raise APIError(
            "Failed to update profile", cause=PersistenceError("deadlock detected")
        )

    return TestClient(app, raise_server_exceptions=False)


class TestErrorHandlers:
    """Tests for the JSON error bodies."""

    def test_authentication_required(self):
        response = build_client("production").get("/unauthenticated")

        assert response.status_code == 401
        assert response.json() == {"message": "Authentication required"}

    def test_not_found(self):
        response = build_client("production").get("/missing")

        assert response.status_code == 404
        assert response.json() == {"message": "User not found"}

    def test_storage_failure_is_redacted_in_production(self):
        response = build_client("production").get("/storage")

        assert response.status_code == 500
        assert response.json() == {
            "message": "Internal server error",
            "error": "An unexpected error occurred",
        }

    def test_storage_failure_detail_in_development(self):
        response = build_client("development").get("/storage")

        assert response.status_code == 500
        assert response.json() == {
            "message": "Internal server error",
            "error": 'relation "accounts" does not exist',
        }

    @pytest.mark.parametrize(
        "environment,error",
        [
            ("production", "An unexpected error occurred"),
            ("staging", "An unexpected error occurred"),
            ("test", "deadlock detected"),
        ],
    )
    def test_profile_update_failure(self, environment, error):
        response = build_client(environment).get("/update")

        assert response.status_code == 500
        assert response.json() == {"message": "Failed to update profile", "error": error}
