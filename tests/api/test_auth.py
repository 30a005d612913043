"""
Tests for session authentication middleware and error rendering.
"""

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient
from unittest.mock import patch, MagicMock

from api.dependencies import get_session_resolver
from api.middleware.auth import get_current_user, get_resolved_session
from api.middleware.errors import register_exception_handlers
from modules.auth.models import ResolvedSession
from modules.auth.service import SessionResolver
from shared.exceptions import ExternalServiceError
from shared.models import AuthenticatedUser

from tests.conftest import (
    TEST_COOKIE_NAME,
    TEST_SUPABASE_URL,
    create_session_cookie,
    create_test_token,
    make_supabase_user,
)


@pytest.fixture
def supabase():
    client = MagicMock()
    client.auth.get_user.return_value = MagicMock(user=make_supabase_user())
    return client


@pytest.fixture
def client(supabase):
    """A minimal app exposing the session dependencies."""
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/session")
    async def session_route(session: ResolvedSession = Depends(get_resolved_session)):
        return {"subject_id": session.subject_id, "bearer": session.bearer_token}

    @app.get("/me")
    async def me_route(user: AuthenticatedUser = Depends(get_current_user)):
        return {"id": user.id, "email": user.email}

    @app.get("/boom")
    async def boom_route():
        raise ExternalServiceError("Upstream down", service="privy")

    with patch("modules.auth.service.get_settings") as mock_settings:
        mock_settings.return_value.supabase_url = TEST_SUPABASE_URL
        mock_settings.return_value.supabase_auth_cookie = None
        resolver = SessionResolver(client=supabase)
    app.dependency_overrides[get_session_resolver] = lambda: resolver

    return TestClient(app)


class TestResolvedSession:

    def test_cookie_session(self, client):
        """Cookie session and bearer token resolve together."""
        client.cookies.set(TEST_COOKIE_NAME, create_session_cookie(create_test_token()))
        response = client.get("/session", headers={"Authorization": "Bearer privy-token"})

        assert response.status_code == 200
        assert response.json() == {"subject_id": "test-user-123", "bearer": "privy-token"}

    def test_bearer_as_session(self, client, auth_headers, supabase):
        """Without a cookie the bearer token is validated as the session."""
        response = client.get("/session", headers=auth_headers)

        assert response.status_code == 200
        supabase.auth.get_user.assert_called_once_with(
            auth_headers["Authorization"].split(" ", 1)[1]
        )

    def test_current_user(self, client, auth_headers):
        response = client.get("/me", headers=auth_headers)
        assert response.json() == {"id": "test-user-123", "email": "test@example.com"}

    def test_missing_auth_header(self, client, supabase):
        """Request without auth header should return 401."""
        response = client.get("/session")

        assert response.status_code == 401
        assert response.json() == {
            "error": "Missing Privy access token",
            "code": "MISSING_CREDENTIAL",
        }
        assert response.headers["WWW-Authenticate"] == "Bearer"
        supabase.auth.get_user.assert_not_called()

    def test_non_bearer_scheme(self, client):
        response = client.get("/session", headers={"Authorization": "Basic abc"})
        assert response.status_code == 401
        assert response.json()["error"] == "Missing Privy access token"

    def test_expired_session(self, client, supabase):
        """Expired tokens are rejected before calling Supabase."""
        token = create_test_token(expired=True)
        response = client.get("/session", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized", "code": "UNAUTHORIZED"}
        supabase.auth.get_user.assert_not_called()

    def test_session_rejected_by_supabase(self, client, auth_headers, supabase):
        supabase.auth.get_user.return_value = MagicMock(user=None)
        response = client.get("/session", headers=auth_headers)
        assert response.status_code == 401
        assert response.json()["error"] == "Unauthorized"


class TestErrorHandler:

    def test_server_error_body(self, client):
        """Server-side failures render with the error message and code."""
        response = client.get("/boom")

        assert response.status_code == 500
        assert response.json() == {"error": "Upstream down", "code": "ExternalServiceError"}
        assert "WWW-Authenticate" not in response.headers
