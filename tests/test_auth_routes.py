from unittest.mock import AsyncMock

import pytest

from app.middlewares.auth import JWTAuthMiddleware, whitelisted_routes
from app.services import oauth_service
from app.services.auth_service import AuthService
from app.services.oauth_service import OAuthProfile


async def test_refresh_requires_token(client):
    response = await client.post("/api/v1/auth/refresh", json={})
    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Refresh token required"


async def test_refresh_rejects_unknown_token(client):
    response = await client.post("/api/v1/auth/refresh", json={"refreshToken": "bogus"})
    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Invalid or expired refresh token"


async def test_refresh_rotates_once(client, db, alice):
    pair = await AuthService.issue_token_pair(db, alice)

    first = await client.post("/api/v1/auth/refresh", json={"refreshToken": pair.refresh_token})
    assert first.status_code == 200
    tokens = first.json()["data"]
    assert set(tokens) == {"accessToken", "refreshToken"}
    assert AuthService.verify_access_token(tokens["accessToken"]).user_id == alice.id

    replay = await client.post("/api/v1/auth/refresh", json={"refreshToken": pair.refresh_token})
    assert replay.status_code == 401


async def test_logout_revokes_refresh_token(client, db, alice):
    pair = await AuthService.issue_token_pair(db, alice)

    response = await client.post("/api/v1/auth/logout", json={"refreshToken": pair.refresh_token})
    assert response.status_code == 200
    assert response.json()["message"] == "Logged out successfully"

    assert await AuthService.verify_refresh_token(db, pair.refresh_token) is None


async def test_failure_route(client):
    response = await client.get("/api/v1/auth/failure")
    assert response.status_code == 401
    assert response.json()["error"]["message"] == "OAuth authentication failed. Please try again."


async def test_google_callback_creates_user_and_tokens(client, monkeypatch):
    profile = OAuthProfile(
        email="dana@example.com",
        name="Dana",
        provider="google",
        provider_id="g-42",
        avatar_url="https://img.example/dana.png",
    )
    monkeypatch.setattr(oauth_service, "fetch_google_profile", AsyncMock(return_value=profile))

    response = await client.get("/api/v1/auth/google/callback", params={"code": "abc", "state": "xyz"})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["user"]["email"] == "dana@example.com"
    assert data["user"]["avatarUrl"] == "https://img.example/dana.png"
    assert data["user"]["provider"] == "google"

    me = await client.get(
        "/api/v1/users/me", headers={"Authorization": f"Bearer {data['tokens']['accessToken']}"}
    )
    assert me.status_code == 200
    assert me.json()["data"]["id"] == data["user"]["id"]


async def test_users_me_update(client, db, alice):
    pair = await AuthService.issue_token_pair(db, alice)
    headers = {"Authorization": f"Bearer {pair.access_token}"}

    response = await client.put("/api/v1/users/me", json={"name": "Alice A"}, headers=headers)

    assert response.status_code == 200
    assert response.json()["data"]["name"] == "Alice A"
    assert response.json()["data"]["email"] == "alice@example.com"


async def test_users_me_requires_auth(client):
    response = await client.get("/api/v1/users/me")
    assert response.status_code == 401


async def test_health_and_unknown_route(client):
    health = await client.get("/health")
    assert health.status_code == 200
    assert health.json()["status"] == "ok"

    missing = await client.get("/api/v1/quotes/nowhere")
    assert missing.status_code == 404
    assert missing.json() == {
        "success": False,
        "error": {"message": "Route not found: /api/v1/quotes/nowhere"},
    }


@pytest.mark.parametrize("path, public", [
    ("/", True),
    ("/docs", True),
    ("/api/v1/quotes", True),
    ("/api/v1/quotes/daily", True),
    ("/api/v1/auth/google/callback", True),
    ("/api/v1/quotesadmin", False),
    ("/api/v1/authority", False),
    ("/docsearch", False),
    ("/api/v1/stripe/webhooks", False),
])
def test_whitelist_matches_whole_path_segments(path, public):
    middleware = JWTAuthMiddleware(app=None, whitelisted_routes=whitelisted_routes)
    assert middleware._is_whitelisted(path) is public


async def test_lookalike_public_prefix_still_needs_a_token(client):
    response = await client.get("/api/v1/quotesadmin")
    assert response.status_code == 401
