from datetime import datetime, timedelta
from unittest.mock import AsyncMock

from sqlalchemy import update
from sqlalchemy.future import select

from app.database.connection import AsyncSessionLocal
from app.models.refresh_token import RefreshToken
from app.models.user import User
from app.services.auth_service import AuthService
from tests.conftest import create_user


async def test_access_token_round_trip(db):
    user = await create_user(db)
    pair = await AuthService.issue_token_pair(db, user)

    payload = AuthService.verify_access_token(pair.access_token)
    assert payload is not None
    assert payload.user_id == user.id
    assert payload.email == user.email


async def test_access_token_rejects_garbage_and_refresh_tokens(db):
    user = await create_user(db)
    pair = await AuthService.issue_token_pair(db, user)

    assert AuthService.verify_access_token("not-a-jwt") is None
    # Signed with the refresh secret
    assert AuthService.verify_access_token(pair.refresh_token) is None


async def test_issued_pairs_are_unique(db):
    user = await create_user(db)
    first = await AuthService.issue_token_pair(db, user)
    second = await AuthService.issue_token_pair(db, user)
    assert first.refresh_token != second.refresh_token


async def test_verify_refresh_token_requires_stored_row(db):
    user = await create_user(db)
    pair = await AuthService.issue_token_pair(db, user)

    assert await AuthService.verify_refresh_token(db, pair.refresh_token) is not None

    await AuthService.revoke_refresh_token(db, pair.refresh_token)
    assert await AuthService.verify_refresh_token(db, pair.refresh_token) is None


async def test_verify_refresh_token_honours_stored_expiry(db):
    user = await create_user(db)
    pair = await AuthService.issue_token_pair(db, user)

    await db.execute(
        update(RefreshToken)
        .where(RefreshToken.token == pair.refresh_token)
        .values(expires_at=datetime.utcnow() - timedelta(minutes=1))
    )
    await db.commit()

    assert await AuthService.verify_refresh_token(db, pair.refresh_token) is None


async def test_rotation_invalidates_old_token(db):
    user = await create_user(db)
    pair = await AuthService.issue_token_pair(db, user)

    rotated = await AuthService.rotate_refresh_token(db, pair.refresh_token)
    assert rotated is not None
    rotated_user, new_pair = rotated
    assert rotated_user.id == user.id
    assert new_pair.refresh_token != pair.refresh_token

    assert await AuthService.verify_refresh_token(db, pair.refresh_token) is None
    assert await AuthService.verify_refresh_token(db, new_pair.refresh_token) is not None
    assert await AuthService.rotate_refresh_token(db, pair.refresh_token) is None


async def test_racing_rotations_issue_one_pair(db, monkeypatch):
    user = await create_user(db)
    pair = await AuthService.issue_token_pair(db, user)

    async with AsyncSessionLocal() as first, AsyncSessionLocal() as second:
        # Both requests get past verification before either deletes the row
        first_payload = await AuthService.verify_refresh_token(first, pair.refresh_token)
        second_payload = await AuthService.verify_refresh_token(second, pair.refresh_token)
        assert first_payload is not None and second_payload is not None

        winner = await AuthService.rotate_refresh_token(first, pair.refresh_token)
        monkeypatch.setattr(AuthService, "verify_refresh_token", AsyncMock(return_value=second_payload))
        loser = await AuthService.rotate_refresh_token(second, pair.refresh_token)

    assert winner is not None
    assert loser is None

    monkeypatch.undo()
    stored = await db.execute(select(RefreshToken).where(RefreshToken.user_id == user.id))
    tokens = [row.token for row in stored.scalars().all()]
    assert tokens == [winner[1].refresh_token]


async def test_revoke_all_for_user(db):
    user = await create_user(db)
    await AuthService.issue_token_pair(db, user)
    await AuthService.issue_token_pair(db, user)

    await AuthService.revoke_all_for_user(db, user.id)

    result = await db.execute(select(RefreshToken).where(RefreshToken.user_id == user.id))
    assert result.scalars().all() == []


async def test_find_or_create_user_merges_by_email(db):
    created = await AuthService.find_or_create_user(
        db, email="carol@example.com", name="Carol", provider="google", provider_id="g-1"
    )
    again = await AuthService.find_or_create_user(
        db, email="carol@example.com", name="Carol C", provider="github", provider_id="gh-9",
        avatar_url="https://avatars.example/carol.png",
    )

    assert again.id == created.id
    assert again.provider == "github"
    assert again.name == "Carol C"
    assert again.avatar_url == "https://avatars.example/carol.png"

    result = await db.execute(select(User).where(User.email == "carol@example.com"))
    assert len(result.scalars().all()) == 1
