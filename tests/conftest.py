import os
import tempfile
from datetime import datetime, timedelta

# Settings are read at import time, so the environment has to be ready first
_TMP = tempfile.mkdtemp(prefix="momentum-tests-")
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_DIR"] = os.path.join(_TMP, "logs")
os.environ["UPLOAD_DIR"] = os.path.join(_TMP, "uploads")
os.environ["JWT_SECRET"] = "test-access-secret"
os.environ["JWT_REFRESH_SECRET"] = "test-refresh-secret"
os.environ["SESSION_SECRET"] = "test-session-secret"
os.environ["STRIPE_WEBHOOK_SECRET"] = "whsec_test"
os.environ["STRIPE_SECRET_KEY"] = "sk_test_dummy"
os.environ["STORAGE_TYPE"] = "local"
os.environ["ENVIRONMENT"] = "test"

import pytest
from httpx import ASGITransport, AsyncClient

from app import models  # noqa: F401
from app.database.base import Base
from app.database.connection import AsyncSessionLocal, engine
from app.main import app
from app.models.subscription import Subscription
from app.models.user import User
from app.services.auth_service import AuthService
from app.services.pro_cache import clear_pro_cache


@pytest.fixture(autouse=True)
async def setup_db():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    clear_pro_cache()
    yield
    clear_pro_cache()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def db():
    async with AsyncSessionLocal() as session:
        yield session


@pytest.fixture
async def client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


async def create_user(db, email="alice@example.com", name="Alice", provider="google") -> User:
    user = User(email=email, name=name, provider=provider, provider_id=f"{provider}-{email}")
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def grant_pro(db, user: User, period_days: int = 30) -> Subscription:
    now = datetime.utcnow()
    subscription = Subscription(
        user_id=user.id,
        plan="price_pro",
        status="active",
        current_period_start=now,
        current_period_end=now + timedelta(days=period_days),
    )
    db.add(subscription)
    await db.commit()
    await db.refresh(subscription)
    clear_pro_cache(user.id)
    return subscription


async def auth_headers(db, user: User) -> dict:
    pair = await AuthService.issue_token_pair(db, user)
    return {"Authorization": f"Bearer {pair.access_token}"}


@pytest.fixture
async def alice(db):
    return await create_user(db, "alice@example.com", "Alice")


@pytest.fixture
async def bob(db):
    return await create_user(db, "bob@example.com", "Bob", provider="github")


@pytest.fixture
async def pro_headers(db, alice):
    await grant_pro(db, alice)
    return await auth_headers(db, alice)


@pytest.fixture
async def bob_pro_headers(db, bob):
    await grant_pro(db, bob)
    return await auth_headers(db, bob)
