from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import AsyncAdaptedQueuePool, StaticPool
from app.core.config import settings
from app.database.base import Base
from app.core.logger import get_logger

logger = get_logger("database")

DATABASE_URL = settings.DATABASE_URL


def _build_engine(url: str):
    # SQLite (tests, local hacking) shares one connection so in-memory databases survive
    if url.startswith("sqlite"):
        return create_async_engine(
            url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            future=True
        )

    ssl_config = {} if settings.IS_DEVELOPMENT else {"ssl": "require"}
    return create_async_engine(
        url,
        echo=False,
        connect_args={
            **ssl_config,
            "server_settings": {
                "application_name": "momentum_backend",
                "jit": "off",
            },
            "command_timeout": 30,
        },
        poolclass=AsyncAdaptedQueuePool,
        pool_size=10,            # Keep 10 connections ready
        max_overflow=20,         # Allow 20 additional connections under load
        pool_timeout=30,         # Wait up to 30s for a connection
        pool_recycle=1800,       # Recycle connections every 30 minutes
        pool_pre_ping=True,      # Verify connections are alive before using
        future=True
    )


engine = _build_engine(DATABASE_URL)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
    autocommit=False
)

async def get_db():
    """Dependency for getting a database session."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

async def init_models():
    """Create any missing tables on startup; schema changes go through Alembic."""
    from app import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Application database tables ensured.")
