"""
Sync Service
Versioned per-type blobs, one row per (user, data type, workspace).
Conflicts resolve as last-write-wins with a version bump.
"""

from typing import List, Optional

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.core.logger import get_logger
from app.models.sync_data import SyncData

logger = get_logger("sync_service")


def _scope(stmt, user_id: str, workspace_id: Optional[str]):
    stmt = stmt.where(SyncData.user_id == user_id)
    if workspace_id:
        return stmt.where(SyncData.workspace_id == workspace_id)
    return stmt.where(SyncData.workspace_id.is_(None))


def resolve_version(incoming: int, stored: Optional[int]) -> int:
    """An incoming version that does not move past the stored one becomes stored + 1."""
    if stored is not None and incoming <= stored:
        return stored + 1
    return incoming


class SyncService:

    @staticmethod
    async def get_data(
        db: AsyncSession, user_id: str, data_type: str, workspace_id: Optional[str] = None
    ) -> Optional[SyncData]:
        result = await db.execute(
            _scope(select(SyncData), user_id, workspace_id).where(SyncData.data_type == data_type)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def get_all_data(
        db: AsyncSession, user_id: str, workspace_id: Optional[str] = None
    ) -> List[SyncData]:
        result = await db.execute(
            _scope(select(SyncData), user_id, workspace_id).order_by(SyncData.data_type)
        )
        return list(result.scalars().all())

    @staticmethod
    async def sync_data(
        db: AsyncSession,
        user_id: str,
        data_type: str,
        data,
        version: int,
        workspace_id: Optional[str] = None,
    ) -> SyncData:
        existing = await SyncService.get_data(db, user_id, data_type, workspace_id)

        new_version = resolve_version(version, existing.version if existing else None)
        if new_version != version:
            logger.warning(f"Version conflict for {data_type}, incrementing version to {new_version}")

        if existing is None:
            existing = SyncData(
                user_id=user_id,
                workspace_id=workspace_id,
                data_type=data_type,
                data=data,
                version=new_version,
            )
            db.add(existing)
        else:
            existing.data = data
            existing.version = new_version

        await db.commit()
        await db.refresh(existing)
        return existing

    @staticmethod
    async def delete_data(
        db: AsyncSession, user_id: str, data_type: str, workspace_id: Optional[str] = None
    ) -> bool:
        result = await db.execute(
            _scope(delete(SyncData), user_id, workspace_id).where(SyncData.data_type == data_type)
        )
        await db.commit()
        return result.rowcount > 0
