"""
Tab Stash Controller
"""
from typing import Dict, Optional

from sqlalchemy import desc
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.api.v1.controllers.references import check_references
from app.core.logger import get_logger
from app.exceptions.errors import ApplicationException, NotFoundError, internal_error
from app.models.tab_stash import TabStash
from app.schemas.base_schemas import success_response
from app.schemas.tabstash_schemas import TabStashCreate, TabStashUpdate, TabStashResponse

logger = get_logger("tabstash_controller")


class TabStashController:

    @staticmethod
    async def _get_owned(db: AsyncSession, user_id: str, stash_id: str) -> TabStash:
        result = await db.execute(
            select(TabStash).where(TabStash.id == stash_id, TabStash.user_id == user_id)
        )
        stash = result.scalar_one_or_none()
        if stash is None:
            raise NotFoundError("Tab stash not found")
        return stash

    @staticmethod
    async def create_stash(db: AsyncSession, user_id: str, payload: TabStashCreate) -> Dict:
        try:
            await check_references(db, user_id, workspace_id=payload.workspace_id)
            stash = TabStash(
                user_id=user_id,
                workspace_id=payload.workspace_id,
                name=payload.name,
                tabs=[tab.model_dump(by_alias=True) for tab in payload.tabs],
            )
            db.add(stash)
            await db.commit()
            await db.refresh(stash)
            return success_response(TabStashResponse.model_validate(stash))
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error creating tab stash: {e}")
            raise internal_error("Failed to create tab stash")

    @staticmethod
    async def list_stashes(db: AsyncSession, user_id: str, workspace_id: Optional[str] = None) -> Dict:
        try:
            stmt = select(TabStash).where(TabStash.user_id == user_id)
            if workspace_id:
                stmt = stmt.where(TabStash.workspace_id == workspace_id)
            result = await db.execute(stmt.order_by(desc(TabStash.created_at)))
            return success_response([TabStashResponse.model_validate(s) for s in result.scalars().all()])
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error listing tab stashes: {e}")
            raise internal_error("Failed to get tab stashes")

    @staticmethod
    async def get_stash(db: AsyncSession, user_id: str, stash_id: str) -> Dict:
        stash = await TabStashController._get_owned(db, user_id, stash_id)
        return success_response(TabStashResponse.model_validate(stash))

    @staticmethod
    async def update_stash(db: AsyncSession, user_id: str, stash_id: str, payload: TabStashUpdate) -> Dict:
        try:
            stash = await TabStashController._get_owned(db, user_id, stash_id)
            updates = payload.model_dump(exclude_unset=True, exclude={"tabs"})
            await check_references(db, user_id, workspace_id=updates.get("workspace_id"))
            for field, value in updates.items():
                setattr(stash, field, value)
            if payload.tabs is not None:
                stash.tabs = [tab.model_dump(by_alias=True) for tab in payload.tabs]
            await db.commit()
            await db.refresh(stash)
            return success_response(TabStashResponse.model_validate(stash))
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error updating tab stash {stash_id}: {e}")
            raise internal_error("Failed to update tab stash")

    @staticmethod
    async def delete_stash(db: AsyncSession, user_id: str, stash_id: str) -> Dict:
        try:
            stash = await TabStashController._get_owned(db, user_id, stash_id)
            await db.delete(stash)
            await db.commit()
            return success_response(message="Tab stash deleted successfully")
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error deleting tab stash {stash_id}: {e}")
            raise internal_error("Failed to delete tab stash")
