"""
Workspace Controller
"""
from typing import Dict, Optional

from sqlalchemy import asc, desc, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.core.logger import get_logger
from app.exceptions.errors import (
    ApplicationException, NotFoundError, ValidationError, internal_error
)
from app.models.workspace import Workspace
from app.schemas.base_schemas import success_response
from app.schemas.workspace_schemas import WorkspaceCreate, WorkspaceUpdate, WorkspaceResponse

logger = get_logger("workspace_controller")


async def _unset_other_defaults(db: AsyncSession, user_id: str, keep_id: Optional[str] = None) -> None:
    stmt = update(Workspace).where(Workspace.user_id == user_id, Workspace.is_default.is_(True))
    if keep_id:
        stmt = stmt.where(Workspace.id != keep_id)
    await db.execute(stmt.values(is_default=False))


class WorkspaceController:
    """
    A user has at most one default workspace. Claiming the default flag
    clears it on the others inside the same commit as the write.
    """

    @staticmethod
    async def _get_owned(db: AsyncSession, user_id: str, workspace_id: str) -> Workspace:
        result = await db.execute(
            select(Workspace).where(Workspace.id == workspace_id, Workspace.user_id == user_id)
        )
        workspace = result.scalar_one_or_none()
        if workspace is None:
            raise NotFoundError("Workspace not found")
        return workspace

    @staticmethod
    async def create_workspace(db: AsyncSession, user_id: str, payload: WorkspaceCreate) -> Dict:
        try:
            if payload.is_default:
                await _unset_other_defaults(db, user_id)
            workspace = Workspace(user_id=user_id, name=payload.name, is_default=payload.is_default)
            db.add(workspace)
            await db.commit()
            await db.refresh(workspace)
            logger.info(f"✅ Workspace {workspace.id} created for user {user_id}")
            return success_response(WorkspaceResponse.model_validate(workspace))
        except ApplicationException:
            raise
        except Exception as e:
            await db.rollback()
            logger.error(f"❌ Error creating workspace: {e}")
            raise internal_error("Failed to create workspace")

    @staticmethod
    async def list_workspaces(db: AsyncSession, user_id: str) -> Dict:
        try:
            result = await db.execute(
                select(Workspace)
                .where(Workspace.user_id == user_id)
                .order_by(desc(Workspace.is_default), asc(Workspace.created_at))
            )
            return success_response([WorkspaceResponse.model_validate(w) for w in result.scalars().all()])
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error listing workspaces: {e}")
            raise internal_error("Failed to get workspaces")

    @staticmethod
    async def get_workspace(db: AsyncSession, user_id: str, workspace_id: str) -> Dict:
        workspace = await WorkspaceController._get_owned(db, user_id, workspace_id)
        return success_response(WorkspaceResponse.model_validate(workspace))

    @staticmethod
    async def update_workspace(
        db: AsyncSession, user_id: str, workspace_id: str, payload: WorkspaceUpdate
    ) -> Dict:
        try:
            workspace = await WorkspaceController._get_owned(db, user_id, workspace_id)
            updates = payload.model_dump(exclude_unset=True)
            if updates.get("is_default"):
                await _unset_other_defaults(db, user_id, keep_id=workspace.id)
            for field, value in updates.items():
                if value is not None:
                    setattr(workspace, field, value)
            await db.commit()
            await db.refresh(workspace)
            return success_response(WorkspaceResponse.model_validate(workspace))
        except ApplicationException:
            raise
        except Exception as e:
            await db.rollback()
            logger.error(f"❌ Error updating workspace {workspace_id}: {e}")
            raise internal_error("Failed to update workspace")

    @staticmethod
    async def delete_workspace(db: AsyncSession, user_id: str, workspace_id: str) -> Dict:
        try:
            workspace = await WorkspaceController._get_owned(db, user_id, workspace_id)
            if workspace.is_default:
                raise ValidationError("Cannot delete default workspace")
            await db.delete(workspace)
            await db.commit()
            return success_response(message="Workspace deleted successfully")
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error deleting workspace {workspace_id}: {e}")
            raise internal_error("Failed to delete workspace")
