"""
Ownership checks for ids a payload points at.

A user may only attach records to their own workspaces and tasks; a foreign
or unknown id is reported as 404, the same as a direct lookup would be.
"""
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.exceptions.errors import NotFoundError
from app.models.task import Task
from app.models.workspace import Workspace


async def _owns(db: AsyncSession, model, record_id: str, user_id: str) -> bool:
    result = await db.execute(
        select(model.id).where(model.id == record_id, model.user_id == user_id)
    )
    return result.scalar_one_or_none() is not None


async def check_references(
    db: AsyncSession,
    user_id: str,
    workspace_id: Optional[str] = None,
    task_id: Optional[str] = None,
    parent_task_id: Optional[str] = None,
) -> None:
    if workspace_id and not await _owns(db, Workspace, workspace_id, user_id):
        raise NotFoundError("Workspace not found")
    if task_id and not await _owns(db, Task, task_id, user_id):
        raise NotFoundError("Task not found")
    if parent_task_id and not await _owns(db, Task, parent_task_id, user_id):
        raise NotFoundError("Parent task not found")


async def check_payload_references(db: AsyncSession, user_id: str, values: dict) -> None:
    """Same as ``check_references`` for a ``model_dump()`` of a create/update payload."""
    await check_references(
        db,
        user_id,
        workspace_id=values.get("workspace_id"),
        task_id=values.get("task_id"),
        parent_task_id=values.get("parent_task_id"),
    )
