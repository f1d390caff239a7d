"""
Task Controller
"""
from typing import Dict, Optional

from sqlalchemy import asc, desc, delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.api.v1.controllers.references import check_payload_references
from app.core.logger import get_logger
from app.exceptions.errors import ApplicationException, NotFoundError, ValidationError, internal_error
from app.models.task import Task
from app.schemas.base_schemas import success_response
from app.schemas.task_schemas import TaskCreate, TaskUpdate, TaskResponse, TaskDetailResponse

logger = get_logger("task_controller")


class TaskController:
    """Per-user task CRUD. Lookups always include the owner, so foreign ids are 404s."""

    @staticmethod
    async def _get_owned(db: AsyncSession, user_id: str, task_id: str) -> Task:
        result = await db.execute(
            select(Task).where(Task.id == task_id, Task.user_id == user_id)
        )
        task = result.scalar_one_or_none()
        if task is None:
            raise NotFoundError("Task not found")
        return task

    @staticmethod
    async def create_task(db: AsyncSession, user_id: str, payload: TaskCreate) -> Dict:
        try:
            values = payload.model_dump()
            await check_payload_references(db, user_id, values)
            task = Task(user_id=user_id, completed=False, **values)
            db.add(task)
            await db.commit()
            await db.refresh(task)
            return success_response(TaskResponse.model_validate(task))
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error creating task: {e}")
            raise internal_error("Failed to create task")

    @staticmethod
    async def list_tasks(
        db: AsyncSession,
        user_id: str,
        workspace_id: Optional[str] = None,
        category: Optional[str] = None,
        completed: Optional[bool] = None,
        priority: Optional[str] = None,
        parent_task_id: Optional[str] = None,
    ) -> Dict:
        try:
            stmt = select(Task).where(Task.user_id == user_id)
            if workspace_id:
                stmt = stmt.where(Task.workspace_id == workspace_id)
            if category:
                stmt = stmt.where(Task.category == category)
            if completed is not None:
                stmt = stmt.where(Task.completed == completed)
            if priority:
                stmt = stmt.where(Task.priority == priority)
            # Without a parent filter only top-level tasks are listed
            if parent_task_id:
                stmt = stmt.where(Task.parent_task_id == parent_task_id)
            else:
                stmt = stmt.where(Task.parent_task_id.is_(None))

            stmt = stmt.order_by(asc(Task.position), desc(Task.created_at))
            result = await db.execute(stmt)
            tasks = result.scalars().all()
            return success_response([TaskResponse.model_validate(t) for t in tasks])
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error listing tasks: {e}")
            raise internal_error("Failed to get tasks")

    @staticmethod
    async def get_task(db: AsyncSession, user_id: str, task_id: str) -> Dict:
        try:
            task = await TaskController._get_owned(db, user_id, task_id)

            subtasks_result = await db.execute(
                select(Task)
                .where(Task.parent_task_id == task.id, Task.user_id == user_id)
                .order_by(asc(Task.position), desc(Task.created_at))
            )
            parent = None
            if task.parent_task_id:
                parent_result = await db.execute(
                    select(Task).where(Task.id == task.parent_task_id, Task.user_id == user_id)
                )
                parent = parent_result.scalar_one_or_none()

            detail = TaskDetailResponse.model_validate(task)
            detail.subtasks = [TaskResponse.model_validate(t) for t in subtasks_result.scalars().all()]
            detail.parent_task = TaskResponse.model_validate(parent) if parent else None
            return success_response(detail)
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error getting task {task_id}: {e}")
            raise internal_error("Failed to get task")

    @staticmethod
    async def update_task(db: AsyncSession, user_id: str, task_id: str, payload: TaskUpdate) -> Dict:
        try:
            task = await TaskController._get_owned(db, user_id, task_id)
            updates = payload.model_dump(exclude_unset=True)
            if updates.get("parent_task_id") == task.id:
                raise ValidationError("A task cannot be its own parent")
            await check_payload_references(db, user_id, updates)
            for field, value in updates.items():
                setattr(task, field, value)
            await db.commit()
            await db.refresh(task)
            return success_response(TaskResponse.model_validate(task))
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error updating task {task_id}: {e}")
            raise internal_error("Failed to update task")

    @staticmethod
    async def delete_task(db: AsyncSession, user_id: str, task_id: str) -> Dict:
        try:
            task = await TaskController._get_owned(db, user_id, task_id)
            # Subtasks go with their parent even where the backend does not cascade
            await db.execute(
                delete(Task).where(Task.parent_task_id == task.id, Task.user_id == user_id)
            )
            await db.delete(task)
            await db.commit()
            return success_response(message="Task deleted successfully")
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error deleting task {task_id}: {e}")
            raise internal_error("Failed to delete task")

    @staticmethod
    async def toggle_task(db: AsyncSession, user_id: str, task_id: str) -> Dict:
        try:
            task = await TaskController._get_owned(db, user_id, task_id)
            task.completed = not task.completed
            await db.commit()
            await db.refresh(task)
            return success_response(TaskResponse.model_validate(task))
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error toggling task {task_id}: {e}")
            raise internal_error("Failed to toggle task")
