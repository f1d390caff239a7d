"""
Metric Controller
"""
from datetime import date, datetime
from typing import Dict, Optional

from sqlalchemy import asc, desc, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.api.v1.controllers.references import check_payload_references
from app.core.logger import get_logger
from app.exceptions.errors import ApplicationException, NotFoundError, internal_error
from app.models.metric import Metric
from app.schemas.base_schemas import success_response
from app.schemas.metric_schemas import MetricCreate, MetricResponse, MetricStat

logger = get_logger("metric_controller")


def _apply_filters(stmt, user_id, workspace_id=None, metric_type=None, start_date=None, end_date=None):
    stmt = stmt.where(Metric.user_id == user_id)
    if workspace_id:
        stmt = stmt.where(Metric.workspace_id == workspace_id)
    if metric_type:
        stmt = stmt.where(Metric.metric_type == metric_type)
    if start_date:
        stmt = stmt.where(Metric.date >= start_date)
    if end_date:
        stmt = stmt.where(Metric.date <= end_date)
    return stmt


class MetricController:

    @staticmethod
    async def create_metric(db: AsyncSession, user_id: str, payload: MetricCreate) -> Dict:
        try:
            values = payload.model_dump()
            await check_payload_references(db, user_id, values)
            metric = Metric(user_id=user_id, **values)
            db.add(metric)
            await db.commit()
            await db.refresh(metric)
            return success_response(MetricResponse.model_validate(metric))
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error creating metric: {e}")
            raise internal_error("Failed to create metric")

    @staticmethod
    async def list_metrics(
        db: AsyncSession,
        user_id: str,
        workspace_id: Optional[str] = None,
        metric_type: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Dict:
        try:
            stmt = _apply_filters(select(Metric), user_id, workspace_id, metric_type, start_date, end_date)
            result = await db.execute(stmt.order_by(desc(Metric.date), desc(Metric.created_at)))
            return success_response([MetricResponse.model_validate(m) for m in result.scalars().all()])
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error listing metrics: {e}")
            raise internal_error("Failed to get metrics")

    @staticmethod
    async def get_stats(
        db: AsyncSession,
        user_id: str,
        workspace_id: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Dict:
        """Aggregate total, average, count, min and max per metric type."""
        try:
            stmt = select(
                Metric.metric_type,
                func.sum(Metric.value),
                func.avg(Metric.value),
                func.count(Metric.id),
                func.min(Metric.value),
                func.max(Metric.value),
            )
            stmt = _apply_filters(stmt, user_id, workspace_id, None, start_date, end_date)
            stmt = stmt.group_by(Metric.metric_type).order_by(asc(Metric.metric_type))
            result = await db.execute(stmt)

            stats = [
                MetricStat(
                    type=metric_type,
                    total=float(total or 0),
                    average=float(average or 0),
                    count=count,
                    min=float(minimum or 0),
                    max=float(maximum or 0),
                )
                for metric_type, total, average, count, minimum, maximum in result.all()
            ]
            return success_response(stats)
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error computing metric stats: {e}")
            raise internal_error("Failed to get metric stats")

    @staticmethod
    async def get_daily(
        db: AsyncSession,
        user_id: str,
        day: Optional[date] = None,
        workspace_id: Optional[str] = None,
    ) -> Dict:
        try:
            day = day or datetime.utcnow().date()
            stmt = _apply_filters(select(Metric), user_id, workspace_id).where(Metric.date == day)
            result = await db.execute(stmt.order_by(asc(Metric.metric_type)))
            return success_response([MetricResponse.model_validate(m) for m in result.scalars().all()])
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error getting daily metrics: {e}")
            raise internal_error("Failed to get daily metrics")

    @staticmethod
    async def delete_metric(db: AsyncSession, user_id: str, metric_id: str) -> Dict:
        try:
            result = await db.execute(
                select(Metric).where(Metric.id == metric_id, Metric.user_id == user_id)
            )
            metric = result.scalar_one_or_none()
            if metric is None:
                raise NotFoundError("Metric not found")
            await db.delete(metric)
            await db.commit()
            return success_response(message="Metric deleted successfully")
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error deleting metric {metric_id}: {e}")
            raise internal_error("Failed to delete metric")
