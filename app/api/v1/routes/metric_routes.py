"""
Metric Routes
"""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.controllers.metric_controller import MetricController
from app.database.connection import get_db
from app.middlewares.pro_feature import require_pro
from app.schemas.metric_schemas import MetricCreate

router = APIRouter(prefix="/metrics", tags=["Metrics"])


@router.post("", status_code=status.HTTP_201_CREATED, summary="Record Metric")
async def create_metric(
    payload: MetricCreate,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await MetricController.create_metric(db, user_id, payload)


@router.get("", summary="List Metrics")
async def list_metrics(
    workspace_id: Optional[str] = Query(None, alias="workspaceId"),
    metric_type: Optional[str] = Query(None, alias="metricType"),
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await MetricController.list_metrics(db, user_id, workspace_id, metric_type, start_date, end_date)


@router.get("/stats", summary="Metric Stats By Type")
async def get_stats(
    workspace_id: Optional[str] = Query(None, alias="workspaceId"),
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await MetricController.get_stats(db, user_id, workspace_id, start_date, end_date)


@router.get("/daily", summary="Metrics For A Day")
async def get_daily(
    day: Optional[date] = Query(None, alias="date"),
    workspace_id: Optional[str] = Query(None, alias="workspaceId"),
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await MetricController.get_daily(db, user_id, day, workspace_id)


@router.delete("/{metric_id}", summary="Delete Metric")
async def delete_metric(
    metric_id: str,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await MetricController.delete_metric(db, user_id, metric_id)
