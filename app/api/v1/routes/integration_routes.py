"""
Integration Routes
"""
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.controllers.integration_controller import IntegrationController
from app.database.connection import get_db
from app.middlewares.pro_feature import require_pro
from app.schemas.integration_schemas import IntegrationCreate, IntegrationUpdate

router = APIRouter(prefix="/integrations", tags=["Integrations"])


@router.post(
    "",
    summary="Connect Integration",
    description="Creates the integration (201) or replaces the credentials of an existing one for the same service (200).",
)
async def upsert_integration(
    payload: IntegrationCreate,
    response: Response,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    body, created = await IntegrationController.upsert_integration(db, user_id, payload)
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return body


@router.get("", summary="List Integrations")
async def list_integrations(
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await IntegrationController.list_integrations(db, user_id)


@router.get("/{integration_id}", summary="Get Integration")
async def get_integration(
    integration_id: str,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await IntegrationController.get_integration(db, user_id, integration_id)


@router.put("/{integration_id}", summary="Update Integration")
async def update_integration(
    integration_id: str,
    payload: IntegrationUpdate,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await IntegrationController.update_integration(db, user_id, integration_id, payload)


@router.delete("/{integration_id}", summary="Delete Integration")
async def delete_integration(
    integration_id: str,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await IntegrationController.delete_integration(db, user_id, integration_id)


@router.post("/{integration_id}/sync", summary="Trigger Integration Sync")
async def sync_integration(
    integration_id: str,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await IntegrationController.sync_integration(db, user_id, integration_id)
