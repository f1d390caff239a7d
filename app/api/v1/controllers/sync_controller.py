"""
Sync Controller
"""
from typing import Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.controllers.references import check_references
from app.core.logger import get_logger
from app.exceptions.errors import ApplicationException, internal_error
from app.schemas.base_schemas import success_response
from app.schemas.sync_schemas import SyncRequest, SyncDataResponse
from app.services.sync_service import SyncService

logger = get_logger("sync_controller")


class SyncController:

    @staticmethod
    async def sync_data(db: AsyncSession, user_id: str, payload: SyncRequest) -> Dict:
        try:
            await check_references(db, user_id, workspace_id=payload.workspace_id)
            record = await SyncService.sync_data(
                db,
                user_id,
                data_type=payload.data_type,
                data=payload.data,
                version=payload.version,
                workspace_id=payload.workspace_id,
            )
            return success_response(SyncDataResponse.model_validate(record))
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error syncing {payload.data_type}: {e}")
            raise internal_error("Failed to sync data")

    @staticmethod
    async def get_data(
        db: AsyncSession, user_id: str, data_type: str, workspace_id: Optional[str] = None
    ) -> Dict:
        try:
            record = await SyncService.get_data(db, user_id, data_type, workspace_id)
            return {
                "success": True,
                "data": SyncDataResponse.model_validate(record) if record else None,
            }
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error getting sync data {data_type}: {e}")
            raise internal_error("Failed to get sync data")

    @staticmethod
    async def get_all_data(db: AsyncSession, user_id: str, workspace_id: Optional[str] = None) -> Dict:
        try:
            records = await SyncService.get_all_data(db, user_id, workspace_id)
            return success_response([SyncDataResponse.model_validate(r) for r in records])
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error getting all sync data: {e}")
            raise internal_error("Failed to get all sync data")

    @staticmethod
    async def delete_data(
        db: AsyncSession, user_id: str, data_type: str, workspace_id: Optional[str] = None
    ) -> Dict:
        try:
            await SyncService.delete_data(db, user_id, data_type, workspace_id)
            return success_response(message="Data deleted successfully")
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error deleting sync data {data_type}: {e}")
            raise internal_error("Failed to delete sync data")
