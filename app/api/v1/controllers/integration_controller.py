"""
Integration Controller
"""
from typing import Dict, Tuple

from sqlalchemy import desc
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.core.logger import get_logger
from app.exceptions.errors import ApplicationException, NotFoundError, internal_error
from app.models.integration import Integration
from app.schemas.base_schemas import success_response
from app.schemas.integration_schemas import IntegrationCreate, IntegrationUpdate, IntegrationResponse

logger = get_logger("integration_controller")


class IntegrationController:
    """Third-party service credentials, one row per (user, service)."""

    @staticmethod
    async def _get_owned(db: AsyncSession, user_id: str, integration_id: str) -> Integration:
        result = await db.execute(
            select(Integration).where(Integration.id == integration_id, Integration.user_id == user_id)
        )
        integration = result.scalar_one_or_none()
        if integration is None:
            raise NotFoundError("Integration not found")
        return integration

    @staticmethod
    async def upsert_integration(
        db: AsyncSession, user_id: str, payload: IntegrationCreate
    ) -> Tuple[Dict, bool]:
        """Returns the response body and whether a new row was created."""
        try:
            result = await db.execute(
                select(Integration).where(
                    Integration.user_id == user_id,
                    Integration.service == payload.service,
                )
            )
            integration = result.scalar_one_or_none()
            created = integration is None

            if created:
                integration = Integration(user_id=user_id, **payload.model_dump())
                db.add(integration)
            else:
                integration.access_token = payload.access_token
                integration.refresh_token = payload.refresh_token
                integration.token_expires_at = payload.token_expires_at
                integration.extra_metadata = payload.extra_metadata

            await db.commit()
            await db.refresh(integration)
            logger.info(f"🔗 Integration {integration.service} {'created' if created else 'updated'} for user {user_id}")
            return success_response(IntegrationResponse.from_model(integration)), created
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error saving integration: {e}")
            raise internal_error("Failed to save integration")

    @staticmethod
    async def list_integrations(db: AsyncSession, user_id: str) -> Dict:
        try:
            result = await db.execute(
                select(Integration)
                .where(Integration.user_id == user_id)
                .order_by(desc(Integration.created_at))
            )
            return success_response([IntegrationResponse.from_model(i) for i in result.scalars().all()])
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error listing integrations: {e}")
            raise internal_error("Failed to get integrations")

    @staticmethod
    async def get_integration(db: AsyncSession, user_id: str, integration_id: str) -> Dict:
        integration = await IntegrationController._get_owned(db, user_id, integration_id)
        return success_response(IntegrationResponse.from_model(integration))

    @staticmethod
    async def update_integration(
        db: AsyncSession, user_id: str, integration_id: str, payload: IntegrationUpdate
    ) -> Dict:
        try:
            integration = await IntegrationController._get_owned(db, user_id, integration_id)
            for field, value in payload.model_dump(exclude_unset=True).items():
                setattr(integration, field, value)
            await db.commit()
            await db.refresh(integration)
            return success_response(IntegrationResponse.from_model(integration))
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error updating integration {integration_id}: {e}")
            raise internal_error("Failed to update integration")

    @staticmethod
    async def delete_integration(db: AsyncSession, user_id: str, integration_id: str) -> Dict:
        try:
            integration = await IntegrationController._get_owned(db, user_id, integration_id)
            await db.delete(integration)
            await db.commit()
            return success_response(message="Integration deleted successfully")
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error deleting integration {integration_id}: {e}")
            raise internal_error("Failed to delete integration")

    @staticmethod
    async def sync_integration(db: AsyncSession, user_id: str, integration_id: str) -> Dict:
        # No provider pulls are wired up yet; the endpoint only acknowledges.
        integration = await IntegrationController._get_owned(db, user_id, integration_id)
        logger.info(f"🔄 Sync requested for {integration.service} by user {user_id}")
        return success_response({"synced": 0}, message=f"Sync initiated for {integration.service}")
