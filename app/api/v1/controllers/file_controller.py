"""
File Controller
Image uploads stored through the configured storage backend.
"""
import os
from typing import AsyncIterator, Dict, Optional, Tuple

import cuid
from fastapi import UploadFile
from sqlalchemy import desc
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.api.v1.controllers.references import check_references
from app.core.config import settings
from app.core.logger import get_logger
from app.exceptions.errors import (
    ApplicationException, NotFoundError, PayloadTooLargeError, ValidationError, internal_error
)
from app.models.file_upload import FileUpload
from app.schemas.base_schemas import success_response
from app.schemas.file_schemas import FileResponse
from app.services.file_storage_service import build_storage_key, get_file_storage

logger = get_logger("file_controller")


class FileController:

    @staticmethod
    async def _get_owned(db: AsyncSession, user_id: str, file_id: str) -> FileUpload:
        result = await db.execute(
            select(FileUpload).where(FileUpload.id == file_id, FileUpload.user_id == user_id)
        )
        record = result.scalar_one_or_none()
        if record is None:
            raise NotFoundError("File not found")
        return record

    @staticmethod
    async def upload_file(
        db: AsyncSession,
        user_id: str,
        file: Optional[UploadFile],
        workspace_id: Optional[str] = None,
    ) -> Dict:
        if file is None or not file.filename:
            raise ValidationError("No file uploaded")

        mime_type = file.content_type or ""
        if not mime_type.startswith("image/"):
            raise ValidationError("Only image files are allowed")

        data = await file.read()
        if len(data) > settings.MAX_UPLOAD_SIZE:
            raise PayloadTooLargeError(
                f"File too large. Maximum size is {settings.MAX_UPLOAD_SIZE // (1024 * 1024)}MB"
            )

        try:
            await check_references(db, user_id, workspace_id=workspace_id)
            file_id = cuid.cuid()
            key = build_storage_key(user_id, file_id, file.filename)
            storage = get_file_storage()
            await storage.save(key, data, mime_type)

            record = FileUpload(
                id=file_id,
                user_id=user_id,
                workspace_id=workspace_id,
                file_name=file.filename,
                file_path=key,
                file_type=os.path.splitext(file.filename)[1].lstrip(".").lower(),
                file_size=len(data),
                mime_type=mime_type,
            )
            db.add(record)
            await db.commit()
            await db.refresh(record)
            logger.info(f"📁 Stored upload {record.id} ({record.file_size} bytes) for user {user_id}")
            return success_response(FileResponse.model_validate(record))
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error uploading file: {e}")
            raise internal_error("Failed to upload file")

    @staticmethod
    async def list_files(db: AsyncSession, user_id: str, workspace_id: Optional[str] = None) -> Dict:
        try:
            stmt = select(FileUpload).where(FileUpload.user_id == user_id)
            # Files uploaded outside any workspace are listed only when no workspace is asked for
            if workspace_id:
                stmt = stmt.where(FileUpload.workspace_id == workspace_id)
            else:
                stmt = stmt.where(FileUpload.workspace_id.is_(None))
            result = await db.execute(stmt.order_by(desc(FileUpload.created_at)))
            return success_response([FileResponse.model_validate(f) for f in result.scalars().all()])
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error listing files: {e}")
            raise internal_error("Failed to get files")

    @staticmethod
    async def open_file(db: AsyncSession, user_id: str, file_id: str) -> Tuple[FileUpload, AsyncIterator[bytes]]:
        record = await FileController._get_owned(db, user_id, file_id)
        chunks = await get_file_storage().stream(record.file_path)
        return record, chunks

    @staticmethod
    async def delete_file(db: AsyncSession, user_id: str, file_id: str) -> Dict:
        try:
            record = await FileController._get_owned(db, user_id, file_id)
            await get_file_storage().delete(record.file_path)
            await db.delete(record)
            await db.commit()
            return success_response(message="File deleted successfully")
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error deleting file {file_id}: {e}")
            raise internal_error("Failed to delete file")
