"""
File Routes
"""
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.controllers.file_controller import FileController
from app.database.connection import get_db
from app.middlewares.pro_feature import require_pro

router = APIRouter(prefix="/files", tags=["Files"])


@router.post("/upload", status_code=status.HTTP_201_CREATED, summary="Upload Image")
async def upload_file(
    file: Optional[UploadFile] = File(None),
    workspace_id: Optional[str] = Form(None, alias="workspaceId"),
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await FileController.upload_file(db, user_id, file, workspace_id)


@router.get("", summary="List Files")
async def list_files(
    workspace_id: Optional[str] = Query(None, alias="workspaceId"),
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await FileController.list_files(db, user_id, workspace_id)


@router.get("/{file_id}", summary="Download File")
async def get_file(
    file_id: str,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    record, chunks = await FileController.open_file(db, user_id, file_id)
    return StreamingResponse(
        chunks,
        media_type=record.mime_type,
        headers={
            "Content-Disposition": f'inline; filename="{record.file_name}"',
            "Content-Length": str(record.file_size),
        },
    )


@router.delete("/{file_id}", summary="Delete File")
async def delete_file(
    file_id: str,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await FileController.delete_file(db, user_id, file_id)
