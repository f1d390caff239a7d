"""
AI Routes
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.controllers.ai_controller import AIController
from app.database.connection import get_db
from app.middlewares.pro_feature import require_pro
from app.schemas.ai_schemas import ConversationCreate, MessageRequest, SummarizeRequest, OrganizeRequest

router = APIRouter(prefix="/ai", tags=["AI"])


@router.post("/conversations", status_code=status.HTTP_201_CREATED, summary="Create Conversation")
async def create_conversation(
    payload: ConversationCreate,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await AIController.create_conversation(db, user_id, payload)


@router.get("/conversations", summary="List Conversations")
async def list_conversations(
    conversation_type: Optional[str] = Query(None, alias="type"),
    workspace_id: Optional[str] = Query(None, alias="workspaceId"),
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await AIController.list_conversations(db, user_id, conversation_type, workspace_id)


@router.get("/conversations/{conversation_id}", summary="Get Conversation")
async def get_conversation(
    conversation_id: str,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await AIController.get_conversation(db, user_id, conversation_id)


@router.delete("/conversations/{conversation_id}", summary="Delete Conversation")
async def delete_conversation(
    conversation_id: str,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await AIController.delete_conversation(db, user_id, conversation_id)


@router.post("/conversations/{conversation_id}/message", summary="Send Message")
async def send_message(
    conversation_id: str,
    payload: MessageRequest,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await AIController.send_message(db, user_id, conversation_id, payload)


@router.post("/summarize", summary="Summarize Notes")
async def summarize(
    payload: SummarizeRequest,
    user_id: str = Depends(require_pro)
):
    return await AIController.summarize(payload)


@router.post("/organize", summary="Suggest Note Categories")
async def organize(
    payload: OrganizeRequest,
    user_id: str = Depends(require_pro)
):
    return await AIController.organize(payload)
