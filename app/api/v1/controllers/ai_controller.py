"""
AI Controller
Conversation persistence around the AI service. Each message round trip
appends the user turn and the assistant reply to the stored transcript.
"""
from datetime import datetime
from typing import Dict, Optional

from sqlalchemy import desc
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.api.v1.controllers.references import check_references
from app.core.logger import get_logger
from app.enums import MessageRole
from app.exceptions.errors import ApplicationException, NotFoundError, internal_error
from app.models.ai_conversation import AIConversation
from app.schemas.ai_schemas import (
    ConversationCreate, MessageRequest, SummarizeRequest, OrganizeRequest,
    ConversationSummary, ConversationResponse
)
from app.schemas.base_schemas import success_response
from app.services.ai_service import AIService

logger = get_logger("ai_controller")


def _message(role: MessageRole, content: str) -> Dict[str, str]:
    return {"role": role.value, "content": content, "timestamp": datetime.utcnow().isoformat()}


class AIController:

    @staticmethod
    async def _get_owned(db: AsyncSession, user_id: str, conversation_id: str) -> AIConversation:
        result = await db.execute(
            select(AIConversation).where(
                AIConversation.id == conversation_id,
                AIConversation.user_id == user_id,
            )
        )
        conversation = result.scalar_one_or_none()
        if conversation is None:
            raise NotFoundError("Conversation not found")
        return conversation

    @staticmethod
    async def create_conversation(db: AsyncSession, user_id: str, payload: ConversationCreate) -> Dict:
        try:
            await check_references(db, user_id, workspace_id=payload.workspace_id)
            conversation = AIConversation(
                user_id=user_id,
                workspace_id=payload.workspace_id,
                type=payload.type,
                title=payload.title,
                messages=[],
            )
            db.add(conversation)
            await db.commit()
            await db.refresh(conversation)
            return success_response(ConversationResponse.model_validate(conversation))
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error creating conversation: {e}")
            raise internal_error("Failed to create conversation")

    @staticmethod
    async def list_conversations(
        db: AsyncSession,
        user_id: str,
        conversation_type: Optional[str] = None,
        workspace_id: Optional[str] = None,
    ) -> Dict:
        try:
            stmt = select(AIConversation).where(AIConversation.user_id == user_id)
            if conversation_type:
                stmt = stmt.where(AIConversation.type == conversation_type)
            if workspace_id:
                stmt = stmt.where(AIConversation.workspace_id == workspace_id)
            result = await db.execute(stmt.order_by(desc(AIConversation.updated_at)))
            return success_response([ConversationSummary.from_model(c) for c in result.scalars().all()])
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error listing conversations: {e}")
            raise internal_error("Failed to get conversations")

    @staticmethod
    async def get_conversation(db: AsyncSession, user_id: str, conversation_id: str) -> Dict:
        conversation = await AIController._get_owned(db, user_id, conversation_id)
        return success_response(ConversationResponse.model_validate(conversation))

    @staticmethod
    async def delete_conversation(db: AsyncSession, user_id: str, conversation_id: str) -> Dict:
        try:
            conversation = await AIController._get_owned(db, user_id, conversation_id)
            await db.delete(conversation)
            await db.commit()
            return success_response(message="Conversation deleted successfully")
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error deleting conversation {conversation_id}: {e}")
            raise internal_error("Failed to delete conversation")

    @staticmethod
    async def send_message(
        db: AsyncSession, user_id: str, conversation_id: str, payload: MessageRequest
    ) -> Dict:
        try:
            conversation = await AIController._get_owned(db, user_id, conversation_id)

            history = list(conversation.messages or [])
            history.append(_message(MessageRole.USER, payload.message))

            reply = await AIService.chat(history, payload.provider)
            history.append(_message(MessageRole.ASSISTANT, reply.message))

            # JSON column: assign a new list so the change is tracked
            conversation.messages = history
            conversation.updated_at = datetime.utcnow()
            await db.commit()
            await db.refresh(conversation)

            return success_response({
                "conversation": ConversationResponse.model_validate(conversation),
                "response": reply.message,
                "usage": reply.usage,
            })
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error sending message to conversation {conversation_id}: {e}")
            raise internal_error("Failed to send message")

    @staticmethod
    async def summarize(payload: SummarizeRequest) -> Dict:
        summary = await AIService.generate_note_summary(payload.content, payload.provider)
        return success_response({"summary": summary})

    @staticmethod
    async def organize(payload: OrganizeRequest) -> Dict:
        categories = await AIService.suggest_note_organization(payload.notes, payload.provider)
        return success_response({"categories": categories})
