from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import Field

from app.enums import AIProvider
from app.schemas.base_schemas import CamelModel


class ConversationCreate(CamelModel):
    type: str = Field(..., min_length=1, max_length=50)
    title: Optional[str] = Field(None, max_length=255)
    workspace_id: Optional[str] = None


class MessageRequest(CamelModel):
    message: str = Field(..., min_length=1)
    provider: AIProvider = AIProvider.OPENAI


class SummarizeRequest(CamelModel):
    content: str = Field(..., min_length=1)
    provider: AIProvider = AIProvider.OPENAI


class OrganizeRequest(CamelModel):
    notes: List[str]
    provider: AIProvider = AIProvider.OPENAI


class ConversationSummary(CamelModel):
    id: str
    type: str
    title: Optional[str] = None
    message_count: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, conversation) -> "ConversationSummary":
        return cls(
            id=conversation.id,
            type=conversation.type,
            title=conversation.title,
            message_count=len(conversation.messages or []),
            created_at=conversation.created_at,
            updated_at=conversation.updated_at,
        )


class ConversationResponse(CamelModel):
    id: str
    user_id: str
    workspace_id: Optional[str] = None
    type: str
    title: Optional[str] = None
    messages: List[Dict[str, Any]] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
