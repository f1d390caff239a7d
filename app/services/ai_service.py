"""
AI Service
Chat completions against OpenAI (official async client) or Anthropic
(Messages API over httpx), plus the note summarize/organize helpers.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import httpx
import openai

from app.core.config import settings
from app.core.logger import get_logger
from app.enums import AIProvider, MessageRole
from app.exceptions.errors import internal_error

logger = get_logger("ai_service")

OPENAI_MODEL = "gpt-3.5-turbo"
ANTHROPIC_MODEL = "claude-3-haiku-20240307"
ANTHROPIC_BASE_URL = "https://api.anthropic.com/v1"
ANTHROPIC_VERSION = "2023-06-01"
MAX_TOKENS = 1000

BULLET_PREFIX = re.compile(r"^[-*•]\s*")


@dataclass
class AIResponse:
    message: str
    usage: Dict[str, int] = field(default_factory=dict)


def _usage(prompt_tokens: int, completion_tokens: int) -> Dict[str, int]:
    return {
        "promptTokens": prompt_tokens,
        "completionTokens": completion_tokens,
        "totalTokens": prompt_tokens + completion_tokens,
    }


class AIService:

    @staticmethod
    async def chat_with_openai(messages: List[Dict], model: str = OPENAI_MODEL) -> AIResponse:
        if not settings.openai_api_key:
            raise internal_error("OpenAI API key not configured")

        client = openai.AsyncOpenAI(api_key=settings.openai_api_key)
        try:
            response = await client.chat.completions.create(
                model=model,
                messages=[{"role": m["role"], "content": m["content"]} for m in messages],
                temperature=0.7,
                max_tokens=MAX_TOKENS,
            )
        except openai.OpenAIError as e:
            logger.error(f"❌ OpenAI API error: {e}")
            raise internal_error("Failed to get AI response from OpenAI")

        usage = response.usage
        return AIResponse(
            message=response.choices[0].message.content or "",
            usage=_usage(usage.prompt_tokens, usage.completion_tokens) if usage else {},
        )

    @staticmethod
    async def chat_with_anthropic(messages: List[Dict], model: str = ANTHROPIC_MODEL) -> AIResponse:
        if not settings.anthropic_api_key:
            raise internal_error("Anthropic API key not configured")

        system = next((m["content"] for m in messages if m["role"] == MessageRole.SYSTEM.value), None)
        body = {
            "model": model,
            "max_tokens": MAX_TOKENS,
            "messages": [
                {
                    "role": "assistant" if m["role"] == MessageRole.ASSISTANT.value else "user",
                    "content": m["content"],
                }
                for m in messages
                if m["role"] != MessageRole.SYSTEM.value
            ],
        }
        if system:
            body["system"] = system

        try:
            async with httpx.AsyncClient(base_url=ANTHROPIC_BASE_URL, timeout=60.0) as client:
                resp = await client.post(
                    "/messages",
                    json=body,
                    headers={
                        "x-api-key": settings.anthropic_api_key,
                        "anthropic-version": ANTHROPIC_VERSION,
                    },
                )
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPError as e:
            logger.error(f"❌ Anthropic API error: {e}")
            raise internal_error("Failed to get AI response from Anthropic")

        usage = data.get("usage") or {}
        return AIResponse(
            message=data["content"][0]["text"],
            usage=_usage(usage.get("input_tokens", 0), usage.get("output_tokens", 0)),
        )

    @staticmethod
    async def chat(messages: List[Dict], provider: Optional[str] = None) -> AIResponse:
        if provider == AIProvider.ANTHROPIC.value:
            return await AIService.chat_with_anthropic(messages)
        return await AIService.chat_with_openai(messages)

    @staticmethod
    async def generate_note_summary(content: str, provider: Optional[str] = None) -> str:
        messages = [
            {"role": "system", "content": "You are a helpful assistant that summarizes notes concisely."},
            {"role": "user", "content": f"Please provide a concise summary of the following notes:\n\n{content}"},
        ]
        response = await AIService.chat(messages, provider)
        return response.message

    @staticmethod
    async def suggest_note_organization(notes: List[str], provider: Optional[str] = None) -> List[str]:
        messages = [
            {"role": "system", "content": "You are a helpful assistant that organizes notes into logical categories."},
            {"role": "user", "content": "Please suggest categories for organizing these notes:\n\n" + "\n\n".join(notes)},
        ]
        response = await AIService.chat(messages, provider)
        return parse_categories(response.message)


def parse_categories(text: str) -> List[str]:
    """One category per non-empty line, list bullets stripped."""
    categories = []
    for line in text.split("\n"):
        line = BULLET_PREFIX.sub("", line.strip()).strip()
        if line:
            categories.append(line)
    return categories
