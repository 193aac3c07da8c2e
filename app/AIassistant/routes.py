# app/AIassistant/routes.py
import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.AIassistant import conversation_store
from app.AIassistant.llm_client import AssistantLLMClient, build_insights_prompt, get_text_generator
from app.AIassistant.schemas import (
    AIConfigResponse,
    ChatRequest,
    ChatResponse,
    InsightsRequest,
    InsightsResponse,
)
from app.database.connection import get_db
from app.system_models.ai_conversation_model.ai_conversation_schemas import AIConversationResponse
from app.users.auth_dependencies import Caller, get_caller

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/chat", response_model=ChatResponse)
async def chat_endpoint(
    payload: ChatRequest,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller),
    generator: AssistantLLMClient = Depends(get_text_generator),
):
    """
    Send one message to the assistant.

    The reply (or the role's fallback text when the model is unavailable) is
    appended to the caller's active conversation together with the message.
    """
    result = await conversation_store.chat(
        db, caller, payload.message, generator, context=payload.context
    )
    return ChatResponse(
        response=result.response,
        conversation_id=result.conversation.id,
        message_count=len(result.conversation.messages),
        fallback_used=result.fallback_used,
    )


@router.get("/conversations", response_model=List[AIConversationResponse])
async def list_conversations_endpoint(
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller),
):
    """Caller's conversations, most recently updated first (at most 10)."""
    return await conversation_store.list_conversations(db, caller.user_id)


@router.post("/insights", response_model=InsightsResponse)
async def insights_endpoint(
    payload: InsightsRequest,
    caller: Caller = Depends(get_caller),
    generator: AssistantLLMClient = Depends(get_text_generator),
):
    """Role-specific suggestions from the supplied data. Not stored in the transcript."""
    prompt = build_insights_prompt(caller.role, payload.health_data)
    insights = await conversation_store.health_insights(caller, prompt, generator)
    return InsightsResponse(insights=insights)


@router.get("/config", response_model=AIConfigResponse)
async def get_ai_config(
    caller: Caller = Depends(get_caller),
    generator: AssistantLLMClient = Depends(get_text_generator),
):
    """Current generation provider and settings."""
    return AIConfigResponse(**generator.get_model_info())
