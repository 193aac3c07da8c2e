# app/AIassistant/conversation_store.py
"""
Conversation Store
One rolling transcript per user. Turns are appended as a strict
(user, assistant) pair; earlier entries are never rewritten or dropped.

The row is created with an insert-if-absent keyed by user and then locked
for the read-modify-write, so concurrent chat requests from one user
neither create a second conversation nor lose each other's turns.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from app.AIassistant.llm_client import AssistantLLMClient, fallback_response
from app.helpers.ids import new_id
from app.helpers.time import as_utc, utcnow
from app.shared.enums import MessageRole, Role
from app.shared.exceptions import InternalError, UpstreamUnavailable
from app.system_models.ai_conversation_model.ai_conversation_model import AIConversation
from app.users.auth_dependencies import Caller
from config.aiconfig import ai_settings

logger = logging.getLogger(__name__)

UPSERT_DIALECTS = {
    "sqlite": sqlite_insert,
    "postgresql": pg_insert,
}


@dataclass
class ChatResult:
    conversation: AIConversation
    response: str
    fallback_used: bool


async def _ensure_conversation(db: AsyncSession, user_id: str, role: Role) -> None:
    dialect = db.get_bind().dialect.name
    insert_fn = UPSERT_DIALECTS.get(dialect)
    if insert_fn is None:
        raise InternalError(f"Conversation upsert not supported on {dialect}")

    now = utcnow()
    stmt = insert_fn(AIConversation).values(
        id=new_id(),
        user_id=user_id,
        user_role=role.value,
        messages=[],
        created_at=now,
        updated_at=now,
    ).on_conflict_do_nothing(index_elements=["user_id"])
    await db.execute(stmt)


async def _lock_conversation(db: AsyncSession, user_id: str) -> AIConversation:
    result = await db.execute(
        select(AIConversation)
        .where(AIConversation.user_id == user_id)
        .with_for_update()
        .execution_options(populate_existing=True)
    )
    return result.scalars().one()


def _next_timestamp(entries: List[dict]) -> datetime:
    """Append time, never earlier than the last entry already stored."""
    now = utcnow()
    if entries:
        last = as_utc(datetime.fromisoformat(entries[-1]["timestamp"]))
        if last > now:
            return last
    return now


# ============================================================
# ✅ APPEND TURN
# ============================================================
async def append_turn(
    db: AsyncSession,
    user_id: str,
    role: Role,
    user_message: str,
    ai_response: str,
    context: Optional[str] = None,
) -> AIConversation:
    """
    Extend the user's active conversation with one (user, assistant) pair,
    creating the conversation first if the user has none.
    """
    await _ensure_conversation(db, user_id, role)
    conversation = await _lock_conversation(db, user_id)

    entries = list(conversation.messages or [])
    stamp = _next_timestamp(entries).isoformat()
    entries.append({"role": MessageRole.USER.value, "content": user_message, "timestamp": stamp})
    entries.append({"role": MessageRole.ASSISTANT.value, "content": ai_response, "timestamp": stamp})

    # Whole document is rewritten; the logical transcript only grows
    conversation.messages = entries
    conversation.context = context
    conversation.updated_at = utcnow()

    await db.commit()
    await db.refresh(conversation)

    logger.info(f"💬 Conversation {conversation.id} now holds {len(entries)} entries")
    return conversation


# ============================================================
# ✅ CHAT TURN (generation + append)
# ============================================================
async def chat(
    db: AsyncSession,
    caller: Caller,
    message: str,
    generator: AssistantLLMClient,
    context: Optional[str] = None,
) -> ChatResult:
    """
    Ask the model, then persist the turn. A failed generation is replaced by
    the role fallback and the turn is still stored.
    """
    fallback_used = False
    try:
        response = await generator.generate(message, caller.role, context)
    except UpstreamUnavailable as e:
        logger.warning(f"⚠️  Using {caller.role.value} fallback reply: {e.detail}")
        response = fallback_response(caller.role)
        fallback_used = True

    conversation = await append_turn(db, caller.user_id, caller.role, message, response, context)
    return ChatResult(conversation=conversation, response=response, fallback_used=fallback_used)


async def health_insights(caller: Caller, prompt: str, generator: AssistantLLMClient) -> str:
    """One-off generation with the same fallback; nothing is persisted."""
    try:
        return await generator.generate(prompt, caller.role)
    except UpstreamUnavailable as e:
        logger.warning(f"⚠️  Insights fell back for {caller.role.value}: {e.detail}")
        return fallback_response(caller.role)


# ============================================================
# ✅ READS
# ============================================================
async def list_conversations(
    db: AsyncSession, user_id: str, limit: Optional[int] = None
) -> List[AIConversation]:
    """Most recently updated first, capped at the history limit."""
    result = await db.execute(
        select(AIConversation)
        .where(AIConversation.user_id == user_id)
        .order_by(AIConversation.updated_at.desc())
        .limit(limit or ai_settings.CONVERSATION_HISTORY_LIMIT)
    )
    return list(result.scalars().all())


async def active_conversation(db: AsyncSession, user_id: str) -> Optional[AIConversation]:
    conversations = await list_conversations(db, user_id, limit=1)
    return conversations[0] if conversations else None
