# app/system_models/ai_conversation_model/ai_conversation_schemas.py
from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict

from app.shared.enums import MessageRole, Role

class TranscriptEntry(BaseModel):
    role: MessageRole
    content: str
    timestamp: datetime

class AIConversationResponse(BaseModel):
    id: str
    user_id: str
    user_role: Role
    messages: List[TranscriptEntry]
    context: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
