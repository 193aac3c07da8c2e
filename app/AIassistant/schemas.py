# app/AIassistant/schemas.py

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1, description="The user's message")
    context: Optional[str] = Field(None, description="Free-text context stored with the conversation")


class ChatResponse(BaseModel):
    response: str
    conversation_id: str
    message_count: int
    fallback_used: bool = False


class InsightsRequest(BaseModel):
    health_data: Dict[str, Any] = Field(default_factory=dict)


class InsightsResponse(BaseModel):
    insights: str


class AIConfigResponse(BaseModel):
    provider: str
    model: str
    temperature: float
    max_tokens: int
    request_timeout: float
