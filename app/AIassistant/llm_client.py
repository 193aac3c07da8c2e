# app/AIassistant/llm_client.py
"""
Role-aware text generation for the AI assistant.

``generate`` is the only call that leaves the process. It raises
UpstreamUnavailable on any provider failure; callers decide how to recover
(the conversation store substitutes the role fallback below).
"""
import json
import logging
from typing import Any, Dict, List, Optional

from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage

from app.AIassistant.llm_providers import get_llm_by_provider
from app.shared.enums import Role
from app.shared.exceptions import UpstreamUnavailable
from config.aiconfig import ai_settings

logger = logging.getLogger(__name__)


BASE_PROMPT = (
    "You are a helpful AI assistant for MediConnect, a healthcare management platform. "
    "Always provide accurate, helpful information while emphasizing that you are not a "
    "substitute for professional medical advice."
)

SYSTEM_PROMPTS: Dict[Role, str] = {
    Role.PATIENT: (
        f"{BASE_PROMPT} You are helping a patient. Provide general health information, "
        "symptom guidance, and encourage them to consult with healthcare professionals for "
        "proper diagnosis and treatment. Be supportive and informative while being clear "
        "about the limitations of AI advice."
    ),
    Role.DOCTOR: (
        f"{BASE_PROMPT} You are assisting a healthcare provider. Help with differential "
        "diagnoses, treatment considerations, drug interactions, and clinical decision "
        "support. Provide evidence-based information while encouraging clinical judgment "
        "and proper patient evaluation."
    ),
    Role.PHARMACY: (
        f"{BASE_PROMPT} You are helping a pharmacy professional. Assist with medication "
        "information, drug interactions, inventory optimization, alternative medications, "
        "and billing support. Focus on pharmaceutical expertise and business optimization."
    ),
}

FALLBACK_RESPONSES: Dict[Role, str] = {
    Role.PATIENT: (
        "I'm experiencing some technical difficulties right now. For immediate health "
        "concerns, please contact your healthcare provider or emergency services if urgent."
    ),
    Role.DOCTOR: (
        "AI assistant is temporarily unavailable. Please refer to your clinical guidelines "
        "and professional judgment for patient care decisions."
    ),
    Role.PHARMACY: (
        "AI assistant is currently offline. Please refer to your pharmaceutical databases "
        "and professional resources for medication information."
    ),
}


def fallback_response(role: Role) -> str:
    return FALLBACK_RESPONSES[role]


def build_messages(prompt: str, role: Role, context: Optional[str] = None) -> List[BaseMessage]:
    """System prompt, optional context, then the user's message."""
    messages: List[BaseMessage] = [SystemMessage(content=SYSTEM_PROMPTS[role])]
    if context:
        messages.append(SystemMessage(content=f"Additional context: {context}"))
    messages.append(HumanMessage(content=prompt))
    return messages


def build_insights_prompt(role: Role, health_data: Dict[str, Any]) -> str:
    """Role-specific question asked on behalf of the insights endpoint."""
    if role is Role.PATIENT:
        age = health_data.get("age") or "an adult"
        return (
            "Based on my health profile, can you provide some general wellness tips? "
            f"I'm {age} and my main concerns are around general health maintenance."
        )
    if role is Role.DOCTOR:
        return (
            "Can you help analyze this patient case and suggest potential differential "
            f"diagnoses or treatment considerations? Patient data: {json.dumps(health_data, default=str)}"
        )
    if role is Role.PHARMACY:
        return (
            "Based on our current inventory and prescription trends, what recommendations do "
            f"you have for stock optimization? Current data: {json.dumps(health_data, default=str)}"
        )
    raise ValueError(f"Unhandled role: {role}")


class AssistantLLMClient:
    """Unified chat client over the configured provider."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    async def generate(self, prompt: str, role: Role, context: Optional[str] = None) -> str:
        """
        Generate an assistant reply.

        Args:
            prompt: The user's message
            role: Caller role; selects the system prompt
            context: Optional free-text context added as a second system message

        Returns:
            The model's text

        Raises:
            UpstreamUnavailable: provider misconfigured, unreachable, or returned nothing
        """
        provider = ai_settings.LLM_PROVIDER
        try:
            llm = get_llm_by_provider(provider)
            response = await llm.ainvoke(build_messages(prompt, role, context))
        except Exception as e:
            logger.error(f"❌ {provider} generation failed: {e}", exc_info=True)
            raise UpstreamUnavailable(f"{provider} generation failed") from e

        content = response.content if isinstance(response.content, str) else ""
        if not content.strip():
            logger.warning(f"⚠️  {provider} returned an empty completion")
            raise UpstreamUnavailable("No response from AI model")

        logger.info(f"🤖 {provider} replied with {len(content)} chars for {role.value}")
        return content

    def get_model_info(self) -> Dict:
        """Get current LLM configuration."""
        return {
            "provider": ai_settings.LLM_PROVIDER,
            "model": ai_settings.current_llm_model,
            "temperature": ai_settings.LLM_TEMPERATURE,
            "max_tokens": ai_settings.MAX_TOKENS,
            "request_timeout": ai_settings.REQUEST_TIMEOUT,
        }


# Global instance
assistant_client = AssistantLLMClient()


def get_text_generator() -> AssistantLLMClient:
    """Dependency hook so tests can swap the generator."""
    return assistant_client
