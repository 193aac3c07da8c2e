# config/aiconfig.py
"""
AI Assistant Configuration
Controls the text-generation provider behind the role-aware chat assistant
Supports: OpenRouter, OpenAI, Ollama, Claude, Groq, Gemini
"""
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class AISettings(BaseSettings):
    """Configuration for the assistant's chat model."""

    # ============================================================================
    # LLM SELECTION
    # ============================================================================
    LLM_PROVIDER: Literal["openrouter", "openai", "ollama", "claude", "groq", "gemini"] = "openrouter"

    # ── OpenRouter Settings (OpenAI-compatible gateway) ──
    OPENROUTER_API_KEY: str = Field(default="", env="OPENROUTER_API_KEY")
    OPENROUTER_BASE_URL: str = "https://openrouter.ai/api/v1"
    OPENROUTER_LLM_MODEL: str = "meta-llama/llama-3.1-8b-instruct:free"
    OPENROUTER_REFERER: str = "https://mediconnect.app"
    OPENROUTER_TITLE: str = "MediConnect"

    # ── OpenAI Settings ──
    OPENAI_API_KEY: str = Field(default="", env="OPENAI_API_KEY")
    OPENAI_LLM_MODEL: str = "gpt-4o-mini"

    # ── Ollama Settings (Local) ──
    OLLAMA_LLM_MODEL: str = "llama3.1:8b"

    # ── Claude Settings ──
    CLAUDE_API_KEY: str = Field(default="", env="CLAUDE_API_KEY")
    CLAUDE_LLM_MODEL: str = "claude-3-5-haiku-20241022"

    # ── Groq Settings ──
    GROQ_API_KEY: str = Field(default="", env="GROQ_API_KEY")
    GROQ_LLM_MODEL: str = "llama-3.1-8b-instant"

    # ── Gemini Settings ──
    GEMINI_API_KEY: str = Field(default="", env="GEMINI_API_KEY")
    GEMINI_LLM_MODEL: str = "gemini-1.5-flash"

    # ============================================================================
    # GENERATION SETTINGS
    # ============================================================================
    LLM_TEMPERATURE: float = 0.7
    MAX_TOKENS: int = 500
    REQUEST_TIMEOUT: float = 30.0     # seconds; calls are never retried

    # ============================================================================
    # CONVERSATIONS
    # ============================================================================
    CONVERSATION_HISTORY_LIMIT: int = 10

    class Config:
        env_file = ".env"
        extra = "ignore"

    @property
    def current_llm_model(self) -> str:
        """Get active LLM model based on provider."""
        provider_map = {
            "openrouter": self.OPENROUTER_LLM_MODEL,
            "openai": self.OPENAI_LLM_MODEL,
            "ollama": self.OLLAMA_LLM_MODEL,
            "claude": self.CLAUDE_LLM_MODEL,
            "groq": self.GROQ_LLM_MODEL,
            "gemini": self.GEMINI_LLM_MODEL,
        }
        return provider_map.get(self.LLM_PROVIDER, self.OPENROUTER_LLM_MODEL)


ai_settings = AISettings()
