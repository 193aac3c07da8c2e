# app/AIassistant/llm_providers.py
"""
Chat Model Providers for the AI Assistant
OpenRouter: OpenAI-compatible gateway (default)
OpenAI / Claude / Ollama / Groq / Gemini: direct providers
"""
import logging

from config.aiconfig import ai_settings

logger = logging.getLogger(__name__)


def get_openrouter_llm():
    """
    OpenRouter speaks the OpenAI chat completions protocol, so the OpenAI
    chat model is pointed at its base URL with the attribution headers it expects.
    """
    from langchain_openai import ChatOpenAI

    if not ai_settings.OPENROUTER_API_KEY:
        raise ValueError("OPENROUTER_API_KEY not set in environment")

    return ChatOpenAI(
        model=ai_settings.OPENROUTER_LLM_MODEL,
        api_key=ai_settings.OPENROUTER_API_KEY,
        base_url=ai_settings.OPENROUTER_BASE_URL,
        temperature=ai_settings.LLM_TEMPERATURE,
        max_tokens=ai_settings.MAX_TOKENS,
        timeout=ai_settings.REQUEST_TIMEOUT,
        max_retries=0,
        default_headers={
            "HTTP-Referer": ai_settings.OPENROUTER_REFERER,
            "X-Title": ai_settings.OPENROUTER_TITLE,
        },
    )


def get_groq_llm():
    """
    Get Groq LLM for text generation.
    Uses Groq's LPU for low-latency inference.
    """
    try:
        from langchain_groq import ChatGroq
    except ImportError:
        raise ImportError("langchain-groq not installed. Run: pip install langchain-groq")

    if not ai_settings.GROQ_API_KEY:
        raise ValueError("GROQ_API_KEY not set in environment")

    llm = ChatGroq(
        model=ai_settings.GROQ_LLM_MODEL,
        temperature=ai_settings.LLM_TEMPERATURE,
        max_tokens=ai_settings.MAX_TOKENS,
        timeout=ai_settings.REQUEST_TIMEOUT,
        max_retries=0,
        groq_api_key=ai_settings.GROQ_API_KEY,
    )
    logger.info(f"✅ Groq LLM initialized: {ai_settings.GROQ_LLM_MODEL}")
    return llm


def get_gemini_llm():
    """Get Gemini LLM for text generation."""
    try:
        from langchain_google_genai import ChatGoogleGenerativeAI
    except ImportError:
        raise ImportError("langchain-google-genai not installed. Run: pip install langchain-google-genai")

    if not ai_settings.GEMINI_API_KEY:
        raise ValueError("GEMINI_API_KEY not set in environment")

    llm = ChatGoogleGenerativeAI(
        model=ai_settings.GEMINI_LLM_MODEL,
        temperature=ai_settings.LLM_TEMPERATURE,
        max_output_tokens=ai_settings.MAX_TOKENS,
        timeout=ai_settings.REQUEST_TIMEOUT,
        max_retries=0,
        google_api_key=ai_settings.GEMINI_API_KEY,
    )
    logger.info(f"✅ Gemini LLM initialized: {ai_settings.GEMINI_LLM_MODEL}")
    return llm


def get_llm_by_provider(provider: str = None):
    """
    Get chat model instance based on provider.

    Args:
        provider: Override ai_settings.LLM_PROVIDER

    Returns:
        LangChain chat model instance
    """
    provider = provider or ai_settings.LLM_PROVIDER

    if provider == "openrouter":
        return get_openrouter_llm()

    elif provider == "openai":
        from langchain_openai import ChatOpenAI
        return ChatOpenAI(
            model=ai_settings.OPENAI_LLM_MODEL,
            api_key=ai_settings.OPENAI_API_KEY or None,
            temperature=ai_settings.LLM_TEMPERATURE,
            max_tokens=ai_settings.MAX_TOKENS,
            timeout=ai_settings.REQUEST_TIMEOUT,
            max_retries=0,
        )

    elif provider == "ollama":
        from langchain_ollama import ChatOllama
        return ChatOllama(
            model=ai_settings.OLLAMA_LLM_MODEL,
            temperature=ai_settings.LLM_TEMPERATURE,
            num_predict=ai_settings.MAX_TOKENS,
            client_kwargs={"timeout": ai_settings.REQUEST_TIMEOUT},
        )

    elif provider == "claude":
        from langchain_anthropic import ChatAnthropic
        return ChatAnthropic(
            model=ai_settings.CLAUDE_LLM_MODEL,
            api_key=ai_settings.CLAUDE_API_KEY or None,
            temperature=ai_settings.LLM_TEMPERATURE,
            max_tokens=ai_settings.MAX_TOKENS,
            timeout=ai_settings.REQUEST_TIMEOUT,
            max_retries=0,
        )

    elif provider == "groq":
        return get_groq_llm()

    elif provider == "gemini":
        return get_gemini_llm()

    else:
        raise ValueError(f"Unknown LLM provider: {provider}")
