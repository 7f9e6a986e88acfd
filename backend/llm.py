from langchain_anthropic import ChatAnthropic
from langchain_core.language_models import BaseChatModel
from langchain_ollama import ChatOllama
from backend.config import settings
from backend.errors import UpstreamError


class LLMConfigurationError(UpstreamError):
    message = "Language model provider is not configured"


def get_llm() -> BaseChatModel:
    """Factory function to return the chat model selected in config"""
    if settings.ai_provider.lower() == "claude":
        if not settings.claude_api_key:
            raise LLMConfigurationError("CLAUDE_API_KEY not set in environment variables")
        return ChatAnthropic(
            model=settings.claude_model,
            api_key=settings.claude_api_key,
            temperature=settings.llm_temperature,
            max_tokens=settings.llm_max_tokens
        )

    return ChatOllama(
        model=settings.ollama_model,
        base_url=settings.ollama_base_url,
        temperature=settings.llm_temperature,
        format="json"
    )
