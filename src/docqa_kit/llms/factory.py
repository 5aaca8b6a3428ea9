# src/docqa_kit/llms/factory.py

from docqa_kit.observability.base import MetricsHook, NoOpMetricsHook

from .base import LLMClient
from .config import DEFAULT_ANTHROPIC_MODEL, DEFAULT_OPENAI_MODEL, LLMConfig

_DEFAULT_MODELS = {
    "openai": DEFAULT_OPENAI_MODEL,
    "anthropic": DEFAULT_ANTHROPIC_MODEL,
}


def create_llm_client(
    config: LLMConfig,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> LLMClient:
    """Create the answering LLM named by ``config.provider``.

    Without ``config.model`` the provider's default answering model is used.

    Raises:
        ValueError: If provider is unknown.

    Example:
        >>> llm = create_llm_client(LLMConfig(provider="openai"))
        >>> qa = DocumentQA(embeddings, vector_store, llm)
    """
    if config.provider not in _DEFAULT_MODELS:
        raise ValueError(f"Unknown LLM provider: {config.provider}")
    model = config.model or _DEFAULT_MODELS[config.provider]

    if config.provider == "openai":
        from .openai import OpenAILLMClient

        return OpenAILLMClient(
            api_key=config.api_key,
            model=model,
            timeout=config.timeout,
            max_retries=config.max_retries,
            metrics_hook=metrics_hook,
        )

    from .anthropic import AnthropicLLMClient

    return AnthropicLLMClient(
        api_key=config.api_key,
        model=model,
        timeout=config.timeout,
        max_retries=config.max_retries,
        metrics_hook=metrics_hook,
    )
