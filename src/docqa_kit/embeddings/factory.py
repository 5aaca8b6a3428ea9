# src/docqa_kit/embeddings/factory.py

from docqa_kit.observability.base import MetricsHook, NoOpMetricsHook

from .base import EmbeddingsClient
from .config import EmbeddingsConfig


def create_embeddings_client(
    config: EmbeddingsConfig,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> EmbeddingsClient:
    """Build the embeddings client named by ``config.provider``.

    Provider modules are imported lazily so that a deployment using only one
    backend does not need the other's SDK.

    Raises:
        ValueError: If provider is unknown.
    """
    if config.provider == "local":
        from .local import LocalEmbeddingsClient

        return LocalEmbeddingsClient(
            model_name=config.model,
            batch_size=config.batch_size,
            normalize=config.normalize,
            metrics_hook=metrics_hook,
        )

    if config.provider == "openai":
        from .openai import OpenAIEmbeddingsClient

        return OpenAIEmbeddingsClient(
            api_key=config.api_key,
            model=config.model,
            timeout=config.timeout,
            batch_size=config.batch_size,
            metrics_hook=metrics_hook,
        )

    raise ValueError(f"Unknown embeddings provider: {config.provider}")
