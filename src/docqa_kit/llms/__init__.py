# src/docqa_kit/llms/__init__.py

"""LLM client layer.

A thin, stateless abstraction over the answer-generating model.

Example:
    >>> from docqa_kit.llms import create_llm_client, LLMConfig, Message, Role
    >>>
    >>> client = create_llm_client(LLMConfig(provider="openai"))
    >>> response = await client.complete(
    ...     messages=[Message(role=Role.USER, content="Hello!")]
    ... )
    >>> print(response.text)
"""

from .base import FinishReason, LLMClient, LLMResponse, Message, Role, Usage
from .config import DEFAULT_ANTHROPIC_MODEL, DEFAULT_OPENAI_MODEL, LLMConfig
from .factory import create_llm_client

__all__ = [
    # Factory
    "create_llm_client",
    # Protocol
    "LLMClient",
    # Config
    "DEFAULT_ANTHROPIC_MODEL",
    "DEFAULT_OPENAI_MODEL",
    "LLMConfig",
    # Types
    "FinishReason",
    "LLMResponse",
    "Message",
    "Role",
    "Usage",
]
