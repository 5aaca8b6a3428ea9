# src/docqa_kit/llms/config.py

from dataclasses import dataclass
from typing import Literal

DEFAULT_OPENAI_MODEL = "gpt-4o-mini"
DEFAULT_ANTHROPIC_MODEL = "claude-sonnet-4-20250514"


@dataclass(frozen=True)
class LLMConfig:
    """Configuration for LLM clients.

    Immutable. No defaults read from the environment here; a missing
    ``api_key`` lets the provider SDK fall back to its own env var.
    """

    provider: Literal["openai", "anthropic"]
    model: str | None = None  # provider default when unset
    api_key: str | None = None
    timeout: float = 30.0
    max_retries: int = 3
