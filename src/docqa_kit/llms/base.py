# src/docqa_kit/llms/base.py

from dataclasses import dataclass
from enum import Enum
from typing import Literal, Protocol

from docqa_kit.observability.base import MetricsHook

FinishReason = Literal["stop", "length", "error"]


class Role(str, Enum):
    """Message role in a conversation."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Message:
    """A single message in the conversation."""

    role: Role
    content: str


@dataclass(frozen=True)
class Usage:
    """Token usage for a completion."""

    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


@dataclass(frozen=True)
class LLMResponse:
    """Provider-agnostic completion result.

    Raw provider objects never leave the adapter.
    """

    content: str | None
    finish_reason: FinishReason
    usage: Usage
    latency_ms: float

    @property
    def text(self) -> str:
        return self.content or ""


class LLMClient(Protocol):
    """Protocol for LLM clients.

    Stateless: every call receives the full message list. Adapters retry
    transport errors only and never inspect or repair the model's output.
    """

    metrics_hook: MetricsHook

    async def complete(
        self,
        *,
        messages: list[Message],
        temperature: float = 0.0,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        """Single completion.

        Args:
            messages: Complete conversation history.
            temperature: Sampling temperature.
            max_tokens: Maximum tokens in the response.

        Raises:
            Provider-specific errors after retry exhaustion.
        """
        ...
