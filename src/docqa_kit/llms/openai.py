# src/docqa_kit/llms/openai.py

import logging
from time import monotonic
from typing import Any

from openai import NOT_GIVEN, AsyncOpenAI, OpenAIError
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from docqa_kit.observability import names
from docqa_kit.observability.base import MetricsHook, NoOpMetricsHook

from .base import FinishReason, LLMClient, LLMResponse, Message, Usage
from .config import DEFAULT_OPENAI_MODEL

logger = logging.getLogger(__name__)

_FINISH_REASONS: dict[str, FinishReason] = {"stop": "stop", "length": "length"}


class OpenAILLMClient(LLMClient):
    """OpenAI chat completions client.

    Stateless. Transport-only retries.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_OPENAI_MODEL,
        timeout: float = 30.0,
        max_retries: int = 3,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ):
        self._client = AsyncOpenAI(api_key=api_key, timeout=timeout)
        self._model = model
        self._max_retries = max_retries
        self.metrics_hook = metrics_hook
        logger.info(
            "Initialized OpenAILLMClient with model=%s, timeout=%s",
            model,
            timeout,
        )

    async def complete(
        self,
        *,
        messages: list[Message],
        temperature: float = 0.0,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        start = monotonic()
        logger.debug("Calling OpenAI: model=%s, messages=%d", self._model, len(messages))

        raw = await self._call_api(
            messages=[{"role": m.role.value, "content": m.content} for m in messages],
            temperature=temperature,
            max_tokens=max_tokens,
        )

        elapsed_ms = 1000 * (monotonic() - start)
        response = self._normalize_response(raw, elapsed_ms)

        labels = {"provider": "openai", "model": self._model}
        self.metrics_hook.record_latency(names.LLM_COMPLETION_DURATION, elapsed_ms, labels)
        self.metrics_hook.increment(names.LLM_REQUESTS_TOTAL, labels=labels)
        self.metrics_hook.increment(names.LLM_TOKENS_PROMPT, response.usage.prompt_tokens)
        self.metrics_hook.increment(
            names.LLM_TOKENS_COMPLETION, response.usage.completion_tokens
        )
        self.metrics_hook.increment(names.LLM_TOKENS_TOTAL, response.usage.total_tokens)

        logger.info(
            "OpenAI completion: finish=%s, tokens=%d, latency=%.0fms",
            response.finish_reason,
            response.usage.total_tokens,
            elapsed_ms,
        )
        return response

    async def _call_api(
        self,
        *,
        messages: list[dict[str, Any]],
        temperature: float,
        max_tokens: int | None,
    ) -> Any:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self._max_retries),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=10),
            retry=retry_if_exception_type(OpenAIError),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        ):
            with attempt:
                return await self._client.chat.completions.create(
                    model=self._model,
                    messages=messages,  # type: ignore[arg-type]
                    temperature=temperature,
                    max_tokens=max_tokens if max_tokens else NOT_GIVEN,
                )

    def _normalize_response(self, raw: Any, latency_ms: float) -> LLMResponse:
        choice = raw.choices[0]
        return LLMResponse(
            content=choice.message.content,
            finish_reason=_FINISH_REASONS.get(choice.finish_reason, "error"),
            usage=Usage(
                prompt_tokens=raw.usage.prompt_tokens,
                completion_tokens=raw.usage.completion_tokens,
                total_tokens=raw.usage.total_tokens,
            ),
            latency_ms=latency_ms,
        )
