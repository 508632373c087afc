"""
Base interface for LLM providers.

Defines the common interface that all LLM providers (OpenAI, Anthropic, mock)
must implement so the summarizer can switch providers through configuration.
"""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TypeVar

from langchain_core.messages import BaseMessage
from pydantic import BaseModel

SchemaT = TypeVar("SchemaT", bound=BaseModel)


@dataclass
class LLMCallMetrics:
    """Metrics captured from an LLM API call."""

    model: str
    provider: str
    prompt_tokens: int | None = None
    completion_tokens: int | None = None
    total_tokens: int | None = None
    latency_ms: float | None = None


class BaseLLM(ABC):
    """
    Abstract base class for LLM providers.

    All providers implement structured generation: the model is constrained
    to return an object matching a Pydantic schema, which the provider
    validates before returning it.
    """

    def __init__(
        self,
        model: str,
        temperature: float = 0.2,
        timeout: int = 30,
        max_retries: int = 0,
    ):
        """
        Initialize base LLM provider.

        Args:
            model: Model name (provider-specific, e.g., "gpt-4o", "claude-sonnet-4")
            temperature: Sampling temperature (0.0-2.0, lower = more deterministic)
            timeout: Request timeout in seconds
            max_retries: Number of SDK-level retry attempts (0 disables retries)
        """
        self.model = model
        self.temperature = self._validate_temperature(temperature)
        self.timeout = timeout
        self.max_retries = max_retries
        self._last_metrics: LLMCallMetrics | None = None

    @staticmethod
    def _validate_temperature(temperature: float) -> float:
        """Validate temperature is in valid range."""
        if not (0.0 <= temperature <= 2.0):
            raise ValueError(f"temperature must be between 0.0 and 2.0, got {temperature}")
        return temperature

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider name (e.g., 'openai', 'anthropic', 'mock')."""
        pass

    @abstractmethod
    async def agenerate_structured(
        self, messages: list[BaseMessage], schema: type[SchemaT]
    ) -> SchemaT:
        """
        Async generate an object conforming to ``schema``.

        Args:
            messages: List of LangChain messages (SystemMessage, HumanMessage)
            schema: Pydantic model describing the expected output

        Returns:
            SchemaT: Validated instance of ``schema``

        Raises:
            Exception: Provider errors, timeouts, or output that does not
                match the schema propagate unchanged
        """
        pass

    def _record_metrics(
        self,
        prompt_tokens: int | None = None,
        completion_tokens: int | None = None,
        latency_ms: float | None = None,
    ) -> None:
        """Record metrics from an API call."""
        self._last_metrics = LLMCallMetrics(
            model=self.model,
            provider=self.provider_name,
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            total_tokens=(
                (prompt_tokens or 0) + (completion_tokens or 0)
                if prompt_tokens is not None and completion_tokens is not None
                else None
            ),
            latency_ms=latency_ms,
        )

    async def generate_structured_with_metrics(
        self, messages: list[BaseMessage], schema: type[SchemaT]
    ) -> tuple[SchemaT, LLMCallMetrics]:
        """
        Generate a structured object and return it with call metrics.

        Args:
            messages: List of LangChain messages
            schema: Pydantic model describing the expected output

        Returns:
            tuple[SchemaT, LLMCallMetrics]: Parsed object and call metrics
        """
        start_time = time.time()
        result = await self.agenerate_structured(messages, schema)
        latency_ms = (time.time() - start_time) * 1000

        if self._last_metrics:
            self._last_metrics.latency_ms = latency_ms

        return result, self._last_metrics or LLMCallMetrics(
            model=self.model,
            provider=self.provider_name,
            latency_ms=latency_ms,
        )

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"model={self.model}, "
            f"temperature={self.temperature}, "
            f"timeout={self.timeout})"
        )
