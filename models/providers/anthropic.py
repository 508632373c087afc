"""
Anthropic LLM provider implementation.

Uses Claude tool calling for structured output via LangChain.
"""

from langchain_anthropic import ChatAnthropic
from langchain_core.messages import BaseMessage

from models.base import BaseLLM, SchemaT
from models.providers.structured import unpack_structured_result
from utils.logging import get_pipeline_logger

logger = get_pipeline_logger("anthropic_provider")


class AnthropicLLM(BaseLLM):
    """
    Anthropic (Claude) provider implementation.

    Supports models: claude-sonnet-4, claude-opus-4, claude-haiku-4
    """

    def __init__(
        self,
        model: str = "claude-sonnet-4-20250514",
        temperature: float = 0.2,
        timeout: int = 30,
        max_retries: int = 0,
        api_key: str | None = None,
    ):
        """
        Initialize Anthropic LLM provider.

        Args:
            model: Claude model name
            temperature: Sampling temperature (0.0-1.0 for Claude)
            timeout: Request timeout in seconds
            max_retries: Number of SDK-level retry attempts
            api_key: Anthropic API key
        """
        super().__init__(model, temperature, timeout, max_retries)

        if not api_key:
            raise ValueError(
                "Anthropic API key is required. Set ANTHROPIC_API_KEY env var or pass api_key parameter."
            )

        self._client = ChatAnthropic(
            model=model,
            temperature=temperature,
            anthropic_api_key=api_key,
            timeout=timeout,
            max_retries=max_retries,
        )

        logger.logger.debug(
            f"Initialized Anthropic provider: model={model}, temperature={temperature}"
        )

    @property
    def provider_name(self) -> str:
        return "anthropic"

    async def agenerate_structured(
        self, messages: list[BaseMessage], schema: type[SchemaT]
    ) -> SchemaT:
        """
        Generate a schema-conforming object using forced tool calling.

        Args:
            messages: List of LangChain messages
            schema: Pydantic model describing the expected output

        Returns:
            SchemaT: Parsed and validated object
        """
        runnable = self._client.with_structured_output(schema, include_raw=True)

        try:
            result = await runnable.ainvoke(messages)
            parsed, usage = unpack_structured_result(result, schema)
            self._record_metrics(
                prompt_tokens=usage.get("input_tokens"),
                completion_tokens=usage.get("output_tokens"),
            )
            return parsed

        except Exception as e:
            logger.failure(e, context="agenerate_structured_failed", model=self.model)
            raise
