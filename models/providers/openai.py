"""
OpenAI LLM provider implementation.

Uses OpenAI structured outputs (strict JSON schema) via LangChain.
"""

from langchain_core.messages import BaseMessage
from langchain_openai import ChatOpenAI

from models.base import BaseLLM, SchemaT
from models.providers.structured import unpack_structured_result
from utils.logging import get_pipeline_logger

logger = get_pipeline_logger("openai_provider")


class OpenAILLM(BaseLLM):
    """
    OpenAI provider implementation.

    Structured outputs require gpt-4o-2024-08-06 or newer (gpt-4o-mini, gpt-4.1, gpt-5).
    """

    def __init__(
        self,
        model: str = "gpt-4o-2024-08-06",
        temperature: float = 0.2,
        timeout: int = 30,
        max_retries: int = 0,
        api_key: str | None = None,
    ):
        """
        Initialize OpenAI LLM provider.

        Args:
            model: OpenAI model name
            temperature: Sampling temperature (0.0-2.0)
            timeout: Request timeout in seconds
            max_retries: Number of SDK-level retry attempts
            api_key: OpenAI API key
        """
        super().__init__(model, temperature, timeout, max_retries)

        if not api_key:
            raise ValueError(
                "OpenAI API key is required. Set OPENAI_API_KEY env var or pass api_key parameter."
            )

        self._client = ChatOpenAI(
            model=model,
            temperature=temperature,
            api_key=api_key,
            timeout=timeout,
            max_retries=max_retries,
        )

        logger.logger.debug(
            f"Initialized OpenAI provider: model={model}, temperature={temperature}"
        )

    @property
    def provider_name(self) -> str:
        return "openai"

    async def agenerate_structured(
        self, messages: list[BaseMessage], schema: type[SchemaT]
    ) -> SchemaT:
        """
        Generate a schema-conforming object using OpenAI structured outputs.

        Args:
            messages: List of LangChain messages
            schema: Pydantic model describing the expected output

        Returns:
            SchemaT: Parsed and validated object
        """
        runnable = self._client.with_structured_output(
            schema, method="json_schema", strict=True, include_raw=True
        )

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
