"""
Offline provider used when ``MOCK_LLM_RESPONSES`` is enabled.

Returns a canned object without any network access so the service can run
locally and in CI without API keys.
"""

from typing import Any

from langchain_core.messages import BaseMessage, HumanMessage

from models.base import BaseLLM, SchemaT


class MockLLM(BaseLLM):
    """Deterministic stand-in for a hosted model."""

    def __init__(self, model: str = "mock", response: dict[str, Any] | None = None):
        """
        Initialize the mock provider.

        Args:
            model: Name reported in metrics
            response: Fixed payload validated against the requested schema.
                When omitted, a summary is derived from the prompt text.
        """
        super().__init__(model, temperature=0.0, timeout=0, max_retries=0)
        self.response = response
        self.calls: list[list[BaseMessage]] = []

    @property
    def provider_name(self) -> str:
        return "mock"

    async def agenerate_structured(
        self, messages: list[BaseMessage], schema: type[SchemaT]
    ) -> SchemaT:
        self.calls.append(list(messages))
        payload = self.response if self.response is not None else self._derive(messages)
        self._record_metrics(prompt_tokens=0, completion_tokens=0)
        return schema.model_validate(payload)

    @staticmethod
    def _derive(messages: list[BaseMessage]) -> dict[str, Any]:
        prompt = next(
            (m.content for m in reversed(messages) if isinstance(m, HumanMessage)), ""
        )
        text = " ".join(str(prompt).split())
        if len(text) > 160:
            text = text[:157] + "..."
        return {"summary": text or "No content.", "labels": ["unreviewed"]}
