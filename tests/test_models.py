"""Tests for LLM model factory and providers.

Tests model factory, provider initialization, and structured output handling.
"""

from unittest.mock import MagicMock

import pytest
from langchain_core.messages import AIMessage, HumanMessage

from config import Settings
from models.base import BaseLLM
from models.factory import LLMFactory
from models.providers.anthropic import AnthropicLLM
from models.providers.mock import MockLLM
from models.providers.openai import OpenAILLM
from models.providers.structured import StructuredOutputError, unpack_structured_result
from schemas.email import EmailSummary


@pytest.fixture
def llm_settings():
    """Create test settings with mock API keys."""
    return Settings(
        app_env="test",
        openai_api_key="test-openai-key",
        anthropic_api_key="test-anthropic-key",
        summary_model_provider="openai",
        summary_model_name="gpt-4o-mini",
        llm_timeout_seconds=12,
        mock_llm_responses=False,
    )


class TestLLMFactory:
    """Test LLM factory functionality."""

    def test_create_openai_provider(self, llm_settings):
        """Test creating OpenAI provider."""
        llm = LLMFactory(llm_settings).create(provider="openai", model="gpt-4o")

        assert isinstance(llm, OpenAILLM)
        assert isinstance(llm, BaseLLM)
        assert llm.model == "gpt-4o"
        assert llm.provider_name == "openai"

    def test_create_anthropic_provider(self, llm_settings):
        """Test creating Anthropic provider."""
        llm = LLMFactory(llm_settings).create(provider="anthropic")

        assert isinstance(llm, AnthropicLLM)
        assert llm.model == "claude-sonnet-4-20250514"
        assert llm.provider_name == "anthropic"

    def test_timeout_from_settings_and_no_retries(self, llm_settings):
        """Test the configured timeout is applied and retries are disabled."""
        llm = LLMFactory(llm_settings).create(provider="openai")

        assert llm.timeout == 12
        assert llm.max_retries == 0

    def test_create_default(self, llm_settings):
        """Test creating the summary LLM from settings."""
        llm = LLMFactory(llm_settings).create_default()

        assert isinstance(llm, OpenAILLM)
        assert llm.model == "gpt-4o-mini"

    def test_mock_flag_overrides_provider(self, llm_settings):
        """Test mock_llm_responses selects the offline provider."""
        settings = llm_settings.model_copy(update={"mock_llm_responses": True})
        llm = LLMFactory(settings).create_default()

        assert isinstance(llm, MockLLM)

    def test_create_missing_api_key(self):
        """Test creating LLM with missing API key."""
        settings = Settings(app_env="test", openai_api_key=None)

        with pytest.raises(ValueError, match="OPENAI_API_KEY is not set"):
            LLMFactory(settings).create(provider="openai")

    def test_create_invalid_provider(self, llm_settings):
        """Test creating LLM with invalid provider."""
        with pytest.raises(ValueError, match="Unknown provider"):
            LLMFactory(llm_settings).create(provider="invalid-provider")


class TestProviders:
    """Test provider construction."""

    def test_openai_requires_api_key(self):
        """Test OpenAI provider without key."""
        with pytest.raises(ValueError, match="OpenAI API key is required"):
            OpenAILLM(api_key=None)

    def test_anthropic_requires_api_key(self):
        """Test Anthropic provider without key."""
        with pytest.raises(ValueError, match="Anthropic API key is required"):
            AnthropicLLM(api_key=None)

    def test_invalid_temperature(self):
        """Test temperature validation."""
        with pytest.raises(ValueError, match="temperature must be between"):
            OpenAILLM(api_key="test-key", temperature=3.0)


class TestMockLLM:
    """Test the offline provider."""

    @pytest.mark.asyncio
    async def test_fixed_response(self):
        """Test a configured payload is validated against the schema."""
        llm = MockLLM(response={"summary": "Hello.", "labels": ["greeting"]})
        result, metrics = await llm.generate_structured_with_metrics(
            [HumanMessage(content="hi")], EmailSummary
        )

        assert result.summary == "Hello."
        assert metrics.provider == "mock"
        assert metrics.latency_ms is not None

    @pytest.mark.asyncio
    async def test_derived_response(self):
        """Test the default payload is derived from the prompt text."""
        llm = MockLLM()
        result = await llm.agenerate_structured(
            [HumanMessage(content="Quarterly   report attached")], EmailSummary
        )

        assert result.summary == "Quarterly report attached"
        assert result.labels == ["unreviewed"]


class TestUnpackStructuredResult:
    """Test handling of include_raw structured output results."""

    def test_parsed_object(self):
        """Test a parsed object and usage metadata are returned."""
        raw = AIMessage(
            content="",
            usage_metadata={"input_tokens": 10, "output_tokens": 5, "total_tokens": 15},
        )
        parsed = EmailSummary(summary="Hi.", labels=[])

        result, usage = unpack_structured_result(
            {"raw": raw, "parsed": parsed, "parsing_error": None}, EmailSummary
        )

        assert result is parsed
        assert usage["input_tokens"] == 10

    def test_dict_is_validated(self):
        """Test a dict payload is converted to the schema."""
        result, usage = unpack_structured_result(
            {"raw": MagicMock(usage_metadata=None), "parsed": {"summary": "Hi.", "labels": []}},
            EmailSummary,
        )

        assert isinstance(result, EmailSummary)
        assert usage == {}

    def test_parsing_error(self):
        """Test a parsing error is raised as StructuredOutputError."""
        with pytest.raises(StructuredOutputError, match="did not match EmailSummary"):
            unpack_structured_result(
                {"raw": None, "parsed": None, "parsing_error": ValueError("bad json")},
                EmailSummary,
            )

    def test_missing_object(self):
        """Test a result with nothing parsed."""
        with pytest.raises(StructuredOutputError, match="returned no EmailSummary"):
            unpack_structured_result({"raw": None, "parsed": None}, EmailSummary)
