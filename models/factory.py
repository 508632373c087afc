"""
LLM factory for creating the model used by the email summarizer.

Provides:
- Model creation based on provider and model name
- API key management from settings
- Offline mock provider selection for tests and local runs
"""

from typing import Literal

from config import Settings, get_settings
from models.base import BaseLLM
from models.providers.anthropic import AnthropicLLM
from models.providers.mock import MockLLM
from models.providers.openai import OpenAILLM
from utils.logging import get_pipeline_logger
from utils.secrets import secret_to_str

logger = get_pipeline_logger("llm_factory")

ProviderType = Literal["openai", "anthropic", "mock"]


class LLMFactory:
    """
    Factory for creating LLM instances across providers.

    Handles:
    - Provider-specific initialization
    - API key management
    - Default model selection
    - Error handling for missing credentials
    """

    def __init__(self, settings: Settings | None = None):
        """
        Initialize LLM factory.

        Args:
            settings: Application settings (if None, uses get_settings())
        """
        self.settings = settings or get_settings()

    def create(
        self,
        provider: ProviderType,
        model: str | None = None,
        temperature: float | None = None,
        timeout: int | None = None,
    ) -> BaseLLM:
        """
        Create an LLM instance for the specified provider.

        Retries are always disabled: a failed generation surfaces to the
        caller and the upstream provider's redelivery acts as the retry.

        Args:
            provider: LLM provider ('openai', 'anthropic', 'mock')
            model: Model name (if None, uses provider's default)
            temperature: Sampling temperature (if None, uses settings.summary_temperature)
            timeout: Request timeout (if None, uses settings.llm_timeout_seconds)

        Returns:
            BaseLLM: Configured LLM instance

        Raises:
            ValueError: If API key is missing or provider is invalid
        """
        temperature = (
            temperature if temperature is not None else self.settings.summary_temperature
        )
        timeout = timeout if timeout is not None else self.settings.llm_timeout_seconds

        if provider == "openai":
            api_key = secret_to_str(self.settings.openai_api_key)
            if not api_key:
                raise ValueError("OPENAI_API_KEY is not set. Configure it in your .env file.")

            return OpenAILLM(
                model=model or "gpt-4o-2024-08-06",
                temperature=temperature,
                timeout=timeout,
                max_retries=0,
                api_key=api_key,
            )

        elif provider == "anthropic":
            api_key = secret_to_str(self.settings.anthropic_api_key)
            if not api_key:
                raise ValueError("ANTHROPIC_API_KEY is not set. Configure it in your .env file.")

            return AnthropicLLM(
                model=model or "claude-sonnet-4-20250514",
                temperature=temperature,
                timeout=timeout,
                max_retries=0,
                api_key=api_key,
            )

        elif provider == "mock":
            return MockLLM(model=model or "mock")

        else:
            raise ValueError(
                f"Unknown provider: {provider}. Must be one of: openai, anthropic, mock"
            )

    def create_default(self) -> BaseLLM:
        """
        Create the summary LLM configured in settings.

        ``mock_llm_responses`` overrides the configured provider.

        Returns:
            BaseLLM: Configured LLM
        """
        if self.settings.mock_llm_responses:
            logger.logger.warning("MOCK_LLM_RESPONSES enabled - summaries are not generated by a model")
            return self.create(provider="mock")

        return self.create(
            provider=self.settings.summary_model_provider,
            model=self.settings.summary_model_name,
        )

