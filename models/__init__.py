"""
Model abstraction layer for LLM providers.

Provides a unified structured-generation interface for OpenAI, Anthropic and
an offline mock provider.
"""

from models.base import BaseLLM, LLMCallMetrics
from models.factory import LLMFactory

__all__ = [
    "BaseLLM",
    "LLMCallMetrics",
    "LLMFactory",
]
