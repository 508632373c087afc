"""
Email Summarizer Agent - produces a short summary and topical labels.

Sends a validated inbound email to a structured-output LLM and normalizes
the returned ``EmailSummary``.
"""

import json
from pathlib import Path

from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage

from ingestion.errors import GenerationError
from models.base import BaseLLM
from schemas.email import EmailSummary, InboundEmail
from utils.logging import get_pipeline_logger

logger = get_pipeline_logger("email_summarizer")

MAX_LABELS = 2


class EmailSummarizer:
    """
    Summary generator for ingested emails.

    One LLM call per email, no retries. Determinism is not required; the
    model output is accepted as-is after light normalization.
    """

    def __init__(self, llm: BaseLLM, prompts_dir: Path | None = None):
        """
        Initialize Email Summarizer agent.

        Args:
            llm: LLM instance to use for structured generation
            prompts_dir: Directory containing prompt templates (defaults to agents/prompts/email_summarizer)
        """
        self.llm = llm

        if prompts_dir is None:
            prompts_dir = Path(__file__).parent / "prompts" / "email_summarizer"
        self.prompts_dir = prompts_dir
        self.system_prompt, self.user_template = self._load_prompts()

        logger.logger.info(
            f"Initialized EmailSummarizer with {llm.provider_name}:{llm.model}"
        )

    def _load_prompts(self) -> tuple[str, str]:
        """
        Load the active prompt version.

        Returns:
            Tuple of (system prompt, user prompt template)

        Raises:
            FileNotFoundError: If prompt files don't exist
        """
        active_path = self.prompts_dir / "active.json"
        with open(active_path) as f:
            active_config = json.load(f)

        version = active_config["version"]
        logger.logger.debug(f"Loading prompt version: {version}")

        with open(self.prompts_dir / f"{version}_system.txt") as f:
            system_prompt = f.read().strip()
        with open(self.prompts_dir / f"{version}_user.txt") as f:
            user_template = f.read().strip()

        return system_prompt, user_template

    def build_messages(self, email: InboundEmail) -> list[BaseMessage]:
        """Build the system and user messages for one email."""
        email_json = json.dumps(email.to_wire(), ensure_ascii=False)
        return [
            SystemMessage(content=self.system_prompt),
            HumanMessage(content=self.user_template.format(email_json=email_json)),
        ]

    async def summarize(self, email: InboundEmail) -> EmailSummary:
        """
        Generate a summary and labels for an email.

        Args:
            email: Validated inbound email

        Returns:
            EmailSummary with a non-empty summary and at most two labels

        Raises:
            GenerationError: If the LLM call fails or returns an empty summary
        """
        messages = self.build_messages(email)

        try:
            result, metrics = await self.llm.generate_structured_with_metrics(
                messages, EmailSummary
            )
        except Exception as e:
            raise GenerationError(
                f"Summary generation failed for message {email.message_id}"
            ) from e

        logger.llm_call(
            model=metrics.model,
            provider=metrics.provider,
            latency_ms=metrics.latency_ms,
            prompt_tokens=metrics.prompt_tokens,
            completion_tokens=metrics.completion_tokens,
            message_id=email.message_id,
        )

        return self._normalize(result, email.message_id)

    @staticmethod
    def _normalize(result: EmailSummary, message_id: str) -> EmailSummary:
        """Strip whitespace, drop empty labels and cap the label count."""
        summary = result.summary.strip()
        if not summary:
            raise GenerationError(f"Model returned an empty summary for message {message_id}")

        labels = [label.strip() for label in result.labels if label and label.strip()]
        if len(labels) > MAX_LABELS:
            logger.logger.debug(
                f"Truncating {len(labels)} labels to {MAX_LABELS}",
                extra={"message_id": message_id},
            )
            labels = labels[:MAX_LABELS]

        return EmailSummary(summary=summary, labels=labels)
