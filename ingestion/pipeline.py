"""
Webhook ingestion pipeline.

Runs one inbound webhook call through
authenticate -> validate -> enrich -> persist and maps every outcome to an
HTTP status code and JSON body. Each stage short-circuits on failure; nothing
is written unless generation has completed, and nothing is retried.
"""

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from agents.email_summarizer import EmailSummarizer
from config import Settings
from db.repositories import MessageRepository
from ingestion.errors import (
    AuthError,
    IngestionError,
    PayloadValidationError,
    StoreError,
)
from ingestion.validation import parse_inbound_email
from models.factory import LLMFactory
from schemas.email import EmailSummary, InboundEmail
from security.verifiers import CredentialVerifier, build_verifier
from utils.logging import get_pipeline_logger

logger = get_pipeline_logger("ingestion")


@dataclass
class IngestionResult:
    """Outcome of one webhook call."""

    status_code: int
    body: dict[str, Any]
    message_id: str | None = None
    created: bool = False
    labels: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status_code == 200


class IngestionPipeline:
    """
    Composes credential verification, payload validation, summary
    generation and the message store into one request flow.
    """

    def __init__(self, verifier: CredentialVerifier, summarizer: EmailSummarizer):
        """
        Initialize the pipeline.

        Args:
            verifier: Credential check applied before the body is read
            summarizer: Summary/label generator
        """
        self.verifier = verifier
        self.summarizer = summarizer

    @classmethod
    def from_settings(cls, settings: Settings) -> "IngestionPipeline":
        """
        Build the pipeline from explicit settings.

        Raises:
            ValueError: If webhook credentials or the LLM API key are missing
        """
        llm = LLMFactory(settings).create_default()
        return cls(
            verifier=build_verifier(settings),
            summarizer=EmailSummarizer(llm, prompts_dir=settings.email_summarizer_prompts_dir),
        )

    async def ingest(
        self,
        headers: Mapping[str, str],
        read_body: Callable[[], Awaitable[bytes]],
        repository: MessageRepository,
    ) -> IngestionResult:
        """
        Process one webhook call.

        Args:
            headers: Request headers
            read_body: Coroutine function returning the raw body; only
                awaited after authentication succeeds
            repository: Message store bound to the request's session

        Returns:
            IngestionResult: 200 on success (new or duplicate id), 401 on
            auth failure, 400 on invalid payload, 500 otherwise
        """
        message_id: str | None = None

        try:
            self.verifier.verify(headers)
            logger.stage("authenticated", scheme=self.verifier.scheme)

            email = parse_inbound_email(await read_body())
            message_id = email.message_id
            logger.stage("validated", message_id=message_id)

            generated = await self.summarizer.summarize(email)
            logger.stage("enriched", message_id=message_id, labels=generated.labels)

            created = await self._persist(repository, email, generated)
            logger.stage("persisted", message_id=message_id, inserted=created)

        except AuthError as e:
            logger.rejected(e.status_code, e.reason)
            return IngestionResult(status_code=e.status_code, body=e.to_body())

        except PayloadValidationError as e:
            logger.rejected(e.status_code, str(e))
            return IngestionResult(status_code=e.status_code, body=e.to_body())

        except IngestionError as e:
            logger.failure(e, context=type(e).__name__, message_id=message_id)
            return IngestionResult(
                status_code=e.status_code, body=e.to_body(), message_id=message_id
            )

        except Exception as e:
            logger.failure(e, context="unexpected_error", message_id=message_id)
            return IngestionResult(
                status_code=500,
                body=IngestionError().to_body(),
                message_id=message_id,
            )

        return IngestionResult(
            status_code=200,
            body={
                "data": {
                    "email": email.to_wire(),
                    "summary": generated.summary,
                    "labels": generated.labels,
                }
            },
            message_id=message_id,
            created=created,
            labels=generated.labels,
        )

    @staticmethod
    async def _persist(
        repository: MessageRepository, email: InboundEmail, generated: EmailSummary
    ) -> bool:
        """Insert-or-ignore and commit; any database failure becomes StoreError."""
        try:
            created = await repository.insert_ignoring_conflict(email, generated)
            await repository.session.commit()
            return created
        except Exception as e:
            await repository.session.rollback()
            raise StoreError(f"Failed to persist message {email.message_id}") from e
