"""Repository pattern for database access.

Provides clean abstraction layer between the ingestion pipeline and database
operations. Follows async patterns for FastAPI integration.
"""

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from db.models import EmailMessage
from schemas.email import EmailSummary, InboundEmail

_INSERT_BY_DIALECT = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class MessageRepository:
    """Repository for ingested email messages."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _insert(self):
        dialect = self.session.get_bind().dialect.name
        try:
            return _INSERT_BY_DIALECT[dialect]
        except KeyError:
            raise RuntimeError(
                f"Insert-or-ignore is not supported on the '{dialect}' dialect"
            ) from None

    async def insert_ignoring_conflict(
        self, email: InboundEmail, generated: EmailSummary
    ) -> bool:
        """Insert a message unless one with the same id already exists.

        Duplicate deliveries of the same provider message id are a silent
        no-op: the existing row, including its summary, labels and
        timestamps, is left untouched.

        Args:
            email: Validated inbound email
            generated: Summary and labels produced for the email

        Returns:
            True if a row was created, False if the id was already stored
        """
        stmt = (
            self._insert()(EmailMessage)
            .values(
                id=email.message_id,
                subject=email.subject,
                sender=email.sender,
                recipient=email.recipient,
                date=email.date,
                body=email.body,
                attachments=email.attachments_blob(),
                summary=generated.summary,
                labels=list(generated.labels),
            )
            .on_conflict_do_nothing(index_elements=["id"])
            .returning(EmailMessage.id)
        )

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def list_all_ordered_by_creation(self) -> list[EmailMessage]:
        """Retrieve every stored message.

        Returns:
            List of EmailMessage instances ordered by created_at ascending
        """
        query = select(EmailMessage).order_by(
            EmailMessage.created_at.asc(), EmailMessage.id.asc()
        )

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_by_id(self, message_id: str) -> EmailMessage | None:
        """Retrieve a message by its provider id.

        Args:
            message_id: Provider-assigned message id

        Returns:
            EmailMessage instance if found, None otherwise
        """
        query = select(EmailMessage).where(EmailMessage.id == message_id)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()
