"""
Webhook endpoints for external integrations.

Provides the inbound email webhook called by the mail provider.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from db.repositories import MessageRepository
from db.session import get_db
from ingestion.pipeline import IngestionPipeline
from schemas.common import ErrorResponse
from schemas.messages import WebhookResponse

router = APIRouter(tags=["webhooks"])


def get_ingestion_pipeline(request: Request) -> IngestionPipeline:
    """FastAPI dependency returning the pipeline built at startup."""
    return request.app.state.ingestion_pipeline


@router.post(
    "/email",
    response_model=WebhookResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Malformed email payload"},
        401: {"model": ErrorResponse, "description": "Missing or invalid credentials"},
        500: {"model": ErrorResponse, "description": "Generation or storage failure"},
    },
)
async def receive_email(
    request: Request,
    db: AsyncSession = Depends(get_db),
    pipeline: IngestionPipeline = Depends(get_ingestion_pipeline),
) -> JSONResponse:
    """
    Ingest one parsed email posted by the inbound mail provider.

    The body is read only after the credentials check passes. A message id
    that is already stored is acknowledged with 200 and left unchanged.

    **Request Body (Postmark inbound naming):**
    ```json
    {
      "MessageID": "73e6d360-66eb-11e1-8e72-a8904824019b",
      "Subject": "Lunch on Friday?",
      "From": "alice@example.com",
      "To": "inbox@example.com",
      "Date": "Fri, 1 Mar 2024 09:30:00 +0000",
      "TextBody": "Are you free for lunch on Friday?",
      "Attachments": []
    }
    ```

    **Response:**
    ```json
    {"data": {"email": {...}, "summary": "...", "labels": ["scheduling"]}}
    ```
    """
    result = await pipeline.ingest(
        headers=request.headers,
        read_body=request.body,
        repository=MessageRepository(db),
    )
    return JSONResponse(status_code=result.status_code, content=result.body)
