"""
Messages API endpoints.

Read side for stored emails and their generated summaries.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from db.repositories import MessageRepository
from db.session import get_db
from schemas.messages import MessageDetailResponse, MessageListResponse, MessageOut
from utils.logging import get_pipeline_logger

router = APIRouter(tags=["Messages"])
logger = get_pipeline_logger("api.messages")


@router.get("", response_model=MessageListResponse)
async def list_messages(db: AsyncSession = Depends(get_db)) -> MessageListResponse:
    """
    List every stored message, oldest first.
    """
    messages = await MessageRepository(db).list_all_ordered_by_creation()
    logger.logger.debug("Listed messages", extra={"count": len(messages)})
    return MessageListResponse(data=[MessageOut.model_validate(m) for m in messages])


@router.get("/{message_id}", response_model=MessageDetailResponse)
async def get_message(
    message_id: str,
    db: AsyncSession = Depends(get_db),
) -> MessageDetailResponse:
    """
    Fetch one stored message by its provider message id.
    """
    message = await MessageRepository(db).get_by_id(message_id)

    if not message:
        logger.logger.warning("Message not found", extra={"message_id": message_id})
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Message not found",
        )

    return MessageDetailResponse(data=MessageOut.model_validate(message))
