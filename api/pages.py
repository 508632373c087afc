"""
Server-rendered inbox page.

Two-pane view: message subjects with their labels on the left, the selected
message's summary and original body on the right.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from sqlalchemy.ext.asyncio import AsyncSession

from db.repositories import MessageRepository
from db.session import get_db

router = APIRouter(tags=["Pages"])


@router.get("/", response_class=HTMLResponse)
async def inbox(
    request: Request,
    id: str | None = None,
    db: AsyncSession = Depends(get_db),
):
    messages = await MessageRepository(db).list_all_ordered_by_creation()
    selected = next((m for m in messages if m.id == id), messages[0] if messages else None)

    return request.app.state.templates.TemplateResponse(
        request,
        "inbox.html",
        {"messages": messages, "selected": selected},
    )
