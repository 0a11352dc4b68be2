"""Admin endpoints: full message log export."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlmodel import Session

from studiobot.db.config import get_session
from studiobot.middleware.auth import AdminUser, require_admin
from studiobot.services.conversation_service import ConversationService
from studiobot.services.export_service import messages_to_csv

logger = logging.getLogger(__name__)

router = APIRouter(tags=["admin"])

EXPORT_FILENAME = "messages.csv"


@router.get("/export")
async def export_messages(
    admin: AdminUser = Depends(require_admin),
    db: Session = Depends(get_session)
):
    """Download every stored message as CSV, ascending by id."""
    messages = ConversationService(db).get_all_messages()
    logger.info(f"Exporting {len(messages)} messages for {admin.subject}")

    return Response(
        content=messages_to_csv(messages),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f"attachment; filename={EXPORT_FILENAME}"},
    )
