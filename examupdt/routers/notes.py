"""
Study notes router
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from examupdt.dependencies.services import get_content_service
from examupdt.models.schemas import NotePayload
from examupdt.repositories.content import NoteRepository
from examupdt.routers.crud import add_write_routes
from examupdt.services.content_service import ContentService

router = APIRouter(prefix="/notes", tags=["notes"])
logger = logging.getLogger(__name__)


@router.get("")
async def list_notes(
    semester: Optional[str] = Query(None, description="Matched against the note subject"),
    content_service: ContentService = Depends(get_content_service),
):
    notes = await content_service.get_notes(semester)
    return {'success': True, 'notes': notes}


add_write_routes(router, NoteRepository, NotePayload)
