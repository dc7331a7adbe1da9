#!/usr/bin/env python3
"""
Contact router: public form submission, admin inbox
"""

import logging

from fastapi import APIRouter, Depends

from examupdt.dependencies.auth import get_current_user, get_store
from examupdt.dependencies.services import get_content_service
from examupdt.models.schemas import AuthUser, ContactPayload
from examupdt.repositories.content import MessageRepository
from examupdt.services.content_service import ContentService

router = APIRouter(prefix="/contact", tags=["contact"])
logger = logging.getLogger(__name__)


def get_message_repository(store=Depends(get_store)) -> MessageRepository:
    return MessageRepository(store)


@router.post("")
async def send_message(payload: ContactPayload, content_service: ContentService = Depends(get_content_service)):
    """
    Public contact form
    Endpoint: POST /contact
    """
    await content_service.send_contact(payload)
    return {'success': True}


@router.get("/all")
async def list_messages(
    repository: MessageRepository = Depends(get_message_repository),
    current_user: AuthUser = Depends(get_current_user),
):
    messages = await repository.get_all()
    return {'success': True, 'messages': [m.model_dump(mode='json') for m in messages]}


@router.put("/{message_id}/read")
async def mark_message_read(
    message_id: str,
    repository: MessageRepository = Depends(get_message_repository),
    current_user: AuthUser = Depends(get_current_user),
):
    message = await repository.mark_as_read(message_id)
    logger.info(f"📬 Message {message_id} marked as read by: {current_user.email}")
    return {'success': True, 'message': message.model_dump(mode='json')}


@router.delete("/{message_id}")
async def delete_message(
    message_id: str,
    repository: MessageRepository = Depends(get_message_repository),
    current_user: AuthUser = Depends(get_current_user),
):
    await repository.delete(message_id)
    logger.info(f"🗑️ Message {message_id} deleted by: {current_user.email}")
    return {'success': True}
