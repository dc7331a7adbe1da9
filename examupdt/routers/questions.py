"""
Important questions router
"""

from typing import Optional

from fastapi import APIRouter, Depends

from examupdt.dependencies.services import get_content_service
from examupdt.models.schemas import QuestionPayload
from examupdt.repositories.content import QuestionRepository
from examupdt.routers.crud import add_write_routes
from examupdt.services.content_service import ContentService

router = APIRouter(prefix="/questions", tags=["questions"])


@router.get("")
async def list_questions(
    subject: Optional[str] = None,
    difficulty: Optional[str] = None,
    content_service: ContentService = Depends(get_content_service),
):
    questions = await content_service.get_questions(subject, difficulty)
    return {'success': True, 'questions': questions}


@router.get("/{question_id}")
async def get_question(question_id: str, content_service: ContentService = Depends(get_content_service)):
    question = await content_service.get_question(question_id)
    return {'success': True, 'question': question}


add_write_routes(router, QuestionRepository, QuestionPayload)
