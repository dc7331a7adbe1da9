"""
Exam results router
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from examupdt.dependencies.services import get_content_service
from examupdt.models.schemas import ResultPayload
from examupdt.repositories.content import ResultRepository
from examupdt.routers.crud import add_write_routes
from examupdt.services.content_service import ContentService

router = APIRouter(prefix="/results", tags=["results"])
logger = logging.getLogger(__name__)


@router.get("")
async def list_results(
    exam: Optional[str] = Query(None, description="Exam label such as 'B.Tech 1-1'"),
    content_service: ContentService = Depends(get_content_service),
):
    logger.info(f"📄 Results requested - exam: {exam or 'all'}")
    results = await content_service.get_results(exam)
    return {'success': True, 'results': results}


add_write_routes(router, ResultRepository, ResultPayload)
