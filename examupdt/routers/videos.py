"""
YouTube videos router
"""

from typing import Optional

from fastapi import APIRouter, Depends

from examupdt.dependencies.services import get_content_service
from examupdt.models.schemas import VideoPayload
from examupdt.repositories.content import VideoRepository
from examupdt.routers.crud import add_write_routes
from examupdt.services.content_service import ContentService

router = APIRouter(prefix="/videos", tags=["videos"])


@router.get("")
async def list_videos(category: Optional[str] = None, content_service: ContentService = Depends(get_content_service)):
    videos = await content_service.get_videos(category)
    return {'success': True, 'videos': videos}


add_write_routes(router, VideoRepository, VideoPayload)
