#!/usr/bin/env python3
"""
Posts router: public announcements feed plus admin writes
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from examupdt.dependencies.services import get_content_service
from examupdt.models.schemas import PostPayload
from examupdt.repositories.content import PostRepository
from examupdt.routers.crud import add_write_routes
from examupdt.services.content_service import ContentService

router = APIRouter(prefix="/posts", tags=["posts"])
logger = logging.getLogger(__name__)


@router.get("")
async def list_posts(
    category: Optional[str] = Query(None, description="Category name, 'All' for no filter"),
    content_service: ContentService = Depends(get_content_service),
):
    """
    Published posts, newest first
    Endpoint: GET /posts?category=
    """
    logger.info(f"📄 Posts requested - category: {category or 'All'}")
    posts = await content_service.get_posts(category)
    return {'success': True, 'posts': posts}


@router.get("/{post_id}")
async def get_post(post_id: str, content_service: ContentService = Depends(get_content_service)):
    post = await content_service.get_post(post_id)
    return {'success': True, 'post': post}


add_write_routes(router, PostRepository, PostPayload)
