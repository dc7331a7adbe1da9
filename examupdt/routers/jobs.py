#!/usr/bin/env python3
"""
Jobs and internships routers
Both listings show Active openings only; /openings fetches them together.
"""

import logging

from fastapi import APIRouter, Depends

from examupdt.dependencies.services import get_content_service
from examupdt.models.schemas import InternshipPayload, JobPayload
from examupdt.repositories.content import InternshipRepository, JobRepository
from examupdt.routers.crud import add_write_routes
from examupdt.services.content_service import ContentService

logger = logging.getLogger(__name__)

jobs_router = APIRouter(prefix="/jobs", tags=["jobs"])
internships_router = APIRouter(prefix="/internships", tags=["internships"])
openings_router = APIRouter(tags=["jobs"])


@jobs_router.get("")
async def list_jobs(content_service: ContentService = Depends(get_content_service)):
    jobs = await content_service.get_jobs()
    return {'success': True, 'jobs': jobs}


@internships_router.get("")
async def list_internships(content_service: ContentService = Depends(get_content_service)):
    internships = await content_service.get_internships()
    return {'success': True, 'internships': internships}


@openings_router.get("/openings")
async def list_openings(content_service: ContentService = Depends(get_content_service)):
    """
    Jobs and internships for the careers page
    Endpoint: GET /openings
    """
    openings = await content_service.get_openings()
    logger.info(f"💼 Openings: {len(openings['jobs'])} jobs, {len(openings['internships'])} internships")
    return {'success': True, **openings}


add_write_routes(jobs_router, JobRepository, JobPayload)
add_write_routes(internships_router, InternshipRepository, InternshipPayload)
