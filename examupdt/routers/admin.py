#!/usr/bin/env python3
"""
Admin router for the management screens
Lists any collection through search/filter/sort/paginate, bulk deletes the
selection and serves the dashboard stats. Every route needs a bearer token.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from examupdt.dependencies.auth import get_current_user, get_store
from examupdt.dependencies.services import get_analytics_service
from examupdt.models.pagination import ListQuery
from examupdt.models.schemas import AuthUser, BulkDeleteRequest
from examupdt.repositories.content import repository_for
from examupdt.services.analytics_service import AnalyticsService
from examupdt.services.list_engine import resolve_sort
from examupdt.services.page_loader import ListPageLoader
from examupdt.services.selection import bulk_delete

logger = logging.getLogger(__name__)

router = APIRouter(tags=["admin"])


def _as_dict(record):
    return record.model_dump(mode='json')


@router.get("/admin/{collection}")
async def list_collection(
    collection: str,
    request: Request,
    search: Optional[str] = Query(None, description="Case-insensitive search text"),
    page: int = Query(1, description="Page number (1-indexed)"),
    page_size: Optional[int] = Query(None, description="Items per page"),
    sort_by: Optional[str] = Query("newest", description="newest, oldest, views, title or a field name"),
    sort_order: Optional[str] = Query(None, description="asc or desc for field names"),
    store=Depends(get_store),
    current_user: AuthUser = Depends(get_current_user),
):
    """
    One page of an admin list screen
    Endpoint: GET /admin/{collection}?search=&page=&page_size=&sort_by=&<filter field>=
    """
    repository = repository_for(collection, store)
    loader = ListPageLoader(repository, mapper=_as_dict, fail_soft=False)
    await loader.load()

    # Filter values come from query parameters named after the filterable fields
    filters = {field: request.query_params.get(field) for field in repository.filter_fields}
    sort_key, direction = resolve_sort(sort_by, sort_order, repository.date_field)
    query = ListQuery(
        search_text=search,
        filters=filters,
        sort_key=sort_key,
        sort_direction=direction,
        page=page,
        page_size=page_size or request.app.state.settings.default_page_size,
    )

    result = loader.view(query)
    logger.info(f"📄 Admin {collection}: page {result.page}/{result.total_pages}, {result.total_count} matching")
    return result.model_dump(mode='json')


@router.post("/admin/{collection}/bulk-delete")
async def bulk_delete_collection(
    collection: str,
    body: BulkDeleteRequest,
    store=Depends(get_store),
    current_user: AuthUser = Depends(get_current_user),
):
    """
    Delete the selected records; one deletion per id, issued concurrently.
    A partial failure is reported through the BulkPartialFailure handler.
    """
    repository = repository_for(collection, store)
    logger.info(f"🗑️ Bulk delete of {len(body.ids)} {collection} requested by: {current_user.email}")
    outcome = await bulk_delete(repository, body.ids)
    return {'success': True, 'deleted': len(outcome.succeeded), 'failed': 0, 'failed_ids': []}


@router.get("/analytics")
async def get_analytics(
    analytics_service: AnalyticsService = Depends(get_analytics_service),
    current_user: AuthUser = Depends(get_current_user),
):
    stats = await analytics_service.get_stats()
    return {'success': True, 'stats': stats.model_dump()}
