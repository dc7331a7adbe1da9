"""
Service factories for FastAPI dependency injection
"""

from fastapi import Depends

from examupdt.dependencies.auth import get_store
from examupdt.services.analytics_service import AnalyticsService
from examupdt.services.content_service import ContentService


def get_content_service(store=Depends(get_store)) -> ContentService:
    """Dependency to get ContentService instance"""
    return ContentService(store)


def get_analytics_service(store=Depends(get_store)) -> AnalyticsService:
    return AnalyticsService(store)
