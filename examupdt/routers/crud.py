"""
Authenticated create/update/delete routes shared by every content router.
"""

import logging
from typing import Type

from fastapi import APIRouter, Depends

from examupdt.dependencies.auth import get_current_user, get_store
from examupdt.models.schemas import AuthUser, ContentPayload
from examupdt.repositories.base import ContentRepository

logger = logging.getLogger(__name__)


def add_write_routes(
    router: APIRouter,
    repository_class: Type[ContentRepository],
    payload_model: Type[ContentPayload],
) -> None:
    """Register POST "", PUT /{id} and DELETE /{id} on the router"""
    name = repository_class.entity_name

    def get_repository(store=Depends(get_store)) -> ContentRepository:
        return repository_class(store)

    async def create_record(
        payload: payload_model,
        repository: ContentRepository = Depends(get_repository),
        current_user: AuthUser = Depends(get_current_user),
    ):
        logger.info(f"📝 Create {name} requested by: {current_user.email}")
        record = await repository.create(payload)
        return {'success': True, name: record.model_dump(mode='json')}

    async def update_record(
        record_id: str,
        payload: payload_model,
        repository: ContentRepository = Depends(get_repository),
        current_user: AuthUser = Depends(get_current_user),
    ):
        logger.info(f"✏️ Update {name} {record_id} requested by: {current_user.email}")
        record = await repository.update(record_id, payload)
        return {'success': True, name: record.model_dump(mode='json')}

    async def delete_record(
        record_id: str,
        repository: ContentRepository = Depends(get_repository),
        current_user: AuthUser = Depends(get_current_user),
    ):
        logger.info(f"🗑️ Delete {name} {record_id} requested by: {current_user.email}")
        await repository.delete(record_id)
        return {'success': True}

    router.add_api_route("", create_record, methods=["POST"], name=f"create_{name}")
    router.add_api_route("/{record_id}", update_record, methods=["PUT"], name=f"update_{name}")
    router.add_api_route("/{record_id}", delete_record, methods=["DELETE"], name=f"delete_{name}")
