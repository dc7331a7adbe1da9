"""
Repository base: CRUD for one content type against one store table.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel

from examupdt.errors import ExamupdtError, NotFoundError, TransientFault, ValidationError
from examupdt.models.schemas import ContentPayload
from examupdt.services.list_engine import DATE, FieldAccessors

logger = logging.getLogger(__name__)

ModelT = TypeVar('ModelT', bound=BaseModel)


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class ContentRepository(Generic[ModelT]):
    """
    Subclasses set the table, the record model, the date field and the
    fields the admin screen searches, filters and sorts by.
    Every store failure surfaces as TransientFault; nothing is retried.
    """

    table: str = ""
    entity_name: str = "record"
    model: Type[ModelT]
    payload_model: Type[ContentPayload]
    date_field: str = "date"
    search_fields: tuple = ("title",)
    filter_fields: tuple = ()
    sort_fields: Dict[str, str] = {"title": "string"}
    # Values written on create when the admin form left them empty
    create_defaults: Dict[str, Any] = {}

    def __init__(self, store):
        self.client = store.table(self.table)

    @property
    def accessors(self) -> FieldAccessors:
        sortable = dict(self.sort_fields)
        sortable.setdefault(self.date_field, DATE)
        return FieldAccessors(
            searchable=self.search_fields,
            filterable=self.filter_fields,
            sortable=sortable,
        )

    async def _call(self, operation: str, func, *args, **kwargs):
        try:
            return await run_in_threadpool(func, *args, **kwargs)
        except ExamupdtError:
            raise
        except Exception as e:
            logger.error(f"❌ Failed to {operation} {self.entity_name}: {str(e)}")
            raise TransientFault(f"Failed to {operation} {self.entity_name}") from e

    def to_model(self, row: Dict[str, Any]) -> ModelT:
        return self.model.model_validate(row)

    async def get_all(
        self,
        filters: Optional[Dict[str, Any]] = None,
        contains: Optional[Dict[str, str]] = None,
        newest_first: bool = True,
    ) -> List[ModelT]:
        rows = await self._call(
            "fetch", self.client.select,
            filters=filters, contains=contains,
            order_by=self.date_field, descending=newest_first,
        )
        return [self.to_model(row) for row in rows or []]

    async def get_by_id(self, record_id: str) -> ModelT:
        row = await self._call("fetch", self.client.get, record_id)
        if not row:
            raise NotFoundError(f"{self.entity_name.capitalize()} not found")
        return self.to_model(row)

    async def create(self, payload: ContentPayload, extra: Optional[Dict[str, Any]] = None) -> ModelT:
        payload.ensure_required()
        record = {**self.create_defaults, **payload.changes(), **(extra or {})}
        if not record.get(self.date_field):
            record[self.date_field] = utc_now_iso()
        row = await self._call("create", self.client.insert, record)
        logger.info(f"✅ {self.entity_name.capitalize()} created: ID {row['id']}")
        return self.to_model(row)

    async def update(self, record_id: str, changes: Any) -> ModelT:
        """Partial update. Last write wins: there is no version check."""
        if isinstance(changes, ContentPayload):
            changes = changes.changes()
        changes = dict(changes)
        changes.pop('id', None)
        for name in getattr(self.payload_model, 'REQUIRED_FIELDS', ()):
            value = changes.get(name, "present")
            if value is None or (isinstance(value, str) and not value.strip()):
                raise ValidationError(missing=[name])
        changes['updated_at'] = utc_now_iso()
        row = await self._call("update", self.client.update, record_id, changes)
        if not row:
            raise NotFoundError(f"{self.entity_name.capitalize()} not found")
        logger.info(f"✅ {self.entity_name.capitalize()} updated: ID {record_id}")
        return self.to_model(row)

    async def delete(self, record_id: str) -> None:
        """Destructive and immediate; deleting a missing id is not an error"""
        await self._call("delete", self.client.delete, record_id)
        logger.info(f"🗑️ {self.entity_name.capitalize()} deleted: ID {record_id}")

    async def count(self, filters: Optional[Dict[str, Any]] = None) -> int:
        return await self._call("count", self.client.count, filters)
