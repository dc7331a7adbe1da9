"""
Page loader: fetch once per screen entry, then process and map in memory.

The loader owns the records of one list screen and its selection. Results
that arrive after dispose() are dropped instead of applied.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from examupdt.errors import BulkPartialFailure, ExamupdtError
from examupdt.models.pagination import ListQuery, ListResult
from examupdt.services.list_engine import FieldAccessors, list_engine
from examupdt.services.selection import BulkDeleteOutcome, SelectionState, bulk_delete

logger = logging.getLogger(__name__)


class ListPageLoader:
    def __init__(
        self,
        repository,
        accessors: Optional[FieldAccessors] = None,
        mapper: Optional[Callable[[Any], Dict[str, Any]]] = None,
        fail_soft: bool = True,
    ):
        self.repository = repository
        self.accessors = accessors or repository.accessors
        self.mapper = mapper
        self.fail_soft = fail_soft
        self.records: List[Any] = []
        self.selection = SelectionState()
        self.error: Optional[str] = None
        self.disposed = False

    def dispose(self) -> None:
        self.disposed = True

    async def load(self, **fetch_kwargs) -> Optional[List[Any]]:
        """
        Fetch the screen's records. Returns None when the loader was disposed
        before the fetch resolved. With fail_soft a store failure leaves an
        empty list and sets `error` instead of raising.
        """
        try:
            records = await self.repository.get_all(**fetch_kwargs)
        except ExamupdtError as e:
            if self.disposed:
                return None
            if not self.fail_soft:
                raise
            logger.error(f"❌ Failed to load {self.repository.entity_name}s: {e.message}")
            self.error = e.message
            records = []

        if self.disposed:
            logger.debug(f"🔍 Discarding {self.repository.entity_name} load after dispose")
            return None

        self.records = records
        return self.records

    def view(self, query: ListQuery) -> ListResult:
        """Process the loaded records; the selection scope follows the filters"""
        visible = list_engine.filter_and_sort(self.records, query, self.accessors)
        self.selection.set_visible(self.accessors.getter(item, 'id') for item in visible)

        result = list_engine.process(self.records, query, self.accessors)
        if self.mapper is not None:
            result.items = [self.mapper(item) for item in result.items]
        return result

    async def delete_selected(self) -> BulkDeleteOutcome:
        """
        Bulk delete the selection. Deleted ids leave both the records and the
        selection; failed ids stay in both. BulkPartialFailure is re-raised
        after local state has been updated.
        """
        try:
            outcome = await bulk_delete(self.repository, list(self.selection.selected))
        except BulkPartialFailure as e:
            self._drop(e.outcome.succeeded)
            raise
        self._drop(outcome.succeeded)
        return outcome

    def _drop(self, ids: List[str]) -> None:
        gone = set(ids)
        self.records = [item for item in self.records if self.accessors.getter(item, 'id') not in gone]
        self.selection.discard(gone)
        self.selection.set_visible(i for i in self.selection.visible if i not in gone)
