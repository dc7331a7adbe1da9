"""
Bulk selection and best-effort bulk delete for admin list screens.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Iterable, List

from examupdt.errors import BulkPartialFailure

logger = logging.getLogger(__name__)


@dataclass
class BulkDeleteOutcome:
    succeeded: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)

    @property
    def attempted(self) -> int:
        return len(self.succeeded) + len(self.failed)


class SelectionState:
    """
    Selected ids, scoped to the currently visible (post-filter) collection.

    The select-all checkbox is never stored: it is recomputed from the
    current visible set every time it is read.
    """

    def __init__(self, visible_ids: Iterable[str] = ()):
        self.visible: List[str] = list(visible_ids)
        self.selected: List[str] = []

    def set_visible(self, ids: Iterable[str]) -> None:
        self.visible = list(ids)

    @property
    def all_selected(self) -> bool:
        return len(self.selected) == len(self.visible)

    def toggle(self, record_id: str) -> None:
        if record_id in self.selected:
            self.selected.remove(record_id)
        else:
            self.selected.append(record_id)

    def toggle_all(self) -> None:
        if self.all_selected:
            self.selected = []
        else:
            self.selected = list(self.visible)

    def discard(self, ids: Iterable[str]) -> None:
        gone = set(ids)
        self.selected = [record_id for record_id in self.selected if record_id not in gone]

    def clear(self) -> None:
        self.selected = []


async def bulk_delete(repository, ids: Iterable[str]) -> BulkDeleteOutcome:
    """
    One delete call per id, all issued concurrently. Every id is attempted
    even when some fail; there is no transaction across the batch.
    Raises BulkPartialFailure (carrying the outcome) if anything failed.
    """
    ids = list(dict.fromkeys(ids))
    results = await asyncio.gather(
        *(repository.delete(record_id) for record_id in ids),
        return_exceptions=True,
    )

    outcome = BulkDeleteOutcome()
    for record_id, result in zip(ids, results):
        if isinstance(result, BaseException):
            logger.error(f"❌ Bulk delete failed for ID {record_id}: {result}")
            outcome.failed.append(record_id)
        else:
            outcome.succeeded.append(record_id)

    logger.info(
        f"🗑️ Bulk delete: {len(outcome.succeeded)} deleted, {len(outcome.failed)} failed"
    )
    if outcome.failed:
        raise BulkPartialFailure(outcome)
    return outcome
