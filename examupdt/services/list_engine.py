"""
List processing service - search, filter, sort and paginate in memory.
Every admin list screen and public list page runs its records through here.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from math import ceil
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from examupdt.models.pagination import ListQuery, ListResult, SortDirection
from examupdt.services.formatters import parse_timestamp

logger = logging.getLogger(__name__)

STRING = "string"
DATE = "date"
NUMBER = "number"


def get_field(item: Any, name: str) -> Any:
    """Read a field from a dict-like record or a model instance"""
    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name, None)


@dataclass
class FieldAccessors:
    """Which fields a screen searches, filters on and sorts by"""
    searchable: Sequence[str] = ()
    filterable: Sequence[str] = ()
    sortable: Dict[str, str] = field(default_factory=dict)
    getter: Callable[[Any, str], Any] = get_field


def _date_key(value: Any) -> Tuple[int, float]:
    moment = parse_timestamp(value)
    # Missing dates sort before every real date
    return (0, 0.0) if moment is None else (1, moment.timestamp())


def _number_key(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _string_key(value: Any) -> str:
    return "" if value is None else str(value)


SORT_KEYS: Dict[str, Callable[[Any], Any]] = {
    STRING: _string_key,
    DATE: _date_key,
    NUMBER: _number_key,
}


class ListProcessingEngine:
    """
    Ordered pipeline: search -> filter -> sort -> paginate.

    Pure: the input sequence is never mutated, the same query over the
    same input always yields the same page.
    """

    @staticmethod
    def search(items: Sequence[Any], search_text: str, accessors: FieldAccessors) -> List[Any]:
        if not search_text:
            return list(items)
        needle = search_text.lower()
        matched = []
        for item in items:
            for name in accessors.searchable:
                value = accessors.getter(item, name)
                if value is not None and needle in str(value).lower():
                    matched.append(item)
                    break
        return matched

    @staticmethod
    def filter(items: Sequence[Any], filters: Dict[str, str], accessors: FieldAccessors) -> List[Any]:
        kept = list(items)
        for name, expected in filters.items():
            if name not in accessors.filterable:
                logger.debug(f"🔍 Ignoring unknown filter field: {name}")
                continue
            kept = [
                item for item in kept
                if accessors.getter(item, name) is not None
                and str(accessors.getter(item, name)) == str(expected)
            ]
        return kept

    @staticmethod
    def sort(items: Sequence[Any], sort_key: Optional[str], direction: SortDirection, accessors: FieldAccessors) -> List[Any]:
        kind = accessors.sortable.get(sort_key) if sort_key else None
        if kind is None:
            return list(items)
        to_key = SORT_KEYS[kind]
        # sorted() stays stable with reverse=True: equal keys keep input order
        return sorted(
            items,
            key=lambda item: to_key(accessors.getter(item, sort_key)),
            reverse=direction == SortDirection.DESC,
        )

    @staticmethod
    def calculate_offset(page: int, page_size: int) -> int:
        return (page - 1) * page_size

    def filter_and_sort(self, items: Sequence[Any], query: ListQuery, accessors: FieldAccessors) -> List[Any]:
        """Steps 1-3: the post-filter, sorted collection before pagination"""
        matched = self.search(items, query.search_text, accessors)
        matched = self.filter(matched, query.active_filters(), accessors)
        return self.sort(matched, query.sort_key, query.sort_direction, accessors)

    def process(self, items: Sequence[Any], query: ListQuery, accessors: FieldAccessors) -> ListResult:
        processed = self.filter_and_sort(items, query, accessors)

        page = max(query.page, 1)
        page_size = max(query.page_size, 1)
        total_count = len(processed)
        total_pages = ceil(total_count / page_size)
        offset = self.calculate_offset(page, page_size)
        page_items = processed[offset:offset + page_size]

        logger.debug(
            f"📄 Processed list: page={page}, size={page_size}, "
            f"total={total_count}, returned={len(page_items)}"
        )

        return ListResult(
            items=page_items,
            total_count=total_count,
            page=page,
            page_size=page_size,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_prev=page > 1,
        )


def resolve_sort(sort_by: Optional[str], sort_order: Optional[str], date_field: str) -> Tuple[Optional[str], SortDirection]:
    """
    Map the admin screens' sort menu onto an engine sort key.

    newest/oldest sort by the screen's date field, 'views' is most viewed
    first, 'title' is alphabetical. Anything else is taken as a raw field
    name with sort_order.
    """
    if sort_by == "newest":
        return date_field, SortDirection.DESC
    if sort_by == "oldest":
        return date_field, SortDirection.ASC
    if sort_by == "views":
        return "views", SortDirection.DESC
    if sort_by == "title":
        return "title", SortDirection.ASC
    direction = SortDirection.DESC if (sort_order or "").lower() == "desc" else SortDirection.ASC
    return sort_by, direction


# Singleton
list_engine = ListProcessingEngine()


def process_list(items: Sequence[Any], query: ListQuery, accessors: FieldAccessors) -> ListResult:
    return list_engine.process(items, query, accessors)
