"""
List query and paged result models.
"""

from enum import Enum
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field, field_validator

T = TypeVar('T')

# Filter value meaning "no constraint"
ALL = "all"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class ListQuery(BaseModel):
    """One list-rendering request: search, filters, sort and page"""
    search_text: str = Field("", description="Case-insensitive substring match")
    filters: Dict[str, Optional[str]] = Field(default_factory=dict, description="field -> value, 'all' = unconstrained")
    sort_key: Optional[str] = Field(None, description="Sort field")
    sort_direction: SortDirection = Field(SortDirection.ASC, description="asc or desc")
    page: int = Field(1, description="Page number (1-indexed)")
    page_size: int = Field(10, description="Items per page")

    @field_validator('page', mode='before')
    @classmethod
    def clamp_page(cls, value: Any) -> int:
        value = int(value) if value is not None else 1
        return value if value >= 1 else 1

    @field_validator('page_size', mode='before')
    @classmethod
    def clamp_page_size(cls, value: Any) -> int:
        value = int(value) if value is not None else 1
        return value if value >= 1 else 1

    @field_validator('search_text', mode='before')
    @classmethod
    def none_search_is_empty(cls, value: Any) -> str:
        return value or ""

    def active_filters(self) -> Dict[str, str]:
        """Filters that actually constrain the result"""
        return {
            key: value for key, value in self.filters.items()
            if value not in (None, "") and str(value).lower() != ALL
        }


class ListResult(BaseModel, Generic[T]):
    """One page of a processed list"""
    success: bool = True
    items: List[T]
    total_count: int
    page: int
    page_size: int
    total_pages: int
    has_next: bool
    has_prev: bool
