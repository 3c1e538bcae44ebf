"""Common Schemas — request base classes and paging envelope.

Invariants:
    - Command requests change state (mediator commits on success)
    - Query requests never change state (mediator never commits)
    - 1 <= page <= MAX_PAGE, 1 <= page_size <= MAX_PAGE_SIZE
    - offset always fits a signed 64-bit integer
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")

MAX_PAGE_SIZE = 100
MAX_PAGE = 10**9


class Request(BaseModel):
    """Base of every mediator request."""
    model_config = ConfigDict(frozen=True)


class Command(Request):
    """State-changing request."""


class Query(Request):
    """Read-only request."""


class PageQuery(Query):
    """Paged read — page numbers start at 1."""
    page: int = Field(1, ge=1, le=MAX_PAGE)
    page_size: int = Field(20, ge=1, le=MAX_PAGE_SIZE)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


class PagedResponse(BaseModel, Generic[T]):
    """One page of results plus the total across all pages."""
    items: list[T]
    page: int
    page_size: int
    total: int
