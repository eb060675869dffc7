from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field


T = TypeVar("T")


class PageRequest(BaseModel):
    """offset/limit 기반 페이지 요청."""

    offset: int = Field(0, ge=0, description="Number of items skipped")
    limit: int = Field(10, ge=1, le=100, description="Items per page")

    model_config = ConfigDict(frozen=True)

    @property
    def page(self) -> int:
        """Current page number (1-indexed)."""
        return self.offset // self.limit + 1


class PagedResponse(BaseModel, Generic[T]):
    """
    Generic paginated result wrapper.

    Example:
        ```json
        {
            "total": 4,
            "page": 1,
            "limit": 2,
            "offset": 0,
            "data": [...]
        }
        ```
    """

    total: int = Field(..., ge=0, description="Total number of matching rows")
    page: int = Field(..., ge=1, description="Current page number (1-indexed)")
    limit: int = Field(..., ge=1, le=100, description="Items per page")
    offset: int = Field(..., ge=0, description="Number of items skipped")
    data: list[T] = Field(default_factory=list, description="Page data items")

    @property
    def total_pages(self) -> int:
        """Calculate total number of pages."""
        return (self.total + self.limit - 1) // self.limit

    @property
    def has_next(self) -> bool:
        return self.offset + len(self.data) < self.total

    @classmethod
    def of(cls, data: list[T], total: int, request: PageRequest) -> "PagedResponse[T]":
        return cls(total=total, page=request.page, limit=request.limit, offset=request.offset, data=data)
