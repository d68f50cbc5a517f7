# Pagination schemas for paginated API responses
from typing import Generic, List, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class PaginatedResponse(BaseModel, Generic[T]):
    """
    Generic paginated response wrapper.

    Example:
        PaginatedResponse[ProjectRead](
            total=100,
            skip=0,
            limit=10,
            items=[...],
        )
    """

    total: int = Field(..., description="Total number of items matching the query")
    skip: int = Field(..., ge=0, description="Number of items skipped")
    limit: int = Field(..., ge=1, le=100, description="Page size")
    items: List[T] = Field(..., description="List of items")

    @property
    def has_more(self) -> bool:
        return (self.skip + self.limit) < self.total


__all__ = ["PaginatedResponse"]
