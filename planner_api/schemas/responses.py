### Description ###
# Planner Suite - Multi-tenant Event Planning Platform
# - Common Response Schemas -
# Author: Planner Suite Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Common Response Schemas

Pydantic models for the uniform response envelope:
    {status: "success"|"error", message, data?, errors?}
"""

from typing import Any, Generic, List, Literal, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper"""

    status: Literal["success", "error"] = "success"
    message: Optional[str] = None
    data: Optional[T] = None


class PaginationMeta(BaseModel):
    """Pagination metadata"""

    page: int = Field(ge=1, description="Current page number")
    page_size: int = Field(ge=1, le=100, description="Items per page")
    total_items: int = Field(ge=0, description="Total number of items")
    total_pages: int = Field(ge=0, description="Total number of pages")
    has_next: bool = Field(description="Whether there is a next page")
    has_previous: bool = Field(description="Whether there is a previous page")

    @classmethod
    def build(cls, page: int, page_size: int, total_items: int) -> "PaginationMeta":
        total_pages = (total_items + page_size - 1) // page_size if total_items else 0
        return cls(
            page=page,
            page_size=page_size,
            total_items=total_items,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_previous=page > 1,
        )


class PaginatedResponse(BaseModel, Generic[T]):
    """Paginated API response"""

    status: Literal["success", "error"] = "success"
    message: Optional[str] = None
    data: List[T] = Field(default_factory=list)
    pagination: PaginationMeta


class ErrorDetail(BaseModel):
    """Error detail for validation errors"""

    field: Optional[str] = None
    message: str
    value: Any = None


class ErrorResponse(BaseModel):
    """Standard error response"""

    status: Literal["error"] = "error"
    message: str
    errors: Optional[List[ErrorDetail]] = None


class HealthResponse(BaseModel):
    """Health check response"""

    status: str = "healthy"
    version: str
    environment: str
    database_connected: bool
    counter_store_backend: str
    counter_store_connected: bool
