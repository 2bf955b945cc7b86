"""
Common Pydantic schemas for API request/response handling.

This module provides:
- Pagination parameters
- Simple message responses
"""

from pydantic import BaseModel, ConfigDict, Field

from gatehouse.core.config import settings


class PaginationParams(BaseModel):
    """
    Offset pagination query parameters.

    Declared as a query parameter model: Annotated[PaginationParams, Query()].

    Attributes:
        limit: Maximum number of items to return
        offset: Number of items to skip
    """

    limit: int = Field(
        default=settings.default_page_limit,
        ge=1,
        le=settings.max_page_limit,
        description="Maximum number of items to return",
    )
    offset: int = Field(
        default=0,
        ge=0,
        description="Number of items to skip",
    )

    model_config = ConfigDict(
        json_schema_extra={"example": {"limit": 10, "offset": 0}}
    )


class MessageResponse(BaseModel):
    """Confirmation message for operations without a resource body."""

    message: str = Field(description="Human-readable confirmation")
