"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from pydantic import BaseModel, Field


class PageParams(BaseModel):
    """Offset pagination window; ``page`` is 1-based."""

    page: int = Field(1, ge=1, description="1-based page number")
    count: int = Field(10, gt=0, description="Items per page")
