"""Offset pagination bounds shared by listing operations."""
from __future__ import annotations

from threadline.core.errors import ValidationFailure
from threadline.core.settings import settings


def page_window(page: int, page_size: int, *, max_page_size: int | None = None) -> tuple[int, int]:
    """Translate a 1-based page and page size into ``(offset, limit)``.

    Raises:
        ValidationFailure: If ``page < 1``, ``page_size < 1`` or the page size
            exceeds the configured maximum.
    """
    ceiling = max_page_size or settings.max_page_size
    if page < 1:
        raise ValidationFailure("page must be at least 1")
    if page_size < 1:
        raise ValidationFailure("count must be at least 1")
    if page_size > ceiling:
        raise ValidationFailure(f"count cannot exceed {ceiling}")
    return (page - 1) * page_size, page_size
