from __future__ import annotations

from typing import Any


def clamp_page(page: Any, limit: Any, *, default_limit: int, max_limit: int) -> tuple[int, int]:
    """Sanitize pagination params: page >= 1, 1 <= limit <= max_limit."""
    try:
        page_n = int(page)
    except (TypeError, ValueError):
        page_n = 1
    try:
        limit_n = int(limit)
    except (TypeError, ValueError):
        limit_n = default_limit
    return max(1, page_n), max(1, min(max_limit, limit_n))


def pagination_meta(total: int, page: int, limit: int) -> dict:
    return {"total": total, "page": page, "limit": limit, "pages": (total + limit - 1) // limit}
