"""Page and limit resolution for the paginated collections."""

from src.bilemo.runtime.context import get_config


def resolve_page(page: int | None, limit: int | None) -> tuple[int, int]:
    """Apply the configured defaults and clamp ``limit`` to ``max_limit``."""
    pagination = get_config().pagination
    page = page or pagination.default_page
    limit = limit or pagination.default_limit
    return max(page, 1), max(1, min(limit, pagination.max_limit))

# Largest OFFSET a 64-bit SQL integer holds
MAX_OFFSET = 2**63 - 1


def page_offset(page: int, limit: int) -> int | None:
    """Row offset of ``page``, or None when it lies beyond any storable row."""
    offset = (page - 1) * limit
    if offset > MAX_OFFSET:
        return None
    return offset
