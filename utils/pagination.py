"""Page slicing for list endpoints."""

from typing import Any, Dict, List, Tuple

from extensions import db

BOOKS_PER_PAGE = 5
QUESTIONS_PER_PAGE = 10
REPORTS_PER_PAGE = 10


def parse_page(raw) -> int:
    try:
        page = int(raw)
    except (TypeError, ValueError):
        return 1
    return page if page > 0 else 1


def paginate(stmt, page: int, per_page: int) -> Tuple[List[Any], Dict[str, Any]]:
    """Run ``stmt`` for one page and describe the page for the client."""
    pagination = db.paginate(stmt, page=page, per_page=per_page, error_out=False)
    meta = {
        "page": pagination.page,
        "per_page": per_page,
        "total": pagination.total,
        "total_pages": pagination.pages,
        "has_prev": pagination.has_prev,
        "has_next": pagination.has_next,
    }
    return list(pagination.items), meta
