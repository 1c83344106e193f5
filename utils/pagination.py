# utils/pagination.py
import math
from typing import List, Tuple

from utils.sanitize import parse_int


def page_params(req, default_limit: int = 10) -> Tuple[int, int]:
    page = parse_int(req.params.get("page"), "page") or 1
    limit = parse_int(req.params.get("limit"), "limit") or default_limit
    return max(page, 1), max(limit, 1)


def paginated(items: List[dict], total: int, page: int, limit: int) -> dict:
    return {
        "success": True,
        "count": len(items),
        "total": total,
        "pagination": {
            "currentPage": page,
            "totalPages": math.ceil(total / limit) if limit else 0,
            "pageSize": limit,
        },
        "data": items,
    }
