import math
from dataclasses import dataclass
from typing import Any, List, Tuple

from fastapi import Query
from sqlalchemy.orm import Query as SAQuery

from app.core.config import settings


@dataclass
class PageParams:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def page_params(
    page: int = Query(1, ge=1),
    limit: int = Query(
        settings.default_page_size, ge=1, le=settings.max_page_size
    ),
) -> PageParams:
    return PageParams(page=page, limit=limit)


def paginate(query: SAQuery, params: PageParams, *order_by) -> Tuple[List[Any], dict]:
    """Run the count query and the windowed query for one page."""
    total = query.count()
    items = (
        query.order_by(*order_by).offset(params.offset).limit(params.limit).all()
    )

    pagination = {
        "page": params.page,
        "limit": params.limit,
        "total": total,
        "total_pages": math.ceil(total / params.limit),
    }
    return items, pagination
