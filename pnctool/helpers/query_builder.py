from sqlalchemy.orm import Query
from sqlalchemy import asc, desc, func
from pnctool.models.filters import Filter, OrderBy
from typing import List

LIKE_ESCAPE = "\\"


def escape_like(value: str) -> str:
    """Make LIKE wildcards in user input match literally"""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def apply_filters(query: Query, model, filters: List[Filter]) -> Query:
    for f in filters:
        col = getattr(model, f.column, None)
        if col is None:
            continue

        if f.type == "ieq":
            query = query.filter(func.lower(col) == f.value.lower())
        elif f.type == "ilike":
            query = query.filter(col.ilike(f"%{escape_like(f.value)}%", escape=LIKE_ESCAPE))
        else:
            raise ValueError(f"unsupported filter type: {f.type}")
    return query

def apply_ordering(query: Query, model, orders: List[OrderBy]) -> Query:
    for o in orders:
        col = getattr(model, o.column, None)
        if col is None:
            continue

        if o.order.lower() == "asc":
            query = query.order_by(asc(col))
        elif o.order.lower() == "desc":
            query = query.order_by(desc(col))
    return query


def apply_pagination(query: Query, page: int=1, limit: int=20) -> Query:
    offset = (page - 1) * limit
    return query.offset(offset).limit(limit)
