"""
Query service – turns listing request parameters into store calls and
shapes the paginated response envelope.
"""

import math
from typing import Optional

from druglist.services.drug_store import DrugStore, clamp_page_size

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 50


def _to_int(value, default: int) -> int:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def normalize_pagination(page=None, limit=None) -> tuple[int, int]:
    """Coerce raw page/limit values: page >= 1, limit within [1, 100]."""
    page_num = max(1, _to_int(page, DEFAULT_PAGE))
    limit_num = clamp_page_size(_to_int(limit, DEFAULT_LIMIT))
    return page_num, limit_num


def query_drugs(store: DrugStore, company: Optional[str] = None, page=None, limit=None) -> dict:
    """
    Return {"data": [...], "pagination": {...}} for one page of the listing.
    A blank company means no filter; any other value is matched exactly,
    surrounding whitespace included.
    """
    company = company if company and company.strip() else None
    page_num, limit_num = normalize_pagination(page, limit)

    result = store.query(company=company, page=page_num, page_size=limit_num)
    total_pages = math.ceil(result.total / limit_num)

    return {
        "data": [d.to_dict() for d in result.rows],
        "pagination": {
            "currentPage": page_num,
            "totalPages": total_pages,
            "totalRecords": result.total,
            "limit": limit_num,
            "hasNextPage": page_num < total_pages,
            "hasPrevPage": page_num > 1 and result.total > 0,
        },
    }


def list_companies(store: DrugStore) -> list[str]:
    return store.list_companies()
