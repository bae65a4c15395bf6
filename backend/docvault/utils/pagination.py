# backend/docvault/utils/pagination.py
import math
from dataclasses import dataclass
from typing import Any, List, Optional

from ..errors import ValidationError
from ..schemas.base import PageInfo

# Largest value a SQL INTEGER bind parameter can hold
MAX_PAGE_VALUE = 2 ** 63 - 1


@dataclass(frozen=True)
class PageRequest:
    """Parsed limit/offset pair; a missing limit means every remaining row"""
    limit: Optional[int] = None
    offset: int = 0


@dataclass
class QueryPage:
    rows: List[Any]
    count: int
    page_info: PageInfo


def _positive_int(raw: Optional[str], field: str) -> Optional[int]:
    if raw is None or raw == "":
        return None
    try:
        value = int(str(raw).strip())
    except ValueError:
        value = 0
    if value <= 0 or value > MAX_PAGE_VALUE:
        raise ValidationError(f"Only positive number is allowed for {field} value")
    return value


def parse_page_params(limit: Optional[str] = None, offset: Optional[str] = None) -> PageRequest:
    """Validate raw query-string values, limit first"""
    parsed_limit = _positive_int(limit, "limit")
    parsed_offset = _positive_int(offset, "offset")
    return PageRequest(limit=parsed_limit, offset=parsed_offset or 0)


def build_page_info(total_count: int, page: PageRequest) -> PageInfo:
    if page.limit is None:
        return PageInfo(
            page_count=1 if total_count else 0,
            page=1,
            page_size=total_count,
            total_count=total_count,
        )
    return PageInfo(
        page_count=math.ceil(total_count / page.limit),
        page=page.offset // page.limit + 1,
        page_size=page.limit,
        total_count=total_count,
    )
