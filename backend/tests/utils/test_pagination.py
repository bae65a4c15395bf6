# tests/utils/test_pagination.py
import pytest

from docvault.errors import ValidationError
from docvault.utils.pagination import MAX_PAGE_VALUE, PageRequest, build_page_info, parse_page_params


def test_defaults():
    assert parse_page_params() == PageRequest(limit=None, offset=0)
    assert parse_page_params("", "") == PageRequest(limit=None, offset=0)


def test_parses_numbers():
    assert parse_page_params("4", "3") == PageRequest(limit=4, offset=3)


@pytest.mark.parametrize("limit", ["-2", "0", "aaa", "1.5", "99999999999999999999"])
def test_rejects_bad_limit(limit):
    with pytest.raises(ValidationError) as exc_info:
        parse_page_params(limit, None)
    assert exc_info.value.message == "Only positive number is allowed for limit value"


@pytest.mark.parametrize("offset", ["-2", "0", "abc", "99999999999999999999"])
def test_rejects_bad_offset(offset):
    with pytest.raises(ValidationError) as exc_info:
        parse_page_params("2", offset)
    assert exc_info.value.message == "Only positive number is allowed for offset value"


def test_limit_is_checked_first():
    with pytest.raises(ValidationError) as exc_info:
        parse_page_params("-1", "-1")
    assert "limit" in exc_info.value.message


@pytest.mark.parametrize("total,limit,offset,expected", [
    (7, 4, 3, {"page_count": 2, "Page": 1, "page_size": 4, "total_count": 7}),
    (7, 4, 4, {"page_count": 2, "Page": 2, "page_size": 4, "total_count": 7}),
    (10, 5, 0, {"page_count": 2, "Page": 1, "page_size": 5, "total_count": 10}),
    (0, 5, 0, {"page_count": 0, "Page": 1, "page_size": 5, "total_count": 0}),
])
def test_build_page_info(total, limit, offset, expected):
    info = build_page_info(total, PageRequest(limit=limit, offset=offset))
    assert info.model_dump(by_alias=True) == expected


def test_page_info_without_limit():
    assert build_page_info(5, PageRequest()).model_dump(by_alias=True) == \
        {"page_count": 1, "Page": 1, "page_size": 5, "total_count": 5}


def test_accepts_largest_integer():
    assert parse_page_params(str(MAX_PAGE_VALUE), None).limit == MAX_PAGE_VALUE
