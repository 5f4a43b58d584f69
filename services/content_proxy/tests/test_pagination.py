import pytest

from services.content_proxy.core.pagination import build_pagination, parse_page_params
from services.content_proxy.models.envelope import Envelope


@pytest.mark.parametrize(
    "total,limit,expected_pages",
    [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (25, 10, 3), (25, 7, 4)],
)
def test_total_pages_is_ceiling(total, limit, expected_pages):
    assert build_pagination(1, limit, total).total_pages == expected_pages


def test_middle_page_has_both_neighbours():
    info = build_pagination(2, 10, 25)

    assert info.has_next_page is True
    assert info.has_prev_page is True
    assert info.next_page == 3
    assert info.prev_page == 1


def test_last_page_has_no_next():
    info = build_pagination(3, 10, 25)

    assert info.has_next_page is False
    assert info.next_page is None


def test_first_page_has_no_prev():
    info = build_pagination(1, 10, 25)

    assert info.has_prev_page is False
    assert info.prev_page is None


def test_page_beyond_range():
    info = build_pagination(9, 10, 25)

    assert info.has_next_page is False
    assert info.has_prev_page is True


@pytest.mark.parametrize(
    "params,expected",
    [
        ({}, (1, 10)),
        ({"page": "3", "limit": "20"}, (3, 20)),
        ({"page": "0", "limit": "-5"}, (1, 10)),
        ({"page": "abc", "limit": ""}, (1, 10)),
    ],
)
def test_parse_page_params(params, expected):
    assert parse_page_params(params) == expected


def test_envelope_content_keeps_null_page_links():
    content = Envelope(success=True, data=[], pagination=build_pagination(1, 10, 0)).to_content()

    assert content["pagination"]["next_page"] is None
    assert content["pagination"]["prev_page"] is None
    assert "error" not in content
    assert "message" not in content


def test_envelope_content_keeps_null_data():
    assert Envelope(success=False, error="boom").to_content() == {
        "success": False,
        "data": None,
        "error": "boom",
    }
