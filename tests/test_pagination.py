"""
Unit tests for page math.
"""

import pytest

from app.core.pagination import Page, PageRequest, paginate, total_pages
from app.models.job import Job
from conftest import make_job


class TestPageRequest:

    def test_defaults(self):
        page = PageRequest()

        assert page.page == 1
        assert page.limit == 10
        assert page.offset == 0

    @pytest.mark.parametrize("page,limit,offset", [(1, 10, 0), (2, 10, 10), (3, 7, 14)])
    def test_offset(self, page, limit, offset):
        assert PageRequest(page=page, limit=limit).offset == offset

    @pytest.mark.parametrize("page,limit", [(0, 10), (1, 0), (-1, 5)])
    def test_rejects_non_positive(self, page, limit):
        with pytest.raises(ValueError):
            PageRequest(page=page, limit=limit)


@pytest.mark.parametrize("total,limit,expected", [(0, 10, 0), (1, 10, 1), (10, 10, 1), (25, 10, 3), (100, 7, 15)])
def test_total_pages(total, limit, expected):
    assert total_pages(total, limit) == expected


def test_envelope_shape():
    page = Page(items=["a", "b"], total=12, request=PageRequest(page=2, limit=2))

    assert page.envelope(["A", "B"]) == {
        "success": True,
        "count": 2,
        "total": 12,
        "totalPages": 6,
        "currentPage": 2,
        "data": ["A", "B"],
    }


def test_per_page_counts_sum_to_total(db_session, company, employer):
    for i in range(23):
        make_job(db_session, company, employer, title=f"Job {i}")
    query = db_session.query(Job).order_by(Job.created_at.desc(), Job.id.asc())

    first = paginate(query, PageRequest(page=1, limit=5))
    counts = [
        paginate(query, PageRequest(page=n, limit=5)).count
        for n in range(1, first.total_pages + 1)
    ]

    assert first.total == 23
    assert first.total_pages == 5
    assert sum(counts) == 23
    assert counts[-1] == 3


def test_page_past_the_end_is_empty(db_session, job):
    page = paginate(db_session.query(Job), PageRequest(page=5, limit=10))

    assert page.items == []
    assert page.count == 0
    assert page.total == 1
