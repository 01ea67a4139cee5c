"""
Unit tests for the job listing query builder.
"""

import pytest

from app.core.exceptions import ValidationError
from app.core.pagination import PageRequest
from app.models.job import Job, JobCategory, JobStatus, JobType
from app.schemas.job import JobSearchParams
from app.services.job_query import build_job_filters, parse_sort, search_jobs
from conftest import make_job


def titles(db_session, **params):
    page = search_jobs(db_session, JobSearchParams(**params), PageRequest(page=1, limit=50))
    return sorted(job.title for job in page.items)


class TestBuildJobFilters:

    def test_no_params_only_restricts_status(self):
        clauses = build_job_filters(JobSearchParams())

        assert len(clauses) == 1

    def test_each_filter_adds_one_clause(self):
        params = JobSearchParams(
            search="python",
            location="berlin",
            job_type=JobType.CONTRACT,
            category=JobCategory.DESIGN,
            min_salary=10,
            max_salary=20,
            remote=True,
        )

        assert len(build_job_filters(params)) == 8

    def test_remote_false_adds_nothing(self):
        assert len(build_job_filters(JobSearchParams(remote=False))) == 1


class TestParseSort:

    def test_descending_prefix(self):
        primary, tie_breaker = parse_sort("-createdAt")

        assert "created_at DESC" in str(primary)
        assert "jobs.id ASC" in str(tie_breaker)

    @pytest.mark.parametrize("key", ["applicationsCount", "applications_count"])
    def test_camel_and_snake_case(self, key):
        primary, _ = parse_sort(key)

        assert "applications_count ASC" in str(primary)

    @pytest.mark.parametrize("sort", ["", "-", "salary", "-hashed_password", "createdAt;drop"])
    def test_unknown_keys(self, sort):
        with pytest.raises(ValidationError):
            parse_sort(sort)


class TestSearchJobs:

    def test_location_matches_city_or_country(self, db_session, company, employer):
        make_job(db_session, company, employer, title="Munich", location={"city": "Munich", "country": "Germany"})
        make_job(db_session, company, employer, title="Madrid", location={"city": "Madrid", "country": "Spain"})

        assert titles(db_session, location="germ") == ["Munich"]
        assert titles(db_session, location="MADRID") == ["Madrid"]

    def test_search_is_literal(self, db_session, company, employer):
        make_job(db_session, company, employer, title="100% remote")
        make_job(db_session, company, employer, title="1000 perks")

        assert titles(db_session, search="100%") == ["100% remote"]

    def test_max_salary_bound(self, db_session, company, employer):
        make_job(db_session, company, employer, title="cheap", salary={"min": 1000, "max": 2000})
        make_job(db_session, company, employer, title="pricey", salary={"min": 9000, "max": 12000})

        assert titles(db_session, max_salary=5000) == ["cheap"]

    def test_inactive_never_listed(self, db_session, company, employer):
        make_job(db_session, company, employer, title="gone", status=JobStatus.CLOSED)

        assert titles(db_session, search="gone") == []

    def test_sort_by_views(self, db_session, company, employer):
        make_job(db_session, company, employer, title="quiet", views=1)
        make_job(db_session, company, employer, title="popular", views=50)

        page = search_jobs(db_session, JobSearchParams(sort="-views"), PageRequest())

        assert [job.title for job in page.items] == ["popular", "quiet"]
        assert isinstance(page.items[0], Job)
