"""
Public job search: turns flat query parameters into filter clauses, an
ordering and a page.

Every filter is its own AND-ed clause. Free-text search and location are
each a disjunction over their own fields, so supplying both narrows by both.
"""

from typing import List

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.sql.elements import ColumnElement

from app.core.exceptions import ValidationError
from app.core.pagination import Page, PageRequest, paginate
from app.models.job import Job, JobStatus
from app.schemas.job import JobSearchParams

# Client-facing sort keys (camelCase as sent by the browser, snake_case accepted too)
SORT_FIELDS = {
    "createdAt": Job.created_at,
    "updatedAt": Job.updated_at,
    "title": Job.title,
    "views": Job.views,
    "applicationsCount": Job.applications_count,
    "openings": Job.openings,
    "applicationDeadline": Job.application_deadline,
}
SORT_FIELDS.update({column.key: column for column in list(SORT_FIELDS.values())})


def build_job_filters(params: JobSearchParams) -> List[ColumnElement]:
    """Clauses for the public listing; only active jobs are ever eligible."""
    clauses: List[ColumnElement] = [Job.status == JobStatus.ACTIVE]

    if params.search:
        clauses.append(or_(
            Job.title.icontains(params.search, autoescape=True),
            Job.description.icontains(params.search, autoescape=True),
        ))

    if params.location:
        clauses.append(or_(
            Job.location["city"].as_string().icontains(params.location, autoescape=True),
            Job.location["country"].as_string().icontains(params.location, autoescape=True),
        ))

    if params.job_type:
        clauses.append(Job.job_type == params.job_type)
    if params.experience_level:
        clauses.append(Job.experience_level == params.experience_level)
    if params.category:
        clauses.append(Job.category == params.category)

    if params.min_salary is not None:
        clauses.append(Job.salary["min"].as_integer() >= params.min_salary)
    if params.max_salary is not None:
        clauses.append(Job.salary["max"].as_integer() <= params.max_salary)

    # remote=false means "don't care", not "on-site only"
    if params.remote:
        clauses.append(Job.location["remote"].as_boolean().is_(True))

    return clauses


def parse_sort(sort: str) -> List[ColumnElement]:
    """
    "-createdAt" -> created_at DESC. Job id breaks ties so page boundaries
    are stable between requests.
    """
    descending = sort.startswith("-")
    key = sort[1:] if descending else sort
    column = SORT_FIELDS.get(key)
    if column is None:
        raise ValidationError(f"Invalid sort field: {key}")
    return [column.desc() if descending else column.asc(), Job.id.asc()]


def search_jobs(db: Session, params: JobSearchParams, page: PageRequest) -> Page:
    query = (
        db.query(Job)
        .filter(*build_job_filters(params))
        .options(joinedload(Job.company), joinedload(Job.posted_by))
        .order_by(*parse_sort(params.sort))
    )
    return paginate(query, page)
