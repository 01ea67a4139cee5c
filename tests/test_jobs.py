"""
Integration tests for job endpoints.

Tests:
- Public listing (filters, sorting, pagination)
- Job detail and view counting
- Create/update/delete with role and ownership checks
- Employer's own jobs and per-job stats
"""

import pytest

from app.models.job import JobStatus
from conftest import auth_headers, make_company, make_job


def job_payload(**overrides):
    payload = {
        "title": "Senior Python Developer",
        "description": "Own our FastAPI services end to end.",
        "location": {"city": "Lisbon", "country": "Portugal", "remote": True},
        "jobType": "full-time",
        "experienceLevel": "senior",
        "salary": {"min": 60000, "max": 90000, "currency": "EUR", "period": "yearly"},
        "skills": ["python", "fastapi"],
        "category": "Software Development",
        "openings": 2,
    }
    payload.update(overrides)
    return payload


class TestJobListing:

    def test_pagination_second_page(self, client, db_session, company, employer):
        """25 matching rows, page 2 of 10"""
        for i in range(25):
            make_job(db_session, company, employer, title=f"Job {i}")

        response = client.get("/api/jobs?page=2&limit=10")

        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 10
        assert body["total"] == 25
        assert body["totalPages"] == 3
        assert body["currentPage"] == 2
        assert len(body["data"]) == 10

    def test_pages_cover_every_row_once(self, client, db_session, company, employer):
        for i in range(7):
            make_job(db_session, company, employer, title=f"Job {i}")

        seen = []
        for page in (1, 2, 3):
            body = client.get(f"/api/jobs?page={page}&limit=3").json()
            seen.extend(item["id"] for item in body["data"])

        assert len(seen) == 7
        assert len(set(seen)) == 7

    def test_only_active_jobs_are_listed(self, client, db_session, company, employer):
        make_job(db_session, company, employer, title="Open role")
        make_job(db_session, company, employer, title="Closed role", status=JobStatus.CLOSED)
        make_job(db_session, company, employer, title="Draft role", status=JobStatus.DRAFT)

        body = client.get("/api/jobs").json()

        assert [item["title"] for item in body["data"]] == ["Open role"]
        assert body["total"] == 1

    def test_listing_embeds_company_and_poster(self, client, job):
        item = client.get("/api/jobs").json()["data"][0]

        assert item["company"]["name"] == "Acme Corp"
        assert item["company"]["location"]["city"] == "Berlin"
        assert item["postedBy"] == {"name": "Erin Employer", "email": "employer@example.com"}
        assert "ownerId" not in item["company"]

    def test_search_and_location_both_narrow(self, client, db_session, company, employer):
        make_job(db_session, company, employer, title="Python Developer",
                 location={"city": "Berlin", "country": "Germany"})
        make_job(db_session, company, employer, title="Python Developer",
                 location={"city": "Paris", "country": "France"})
        make_job(db_session, company, employer, title="Designer",
                 location={"city": "Berlin", "country": "Germany"})

        body = client.get("/api/jobs?search=python&location=berlin").json()

        assert body["total"] == 1
        assert body["data"][0]["title"] == "Python Developer"
        assert body["data"][0]["location"]["city"] == "Berlin"

    def test_search_matches_description(self, client, db_session, company, employer):
        make_job(db_session, company, employer, title="Engineer", description="Kubernetes at scale")
        make_job(db_session, company, employer, title="Engineer", description="Frontend work")

        body = client.get("/api/jobs?search=KUBERNETES").json()

        assert body["total"] == 1

    def test_salary_range_and_remote(self, client, db_session, company, employer):
        make_job(db_session, company, employer, title="Low",
                 salary={"min": 20000, "max": 30000, "currency": "USD", "period": "yearly"})
        make_job(db_session, company, employer, title="Remote mid",
                 salary={"min": 50000, "max": 70000, "currency": "USD", "period": "yearly"},
                 location={"city": "Anywhere", "country": "US", "remote": True})
        make_job(db_session, company, employer, title="Onsite mid",
                 salary={"min": 55000, "max": 65000, "currency": "USD", "period": "yearly"})

        titles = {i["title"] for i in client.get("/api/jobs?minSalary=40000").json()["data"]}
        assert titles == {"Remote mid", "Onsite mid"}

        titles = {i["title"] for i in client.get("/api/jobs?minSalary=40000&remote=true").json()["data"]}
        assert titles == {"Remote mid"}

        # remote=false does not exclude remote jobs
        assert client.get("/api/jobs?remote=false").json()["total"] == 3

    def test_exact_match_filters(self, client, db_session, company, employer):
        make_job(db_session, company, employer, title="Intern", job_type="internship",
                 experience_level="entry", category="Design")
        make_job(db_session, company, employer, title="Lead", experience_level="lead")

        body = client.get("/api/jobs?jobType=internship&experienceLevel=entry&category=Design").json()

        assert [item["title"] for item in body["data"]] == ["Intern"]

    def test_sort_ascending_by_title(self, client, db_session, company, employer):
        for title in ("Charlie", "Alpha", "Bravo"):
            make_job(db_session, company, employer, title=title)

        body = client.get("/api/jobs?sort=title").json()

        assert [item["title"] for item in body["data"]] == ["Alpha", "Bravo", "Charlie"]

    def test_default_sort_is_newest_first(self, client, db_session, company, employer):
        for title in ("first", "second", "third"):
            make_job(db_session, company, employer, title=title)

        body = client.get("/api/jobs").json()

        assert [item["title"] for item in body["data"]] == ["third", "second", "first"]

    def test_unknown_sort_field(self, client):
        response = client.get("/api/jobs?sort=-password")

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid sort field: password"

    def test_invalid_page(self, client):
        assert client.get("/api/jobs?page=0").status_code == 400

    def test_limit_is_capped(self, client, db_session, company, employer):
        make_job(db_session, company, employer)

        body = client.get("/api/jobs?limit=5000").json()

        assert body["totalPages"] == 1


class TestJobDetail:

    def test_each_fetch_counts_a_view(self, client, job):
        first = client.get(f"/api/jobs/{job.id}").json()["data"]
        second = client.get(f"/api/jobs/{job.id}").json()["data"]

        assert first["views"] == 1
        assert second["views"] == 2
        assert second["company"]["name"] == "Acme Corp"

    def test_unknown_job(self, client):
        response = client.get("/api/jobs/00000000-0000-4000-8000-000000000000")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Job not found"}


class TestJobMutations:

    def test_create_job(self, client, company, employer, employer_headers):
        response = client.post("/api/jobs", headers=employer_headers, json=job_payload())

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["companyId"] == str(company.id)
        assert data["postedById"] == str(employer.id)
        assert data["status"] == "active"
        assert data["applicationsCount"] == 0
        assert data["views"] == 0

    def test_create_requires_company(self, client, other_employer_headers):
        response = client.post("/api/jobs", headers=other_employer_headers, json=job_payload())

        assert response.status_code == 400
        assert response.json()["message"] == "Please create a company profile first"

    def test_jobseeker_cannot_create(self, client, jobseeker_headers):
        response = client.post("/api/jobs", headers=jobseeker_headers, json=job_payload())

        assert response.status_code == 403
        assert response.json()["message"] == "User role jobseeker is not authorized to access this route"

    def test_create_requires_auth(self, client):
        assert client.post("/api/jobs", json=job_payload()).status_code == 401

    def test_create_validates_salary_range(self, client, company, employer_headers):
        payload = job_payload(salary={"min": 90000, "max": 10000})

        response = client.post("/api/jobs", headers=employer_headers, json=payload)

        assert response.status_code == 400

    def test_update_job(self, client, job, employer_headers):
        response = client.put(
            f"/api/jobs/{job.id}",
            headers=employer_headers,
            json={"title": "Staff Python Developer", "status": "closed"}
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["title"] == "Staff Python Developer"
        assert data["status"] == "closed"
        assert data["description"] == "Build APIs with FastAPI"

    def test_update_ignores_counters(self, client, job, employer_headers):
        response = client.put(
            f"/api/jobs/{job.id}",
            headers=employer_headers,
            json={"applicationsCount": 99, "views": 1000}
        )

        assert response.status_code == 200
        assert response.json()["data"]["applicationsCount"] == 0
        assert response.json()["data"]["views"] == 0

    @pytest.mark.parametrize("field", ["title", "jobType", "category", "openings", "status", "location", "skills"])
    def test_update_rejects_null_for_required_field(self, client, db_session, job, employer_headers, field):
        response = client.put(f"/api/jobs/{job.id}", headers=employer_headers, json={field: None})

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert "cannot be null" in body["message"]
        assert body["errors"][0]["loc"] == ["body", field]

        db_session.refresh(job)
        assert job.title == "Python Developer"
        assert job.status == JobStatus.ACTIVE

    def test_update_clears_deadline(self, client, db_session, job, employer_headers):
        client.put(f"/api/jobs/{job.id}", headers=employer_headers, json={"applicationDeadline": "2030-01-31T00:00:00Z"})

        response = client.put(f"/api/jobs/{job.id}", headers=employer_headers, json={"applicationDeadline": None})

        assert response.status_code == 200
        assert response.json()["data"]["applicationDeadline"] is None

    def test_non_poster_cannot_update(self, client, db_session, job, other_employer):
        make_company(db_session, other_employer, name="Other Co")

        response = client.put(
            f"/api/jobs/{job.id}",
            headers=auth_headers(other_employer),
            json={"title": "Hijacked"}
        )

        assert response.status_code == 403
        assert response.json()["message"] == "Not authorized to update this job"

    def test_missing_job_is_not_found_before_forbidden(self, client, other_employer_headers):
        response = client.delete(
            "/api/jobs/00000000-0000-4000-8000-000000000000",
            headers=other_employer_headers
        )

        assert response.status_code == 404

    def test_delete_job(self, client, job, employer_headers):
        response = client.delete(f"/api/jobs/{job.id}", headers=employer_headers)

        assert response.status_code == 200
        assert client.get(f"/api/jobs/{job.id}").status_code == 404

    def test_non_poster_cannot_delete(self, client, job, other_employer_headers):
        response = client.delete(f"/api/jobs/{job.id}", headers=other_employer_headers)

        assert response.status_code == 403
        assert client.get(f"/api/jobs/{job.id}").status_code == 200


class TestEmployerViews:

    def test_my_posted_jobs(self, client, db_session, company, employer, employer_headers):
        make_job(db_session, company, employer, title="Older")
        make_job(db_session, company, employer, title="Newer", status=JobStatus.DRAFT)

        body = client.get("/api/jobs/my/posted", headers=employer_headers).json()

        assert body["count"] == 2
        assert [item["title"] for item in body["data"]] == ["Newer", "Older"]

    def test_stats(self, client, job, employer_headers):
        client.get(f"/api/jobs/{job.id}")

        response = client.get(f"/api/jobs/{job.id}/stats", headers=employer_headers)

        assert response.status_code == 200
        assert response.json()["data"] == {
            "views": 1,
            "applications": 0,
            "openings": 1,
            "daysActive": 0,
        }

    def test_stats_forbidden_for_other_employer(self, client, job, other_employer_headers):
        response = client.get(f"/api/jobs/{job.id}/stats", headers=other_employer_headers)

        assert response.status_code == 403
