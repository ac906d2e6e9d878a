"""HTTP-level tests with the Mongo services replaced by in-memory fakes."""

import pytest

from placement_portal import main

pytestmark = pytest.mark.api

RESUME_TEXT = b"""Built a project using React and Node.js
Skills: MongoDB, JavaScript
"""


@pytest.fixture
def student(client, signup):
    headers, user = signup("student", name="Asha Rao")
    response = client.put("/api/students/profile", headers=headers, json={"cgpa": 8.0, "branch": "CSE"})
    assert response.status_code == 200
    return headers, response.json()


@pytest.fixture
def recruiter(client, signup):
    headers, user = signup("recruiter", name="Ravi")
    response = client.put("/api/recruiters/profile", headers=headers, json={"company": "Acme"})
    assert response.status_code == 200
    return headers, response.json()


def post_job(client, headers, **fields):
    body = {"title": "SDE Intern", "description": "Build things"}
    body.update(fields)
    response = client.post("/api/jobs", headers=headers, json=body)
    assert response.status_code == 201, response.text
    return response.json()


def upload_resume(client, headers, content=RESUME_TEXT):
    response = client.post(
        "/api/students/resumes",
        headers=headers,
        data={"title": "Main resume"},
        files={"file": ("resume.txt", content, "text/plain")},
    )
    assert response.status_code == 201, response.text
    return response.json()


def test_health(client, monkeypatch):
    monkeypatch.setattr(main, "test_mongo_connection", lambda: False)
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["mongodb"] == "disconnected"


def test_register_login_and_me(client, signup):
    signup("student", email="asha@college.edu")

    response = client.post("/api/auth/login", json={
        "email": "Asha@College.edu", "password": "secret123", "role": "student"
    })
    assert response.status_code == 200
    token = response.json()["token"]

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["email"] == "asha@college.edu"
    assert "password_hash" not in me.json()


def test_duplicate_registration_rejected(client, signup):
    signup("student", email="dup@college.edu")
    response = client.post("/api/auth/register", json={
        "email": "dup@college.edu", "password": "secret123", "role": "student", "name": "Again"
    })
    assert response.status_code == 400


def test_login_checks_password_and_role(client, signup):
    signup("student", email="sam@college.edu")
    wrong_password = client.post("/api/auth/login", json={
        "email": "sam@college.edu", "password": "nope-nope", "role": "student"
    })
    wrong_role = client.post("/api/auth/login", json={
        "email": "sam@college.edu", "password": "secret123", "role": "recruiter"
    })
    assert wrong_password.status_code == 400
    assert wrong_role.status_code == 400


def test_bad_token_rejected(client):
    response = client.get("/api/students/profile", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401


def test_profile_validation(client, student):
    headers, _ = student
    assert client.put("/api/students/profile", headers=headers, json={"cgpa": 11}).status_code == 422
    assert client.put("/api/students/profile", headers=headers, json={}).status_code == 400


def test_role_guards(client, student, recruiter):
    student_headers, _ = student
    recruiter_headers, _ = recruiter
    job = {"title": "x", "description": "y"}
    assert client.post("/api/jobs", headers=student_headers, json=job).status_code == 403
    assert client.get("/api/jobs/eligible", headers=recruiter_headers).status_code == 403
    assert client.get("/api/statistics/placements", headers=student_headers).status_code == 403


def test_create_job_tags_roles(client, recruiter):
    headers, profile = recruiter
    job = post_job(client, headers, requirements="React, Node.js, MongoDB")
    assert job["requirements"] == ["React", "Node.js", "MongoDB"]
    assert job["suitable_roles"][0] == "full-stack"
    assert job["company"] == "Acme"
    assert job["recruiter_id"] == profile["id"]

    untagged = post_job(client, headers, requirements=["Excel"])
    assert untagged["suitable_roles"] == ["full-stack"]


def test_update_job_retags_and_checks_owner(client, recruiter, signup):
    headers, _ = recruiter
    job = post_job(client, headers, requirements=["React"])

    response = client.put(f"/api/jobs/{job['id']}", headers=headers, json={"requirements": ["Docker"]})
    assert response.status_code == 200
    assert "devops" in response.json()["suitable_roles"]
    assert response.json()["title"] == "SDE Intern"

    other_headers, _ = signup("recruiter")
    response = client.put(f"/api/jobs/{job['id']}", headers=other_headers, json={"title": "Hijack"})
    assert response.status_code == 403


def test_invalid_job_id(client):
    assert client.get("/api/jobs/not-an-object-id").status_code == 400
    assert client.get("/api/jobs/65a000000000000000000000").status_code == 404


def test_resume_upload_stores_analysis(client, student):
    headers, _ = student
    resume = upload_resume(client, headers)
    analysis = resume["skill_analysis"]
    assert analysis["bestRoles"] == ["full-stack", "frontend", "backend"]
    assert analysis["skillScores"]["react"]["projectCount"] == 1

    listed = client.get("/api/students/resumes", headers=headers).json()
    assert [r["id"] for r in listed] == [resume["id"]]


def test_resume_upload_rejects_unsupported_file(client, student):
    headers, _ = student
    response = client.post(
        "/api/students/resumes",
        headers=headers,
        data={"title": "Bad"},
        files={"file": ("resume.png", b"\x89PNG", "image/png")},
    )
    assert response.status_code == 400


def test_eligible_jobs_filtered_and_matched(client, student, recruiter):
    student_headers, _ = student
    recruiter_headers, _ = recruiter
    web = post_job(client, recruiter_headers, requirements=["React", "Node.js", "MongoDB"],
                   min_cgpa=7.5, branch="CSE,ECE")
    ops = post_job(client, recruiter_headers, requirements=["Docker", "Kubernetes"])
    post_job(client, recruiter_headers, requirements=["React"], min_cgpa=9.5)

    # no resume yet: every eligible job, newest first
    body = client.get("/api/jobs/eligible", headers=student_headers).json()
    assert [j["id"] for j in body["jobs"]] == [ops["id"], web["id"]]
    assert body["matched_count"] == 0

    upload_resume(client, student_headers)
    body = client.get("/api/jobs/eligible", headers=student_headers).json()
    assert [j["id"] for j in body["jobs"]] == [web["id"]]
    assert body["total_jobs"] == 1
    assert body["matched_count"] == 1
    assert body["best_roles"][0] == "full-stack"


def test_eligibility_endpoint_reports_reasons(client, signup, recruiter):
    recruiter_headers, _ = recruiter
    job = post_job(client, recruiter_headers, min_cgpa=8.0, branch="ECE")

    headers, _ = signup("student")
    client.put("/api/students/profile", headers=headers, json={"cgpa": 7.0, "branch": "Mechanical"})
    body = client.get(f"/api/jobs/{job['id']}/eligibility", headers=headers).json()
    assert body["eligible"] is False
    assert len(body["reasons"]) == 2


def test_application_flow(client, student, recruiter, signup):
    student_headers, student_profile = student
    recruiter_headers, _ = recruiter
    job = post_job(client, recruiter_headers, requirements=["React"], min_cgpa=7.5,
                   custom_questions=[{"question": "Why Acme?", "required": True}])
    resume = upload_resume(client, student_headers)

    apply = {"job_id": job["id"], "resume_id": resume["id"]}
    response = client.post("/api/applications", headers=student_headers, json=apply)
    assert response.status_code == 400
    assert response.json()["detail"] == 'Please answer the required question: "Why Acme?"'

    apply["custom_answers"] = [{"question": "Why Acme?", "answer": "Great mentors"}]
    response = client.post("/api/applications", headers=student_headers, json=apply)
    assert response.status_code == 201
    application = response.json()
    assert application["status"] == "pending"
    assert application["student_branch"] == "CSE"
    assert application["job_title"] == "SDE Intern"
    assert application["company"] == "Acme"

    again = client.post("/api/applications", headers=student_headers, json=apply)
    assert again.status_code == 400
    assert again.json()["detail"] == "Already applied to this job"

    mine = client.get("/api/applications/my", headers=student_headers).json()
    assert [a["id"] for a in mine] == [application["id"]]

    for_job = client.get(f"/api/applications/job/{job['id']}", headers=recruiter_headers).json()
    assert for_job[0]["student_name"] == student_profile["name"]

    other_headers, _ = signup("recruiter")
    assert client.get(f"/api/applications/job/{job['id']}", headers=other_headers).status_code == 403

    response = client.put(f"/api/applications/{application['id']}/status",
                          headers=recruiter_headers, json={"status": "accepted"})
    assert response.status_code == 200
    assert response.json()["status"] == "accepted"

    stats = client.get("/api/statistics/placements", headers=recruiter_headers).json()
    assert stats["total_placements"] == 1
    year = stats["years"][0]
    assert stats["data"][year]["branch_wise"] == {"CSE": 1}
    assert stats["data"][year]["placements"][0]["posted_by"] == "Acme"


def test_ineligible_application_lists_every_reason(client, signup, recruiter):
    recruiter_headers, _ = recruiter
    job = post_job(client, recruiter_headers, min_cgpa=8.0, branch="ECE")

    headers, _ = signup("student")
    client.put("/api/students/profile", headers=headers, json={"cgpa": 7.0, "branch": "Mechanical"})
    resume = upload_resume(client, headers)

    response = client.post("/api/applications", headers=headers,
                           json={"job_id": job["id"], "resume_id": resume["id"]})
    assert response.status_code == 400
    assert len(response.json()["detail"]["reasons"]) == 2


def test_cannot_apply_with_someone_elses_resume(client, student, signup, recruiter):
    recruiter_headers, _ = recruiter
    job = post_job(client, recruiter_headers)
    owner_headers, _ = student
    resume = upload_resume(client, owner_headers)

    other_headers, _ = signup("student")
    response = client.post("/api/applications", headers=other_headers,
                           json={"job_id": job["id"], "resume_id": resume["id"]})
    assert response.status_code == 404


def test_skill_endpoints(client, student):
    headers, _ = student
    analysis = client.post("/api/skills/analyze", headers=headers,
                           json={"text": "Worked as intern for 6 months using Python and SQL"}).json()
    assert analysis["skillScores"]["python"]["internshipMonths"] == 6

    roles = client.post("/api/skills/job-roles", headers=headers, json={"requirements": []}).json()
    assert roles == ["full-stack"]

    taxonomy = client.get("/api/skills/taxonomy").json()
    assert taxonomy["default_role"] == "full-stack"


def test_corrupt_stored_analysis_does_not_break_resume_list(client, services, student):
    headers, profile = student
    services.resumes.create(profile["id"], "Old resume", "old.txt", skill_analysis={"bestRoles": "backend"})

    response = client.get("/api/students/resumes", headers=headers)
    assert response.status_code == 200
    assert response.json()[0]["skill_analysis"] is None

    # the listing falls back to every eligible job
    assert client.get("/api/jobs/eligible", headers=headers).status_code == 200


def test_owner_downloads_resume_file(client, student):
    headers, _ = student
    resume = upload_resume(client, headers)
    assert resume["file_url"] == f"/api/resumes/{resume['id']}/file"

    response = client.get(resume["file_url"], headers=headers)
    assert response.status_code == 200
    assert response.content == RESUME_TEXT
    assert "resume.txt" in response.headers["content-disposition"]


def test_resume_file_access_rules(client, student, recruiter, signup):
    student_headers, _ = student
    recruiter_headers, _ = recruiter
    resume = upload_resume(client, student_headers)
    url = resume["file_url"]

    other_student, _ = signup("student")
    assert client.get(url, headers=other_student).status_code == 403
    # no application yet
    assert client.get(url, headers=recruiter_headers).status_code == 403

    job = post_job(client, recruiter_headers)
    response = client.post("/api/applications", headers=student_headers,
                           json={"job_id": job["id"], "resume_id": resume["id"]})
    assert response.status_code == 201

    assert client.get(url, headers=recruiter_headers).status_code == 200
    other_recruiter, _ = signup("recruiter")
    assert client.get(url, headers=other_recruiter).status_code == 403


def test_resume_without_stored_file(client, services, student):
    headers, profile = student
    resume = services.resumes.create(profile["id"], "Pasted", "cv.txt")

    listed = client.get("/api/students/resumes", headers=headers).json()
    assert listed[0]["file_url"] is None
    assert client.get(f"/api/resumes/{resume['id']}/file", headers=headers).status_code == 404
    assert client.get("/api/resumes/65a000000000000000000000/file", headers=headers).status_code == 404
