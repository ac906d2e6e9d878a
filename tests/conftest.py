"""Shared fixtures: in-memory stand-ins for the Mongo-backed services."""

import copy
from itertools import count

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from placement_portal.core.config import get_settings
from placement_portal.core.skill_config import build_skill_config
from placement_portal.main import app
from placement_portal.services import mongo_service


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "api: exercises the HTTP layer through TestClient"
    )


class FakeCollection:
    """Dict-backed store returning copies, newest first like the real services."""

    def __init__(self):
        self.docs = {}
        self._seq = count()

    def insert(self, doc: dict) -> dict:
        doc = copy.deepcopy(doc)
        doc["id"] = str(ObjectId())
        doc["_seq"] = next(self._seq)
        self.docs[doc["id"]] = doc
        return self._public(doc)

    def get(self, doc_id: str):
        ObjectId(doc_id)  # malformed ids raise InvalidId, as with pymongo
        doc = self.docs.get(doc_id)
        return self._public(doc) if doc else None

    def find(self, predicate=lambda doc: True) -> list:
        matches = [d for d in self.docs.values() if predicate(d)]
        matches.sort(key=lambda d: d["_seq"], reverse=True)
        return [self._public(d) for d in matches]

    def set(self, doc_id: str, fields: dict):
        ObjectId(doc_id)
        doc = self.docs.get(doc_id)
        if doc is None:
            return None
        doc.update(copy.deepcopy(fields))
        return self._public(doc)

    @staticmethod
    def _public(doc: dict) -> dict:
        public = copy.deepcopy(doc)
        public.pop("_seq", None)
        return public


class FakeUserService:
    def __init__(self):
        self.store = FakeCollection()

    def create(self, email, password_hash, role, name):
        return self.store.insert({
            "email": email.lower().strip(),
            "password_hash": password_hash,
            "role": role,
            "name": name.strip(),
            "created_at": mongo_service.utcnow(),
        })

    def get_by_id(self, user_id):
        return self.store.get(user_id)

    def get_by_email(self, email, role=None):
        email = email.lower().strip()
        found = self.store.find(
            lambda d: d["email"] == email and (role is None or d["role"] == role)
        )
        return found[0] if found else None

    def update_profile(self, user_id, fields):
        return self.store.set(user_id, fields)


class FakeJobService:
    def __init__(self):
        self.store = FakeCollection()

    def create(self, job):
        doc = dict(job)
        doc["posted_at"] = mongo_service.utcnow()
        return self.store.insert(doc)

    def get_by_id(self, job_id):
        return self.store.get(job_id)

    def list_all(self):
        return self.store.find()

    def update(self, job_id, fields):
        return self.store.set(job_id, fields)


class FakeResumeService:
    def __init__(self):
        self.store = FakeCollection()

    def create(self, student_id, title, filename, skill_analysis=None, file_path=None):
        return self.store.insert({
            "student_id": student_id,
            "title": title.strip(),
            "filename": filename,
            "uploaded_at": mongo_service.utcnow(),
            "skill_analysis": skill_analysis,
            "file_path": file_path,
        })

    def get_by_id(self, resume_id):
        return self.store.get(resume_id)

    def get_latest_for_student(self, student_id):
        found = self.list_for_student(student_id)
        return found[0] if found else None

    def list_for_student(self, student_id):
        return self.store.find(lambda d: d["student_id"] == student_id)


class FakeApplicationService:
    def __init__(self):
        self.store = FakeCollection()

    def create(self, application):
        doc = dict(application)
        doc.setdefault("status", "pending")
        doc["applied_at"] = mongo_service.utcnow()
        return self.store.insert(doc)

    def get_by_id(self, application_id):
        return self.store.get(application_id)

    def exists(self, student_id, job_id):
        return bool(self.store.find(
            lambda d: d["student_id"] == student_id and d["job_id"] == job_id
        ))

    def list_for_student(self, student_id):
        return self.store.find(lambda d: d["student_id"] == student_id)

    def list_for_job(self, job_id):
        return self.store.find(lambda d: d["job_id"] == job_id)

    def list_for_resume(self, resume_id):
        return self.store.find(lambda d: d["resume_id"] == resume_id)

    def list_by_status(self, statuses):
        return self.store.find(lambda d: d["status"] in statuses)

    def update_status(self, application_id, status):
        return self.store.set(application_id, {"status": status, "updated_at": mongo_service.utcnow()})


class FakeServices:
    def __init__(self):
        self.users = FakeUserService()
        self.jobs = FakeJobService()
        self.resumes = FakeResumeService()
        self.applications = FakeApplicationService()


@pytest.fixture
def skill_config():
    return build_skill_config()


@pytest.fixture(autouse=True)
def resume_dir(tmp_path, monkeypatch):
    """Keep stored uploads inside the test's temp directory."""
    directory = tmp_path / "resumes"
    monkeypatch.setattr(get_settings(), "resume_dir", str(directory))
    return directory


@pytest.fixture
def services():
    return FakeServices()


@pytest.fixture
def client(services):
    app.dependency_overrides[mongo_service.get_user_service] = lambda: services.users
    app.dependency_overrides[mongo_service.get_job_service] = lambda: services.jobs
    app.dependency_overrides[mongo_service.get_resume_service] = lambda: services.resumes
    app.dependency_overrides[mongo_service.get_application_service] = lambda: services.applications
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def signup(client):
    """Register an account and return (auth headers, user json)."""

    def _signup(role="student", name="Test User", email=None):
        email = email or f"{role}-{ObjectId()}@college.edu"
        response = client.post("/api/auth/register", json={
            "email": email,
            "password": "secret123",
            "role": role,
            "name": name,
        })
        assert response.status_code == 201, response.text
        body = response.json()
        return {"Authorization": f"Bearer {body['token']}"}, body["user"]

    return _signup
