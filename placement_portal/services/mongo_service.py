"""
MongoDB Service - CRUD operations for document collections.

Collections in this database:
1. users         - Students and recruiters (profile fields inline)
2. jobs          - Job postings (eligibility criteria + suitable_roles)
3. resumes       - Uploaded resumes + skillAnalysis document
4. applications  - Applications with a snapshot of student/job fields

Documents are returned with "_id" replaced by a string "id".
Invalid id strings raise bson.errors.InvalidId (mapped to 400 in main).
"""

from datetime import datetime, timezone
from typing import Optional, List, Dict, Any
from bson import ObjectId
from pymongo import DESCENDING, ReturnDocument
from pymongo.collection import Collection

from placement_portal.db.mongodb import get_collection, COLLECTIONS


# ============================================================
# HELPER: Convert ObjectId to string for JSON serialization
# ============================================================

def serialize_doc(doc: dict) -> Optional[dict]:
    """Convert MongoDB document to JSON-serializable dict."""
    if doc is None:
        return None
    if "_id" in doc:
        doc["id"] = str(doc.pop("_id"))
    return doc


def serialize_docs(docs) -> list:
    """Convert MongoDB documents to JSON-serializable list."""
    return [serialize_doc(doc) for doc in docs]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ============================================================
# USERS COLLECTION
# ============================================================

class UserService:
    """
    Handles student and recruiter accounts.
    """

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["users"])

    def create(self, email: str, password_hash: str, role: str, name: str) -> dict:
        """
        Insert a user. The unique email index rejects duplicates
        with DuplicateKeyError.
        """
        doc = {
            "email": email.lower().strip(),
            "password_hash": password_hash,
            "role": role,
            "name": name.strip(),
            "created_at": utcnow()
        }
        result = self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return serialize_doc(doc)

    def get_by_id(self, user_id: str) -> Optional[dict]:
        return serialize_doc(self.collection.find_one({"_id": ObjectId(user_id)}))

    def get_by_email(self, email: str, role: Optional[str] = None) -> Optional[dict]:
        query = {"email": email.lower().strip()}
        if role:
            query["role"] = role
        return serialize_doc(self.collection.find_one(query))

    def update_profile(self, user_id: str, fields: Dict[str, Any]) -> Optional[dict]:
        """Set profile fields and return the updated user."""
        doc = self.collection.find_one_and_update(
            {"_id": ObjectId(user_id)},
            {"$set": fields},
            return_document=ReturnDocument.AFTER
        )
        return serialize_doc(doc)


# ============================================================
# JOBS COLLECTION
# ============================================================

class JobService:
    """
    Handles job postings.
    suitable_roles is computed by the caller before insert/update.
    """

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["jobs"])

    def create(self, job: Dict[str, Any]) -> dict:
        doc = dict(job)
        doc["posted_at"] = utcnow()
        result = self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return serialize_doc(doc)

    def get_by_id(self, job_id: str) -> Optional[dict]:
        return serialize_doc(self.collection.find_one({"_id": ObjectId(job_id)}))

    def list_all(self) -> List[dict]:
        """All jobs, newest first."""
        return serialize_docs(self.collection.find().sort("posted_at", DESCENDING))

    def update(self, job_id: str, fields: Dict[str, Any]) -> Optional[dict]:
        doc = self.collection.find_one_and_update(
            {"_id": ObjectId(job_id)},
            {"$set": fields},
            return_document=ReturnDocument.AFTER
        )
        return serialize_doc(doc)


# ============================================================
# RESUMES COLLECTION
# ============================================================

class ResumeService:
    """
    Handles resumes. A re-upload creates a NEW resume; the
    skill analysis of an existing resume is never rewritten.
    """

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["resumes"])

    def create(
        self,
        student_id: str,
        title: str,
        filename: str,
        skill_analysis: Optional[dict] = None,
        file_path: Optional[str] = None
    ) -> dict:
        """
        Insert a resume.

        Args:
            student_id: Owning student's user id
            title: Display title chosen by the student
            filename: Original upload filename
            skill_analysis: ResumeAnalysis document (camelCase) or None
                            if analysis failed
            file_path: Stored upload on disk, None if it could not be saved
        """
        doc = {
            "student_id": student_id,
            "title": title.strip(),
            "filename": filename,
            "uploaded_at": utcnow(),
            "skill_analysis": skill_analysis,
            "file_path": file_path
        }
        result = self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return serialize_doc(doc)

    def get_by_id(self, resume_id: str) -> Optional[dict]:
        return serialize_doc(self.collection.find_one({"_id": ObjectId(resume_id)}))

    def get_latest_for_student(self, student_id: str) -> Optional[dict]:
        doc = self.collection.find_one(
            {"student_id": student_id},
            sort=[("uploaded_at", DESCENDING)]  # Most recent first
        )
        return serialize_doc(doc)

    def list_for_student(self, student_id: str) -> List[dict]:
        cursor = self.collection.find({"student_id": student_id}).sort("uploaded_at", DESCENDING)
        return serialize_docs(cursor)


# ============================================================
# APPLICATIONS COLLECTION
# ============================================================

class ApplicationService:
    """
    Handles applications.

    Each application stores a snapshot of the student's branch/name
    and the job's title/company at apply time. Placement statistics
    are computed from these snapshots.
    """

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["applications"])

    def create(self, application: Dict[str, Any]) -> dict:
        """Insert an application. Duplicate (student, job) raises DuplicateKeyError."""
        doc = dict(application)
        doc.setdefault("status", "pending")
        doc["applied_at"] = utcnow()
        result = self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return serialize_doc(doc)

    def get_by_id(self, application_id: str) -> Optional[dict]:
        return serialize_doc(self.collection.find_one({"_id": ObjectId(application_id)}))

    def exists(self, student_id: str, job_id: str) -> bool:
        return self.collection.count_documents(
            {"student_id": student_id, "job_id": job_id}, limit=1
        ) > 0

    def list_for_student(self, student_id: str) -> List[dict]:
        cursor = self.collection.find({"student_id": student_id}).sort("applied_at", DESCENDING)
        return serialize_docs(cursor)

    def list_for_job(self, job_id: str) -> List[dict]:
        cursor = self.collection.find({"job_id": job_id}).sort("applied_at", DESCENDING)
        return serialize_docs(cursor)

    def list_for_resume(self, resume_id: str) -> List[dict]:
        return serialize_docs(self.collection.find({"resume_id": resume_id}))

    def list_by_status(self, statuses: List[str]) -> List[dict]:
        cursor = self.collection.find({"status": {"$in": statuses}})
        return serialize_docs(cursor)

    def update_status(self, application_id: str, status: str) -> Optional[dict]:
        doc = self.collection.find_one_and_update(
            {"_id": ObjectId(application_id)},
            {"$set": {"status": status, "updated_at": utcnow()}},
            return_document=ReturnDocument.AFTER
        )
        return serialize_doc(doc)


# ============================================================
# CONVENIENCE FUNCTIONS (FastAPI dependencies)
# ============================================================

def get_user_service() -> UserService:
    return UserService()


def get_job_service() -> JobService:
    return JobService()


def get_resume_service() -> ResumeService:
    return ResumeService()


def get_application_service() -> ApplicationService:
    return ApplicationService()
