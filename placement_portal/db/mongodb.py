"""
MongoDB Connection Utility

MongoDB stores everything:
- users: students and recruiters (profile fields inline)
- jobs: postings with eligibility criteria and suitable roles
- resumes: uploaded resumes with their skill analysis
- applications: student applications with custom answers

WHY MongoDB for these?
- Schema-flexible: skill analysis documents are nested JSON
- Document-oriented: a job carries its custom questions inline
- No joins needed: lookups are by id
"""
import logging

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database
from pymongo.collection import Collection
from placement_portal.core.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

# Global client (connection pooling handled internally by pymongo)
_client: MongoClient = None
_db: Database = None


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        _client = MongoClient(settings.mongodb_uri, tz_aware=True)
    return _client


def get_mongo_db() -> Database:
    """Get the portal database"""
    global _db
    if _db is None:
        client = get_mongo_client()
        _db = client[settings.mongodb_db]
    return _db


def get_collection(name: str) -> Collection:
    """
    Get a specific collection.
    Collections we use:
    - users: Student / recruiter accounts
    - jobs: Job postings
    - resumes: Resumes + skill analysis
    - applications: Job applications
    """
    db = get_mongo_db()
    return db[name]


def test_mongo_connection() -> bool:
    """
    Test if MongoDB is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        client = get_mongo_client()
        # ping command checks connection
        client.admin.command('ping')
        return True
    except Exception as e:
        logger.error("MongoDB connection failed: %s", e)
        return False


# Collection name constants (avoid typos)
COLLECTIONS = {
    "users": "users",
    "jobs": "jobs",
    "resumes": "resumes",
    "applications": "applications"
}


def init_mongo_indexes():
    """
    Create indexes for better query performance.
    Call this once during app startup.
    """
    db = get_mongo_db()

    # One account per email
    db[COLLECTIONS["users"]].create_index("email", unique=True)

    # Newest-first listings
    db[COLLECTIONS["jobs"]].create_index([("posted_at", DESCENDING)])
    db[COLLECTIONS["jobs"]].create_index("recruiter_id")
    db[COLLECTIONS["resumes"]].create_index([
        ("student_id", ASCENDING),
        ("uploaded_at", DESCENDING)
    ])

    # One application per (student, job)
    db[COLLECTIONS["applications"]].create_index([
        ("student_id", ASCENDING),
        ("job_id", ASCENDING)
    ], unique=True)
    db[COLLECTIONS["applications"]].create_index("job_id")
    db[COLLECTIONS["applications"]].create_index("resume_id")

    logger.info("MongoDB indexes created successfully")
