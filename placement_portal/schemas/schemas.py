"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
"""

import logging

from pydantic import BaseModel, EmailStr, Field, ValidationError, field_validator
from typing import Optional, List, Dict, Union
from datetime import datetime
from enum import Enum

from placement_portal.models.analysis import ResumeAnalysis
from placement_portal.models.eligibility import JobCriteria
from placement_portal.services.role_tagger import normalize_requirements

logger = logging.getLogger(__name__)


# ============================================================
# ENUMS
# ============================================================

class UserRole(str, Enum):
    student = "student"
    recruiter = "recruiter"


class ApplicationStatus(str, Enum):
    pending = "pending"
    accepted = "accepted"
    rejected = "rejected"


class QuestionType(str, Enum):
    text = "text"
    textarea = "textarea"
    select = "select"


# ============================================================
# AUTH SCHEMAS
# ============================================================

class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    role: UserRole
    name: str = Field(..., min_length=1, max_length=100)

class LoginRequest(BaseModel):
    email: EmailStr
    password: str
    role: UserRole

class UserResponse(BaseModel):
    id: str
    email: str
    role: str
    name: str
    cgpa: Optional[float] = None
    branch: Optional[str] = None
    tenth_score: Optional[float] = None
    twelfth_score: Optional[float] = None
    company: Optional[str] = None
    created_at: Optional[datetime] = None

class TokenResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    user: UserResponse


# ============================================================
# PROFILE SCHEMAS
# ============================================================

class StudentProfileUpdate(BaseModel):
    cgpa: Optional[float] = Field(None, ge=0, le=10)
    branch: Optional[str] = Field(None, max_length=100)
    tenth_score: Optional[float] = Field(None, ge=0, le=100)
    twelfth_score: Optional[float] = Field(None, ge=0, le=100)

    @field_validator("branch")
    @classmethod
    def strip_branch(cls, value: Optional[str]) -> Optional[str]:
        return value.strip() if value is not None else None

class RecruiterProfileUpdate(BaseModel):
    company: str = Field(..., min_length=1, max_length=200)


# ============================================================
# JOB SCHEMAS
# ============================================================

class CustomQuestion(BaseModel):
    question: str = Field(..., min_length=1)
    type: QuestionType = QuestionType.text
    options: List[str] = []
    required: bool = False

class JobCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    min_cgpa: Optional[float] = Field(None, ge=0, le=10)
    branch: Optional[str] = None
    # List of strings or one comma-separated string
    requirements: Union[List[str], str, None] = Field(default_factory=list)
    custom_questions: List[CustomQuestion] = []

    @field_validator("requirements")
    @classmethod
    def split_requirements(cls, value) -> List[str]:
        return normalize_requirements(value)

class JobUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1)
    min_cgpa: Optional[float] = Field(None, ge=0, le=10)
    branch: Optional[str] = None
    requirements: Union[List[str], str, None] = None
    custom_questions: Optional[List[CustomQuestion]] = None

    @field_validator("requirements")
    @classmethod
    def split_requirements(cls, value) -> Optional[List[str]]:
        if value is None:
            return None
        return normalize_requirements(value)

class JobResponse(JobCriteria):
    id: str
    recruiter_id: str
    company: Optional[str] = None
    title: str
    description: str
    requirements: List[str] = []
    custom_questions: List[CustomQuestion] = []
    posted_at: Optional[datetime] = None

class JobMatchResponse(BaseModel):
    jobs: List[JobResponse]
    total_jobs: int
    matched_count: int
    best_roles: List[str] = []

class EligibilityResponse(BaseModel):
    job_id: str
    eligible: bool
    reasons: List[str] = []


# ============================================================
# RESUME SCHEMAS
# ============================================================

class ResumeResponse(BaseModel):
    id: str
    student_id: str
    title: str
    filename: Optional[str] = None
    uploaded_at: datetime
    skill_analysis: Optional[ResumeAnalysis] = None
    # Download link, None when the file was not stored
    file_url: Optional[str] = None

    @field_validator("skill_analysis", mode="wrap")
    @classmethod
    def drop_corrupt_analysis(cls, value, handler):
        # an unreadable stored analysis is shown as missing
        try:
            return handler(value)
        except ValidationError as e:
            logger.warning("Ignoring unreadable skill analysis: %s", e)
            return None

    @classmethod
    def from_document(cls, doc: dict) -> "ResumeResponse":
        file_url = f"/api/resumes/{doc['id']}/file" if doc.get("file_path") else None
        return cls(**doc, file_url=file_url)

class AnalyzeTextRequest(BaseModel):
    text: str = ""

class RoleTagRequest(BaseModel):
    requirements: List[str] = []


# ============================================================
# APPLICATION SCHEMAS
# ============================================================

class CustomAnswer(BaseModel):
    question: str
    answer: str = ""

class ApplicationCreate(BaseModel):
    job_id: str
    resume_id: str
    custom_answers: List[CustomAnswer] = []

class ApplicationStatusUpdate(BaseModel):
    status: ApplicationStatus

class ApplicationResponse(BaseModel):
    id: str
    job_id: str
    student_id: str
    resume_id: str
    status: str
    job_title: Optional[str] = None
    company: Optional[str] = None
    student_name: Optional[str] = None
    student_branch: Optional[str] = None
    student_cgpa: Optional[float] = None
    custom_answers: List[CustomAnswer] = []
    applied_at: datetime
    updated_at: Optional[datetime] = None


# ============================================================
# STATISTICS SCHEMAS
# ============================================================

class PlacementRecord(BaseModel):
    student_name: str
    role: str
    posted_by: str
    branch: str
    academic_year: str

class YearStats(BaseModel):
    branch_wise: Dict[str, int] = {}
    placements: List[PlacementRecord] = []

class PlacementStatsResponse(BaseModel):
    success: bool = True
    years: List[str] = []
    data: Dict[str, YearStats] = {}
    total_placements: int = 0


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    message: str
    success: bool = True