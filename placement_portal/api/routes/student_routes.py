"""
Student Routes

GET /students/profile - Get own profile
PUT /students/profile - Update CGPA / branch / 10th & 12th scores
POST /students/resumes - Upload resume (PDF/DOCX/TXT) + skill analysis
GET /students/resumes - List my resumes, newest first
GET /students/resumes/formats - Get supported formats
"""

import logging
from typing import List

from fastapi import APIRouter, HTTPException, Depends, UploadFile, File, Form

from placement_portal.core.auth import get_current_student
from placement_portal.utils.file_upload import (
    extract_text_from_file, get_supported_formats, save_resume_file
)
from placement_portal.services.matching_service import JobMatchingService, get_matching_service
from placement_portal.services.mongo_service import (
    UserService, ResumeService, get_user_service, get_resume_service
)
from placement_portal.schemas.schemas import (
    StudentProfileUpdate, UserResponse, ResumeResponse
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/students", tags=["Students"])


@router.get("/profile", response_model=UserResponse)
async def get_profile(student: dict = Depends(get_current_student)):
    """Get current student's profile."""
    return UserResponse(**student)


@router.put("/profile", response_model=UserResponse)
async def update_profile(
    data: StudentProfileUpdate,
    student: dict = Depends(get_current_student),
    users: UserService = Depends(get_user_service)
):
    """Update student profile. Only provided fields are updated."""
    fields = data.model_dump(exclude_none=True)
    if not fields:
        raise HTTPException(status_code=400, detail="No fields to update")

    user = users.update_profile(student["id"], fields)
    return UserResponse(**user)


@router.post("/resumes", response_model=ResumeResponse, status_code=201)
async def upload_resume(
    title: str = Form(..., min_length=1),
    file: UploadFile = File(..., description="Resume file (PDF, DOCX, or TXT)"),
    student: dict = Depends(get_current_student),
    resumes: ResumeService = Depends(get_resume_service),
    matcher: JobMatchingService = Depends(get_matching_service)
):
    """
    Upload a resume and analyze its skills.

    Process:
    1. Extract text from file
    2. Keep the uploaded file under settings.resume_dir
    3. Score skills + rank roles (rule-based analyzer)
    4. Store resume with its analysis in MongoDB

    Analysis or file storage problems never fail the upload; the resume is
    stored without them instead.
    """
    resume_text, filename, content = await extract_text_from_file(file)

    file_path = None
    try:
        file_path = save_resume_file(content, filename)
    except OSError:
        logger.exception("Could not store resume file %s", filename)

    skill_analysis = None
    try:
        skill_analysis = matcher.analyze_resume(resume_text).to_document()
    except Exception:
        logger.exception("Resume analysis failed (non-critical) for %s", filename)

    resume = resumes.create(
        student_id=student["id"],
        title=title,
        filename=filename,
        skill_analysis=skill_analysis,
        file_path=file_path
    )
    logger.info("Resume '%s' stored for student %s", title, student["id"])
    return ResumeResponse.from_document(resume)


@router.get("/resumes", response_model=List[ResumeResponse])
async def list_resumes(
    student: dict = Depends(get_current_student),
    resumes: ResumeService = Depends(get_resume_service)
):
    """Get all resumes of current student, newest first."""
    return [ResumeResponse.from_document(r) for r in resumes.list_for_student(student["id"])]


@router.get("/resumes/formats")
async def resume_formats():
    """Get supported resume file formats."""
    return get_supported_formats()
