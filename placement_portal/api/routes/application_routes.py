"""
Application Routes

POST /applications - Apply to a job (student only)
GET /applications/my - Get my applications (student only)
GET /applications/job/{job_id} - Applications for a job (owning recruiter)
PUT /applications/{application_id}/status - Accept / reject (owning recruiter)
"""

import logging
from typing import List

from fastapi import APIRouter, HTTPException, Depends

from placement_portal.core.auth import get_current_student, get_current_recruiter
from placement_portal.models.eligibility import StudentProfile
from placement_portal.services.matching_service import JobMatchingService, get_matching_service
from placement_portal.services.mongo_service import (
    JobService, ResumeService, ApplicationService,
    get_job_service, get_resume_service, get_application_service
)
from placement_portal.schemas.schemas import (
    ApplicationCreate, ApplicationStatusUpdate, ApplicationResponse,
    CustomAnswer, JobResponse
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/applications", tags=["Applications"])


def unanswered_required_questions(job: JobResponse, answers: List[CustomAnswer]) -> List[str]:
    """Required custom questions without a non-blank answer."""
    given = {a.question: a.answer for a in answers}
    return [
        q.question for q in job.custom_questions
        if q.required and not (given.get(q.question) or "").strip()
    ]


@router.post("", response_model=ApplicationResponse, status_code=201)
async def apply_to_job(
    application: ApplicationCreate,
    student: dict = Depends(get_current_student),
    jobs: JobService = Depends(get_job_service),
    resumes: ResumeService = Depends(get_resume_service),
    applications: ApplicationService = Depends(get_application_service),
    matcher: JobMatchingService = Depends(get_matching_service)
):
    """
    Apply to a job with one of your resumes.

    Checks, in order:
    1. Job exists, resume exists and belongs to the student
    2. Eligibility (CGPA / branch) - every failing reason is reported
    3. Required custom questions are answered
    4. Not already applied
    """
    job_doc = jobs.get_by_id(application.job_id)
    if not job_doc:
        raise HTTPException(status_code=404, detail="Job not found")
    job = JobResponse(**job_doc)

    resume = resumes.get_by_id(application.resume_id)
    if not resume or resume["student_id"] != student["id"]:
        raise HTTPException(status_code=404, detail="Resume not found or not authorized")

    profile = StudentProfile(cgpa=student.get("cgpa"), branch=student.get("branch"))
    eligibility = matcher.check(profile, job)
    if not eligibility.eligible:
        raise HTTPException(
            status_code=400,
            detail={"msg": "Not eligible for this job", "reasons": eligibility.reasons}
        )

    missing = unanswered_required_questions(job, application.custom_answers)
    if missing:
        raise HTTPException(
            status_code=400,
            detail=f'Please answer the required question: "{missing[0]}"'
        )

    if applications.exists(student["id"], job.id):
        raise HTTPException(status_code=400, detail="Already applied to this job")

    created = applications.create({
        "job_id": job.id,
        "student_id": student["id"],
        "resume_id": application.resume_id,
        "status": "pending",
        "custom_answers": [a.model_dump() for a in application.custom_answers],
        # Snapshot for recruiter views and placement statistics
        "job_title": job.title,
        "company": job.company,
        "student_name": student.get("name"),
        "student_branch": student.get("branch"),
        "student_cgpa": student.get("cgpa")
    })
    logger.info("Student %s applied to job %s", student["id"], job.id)
    return ApplicationResponse(**created)


@router.get("/my", response_model=List[ApplicationResponse])
async def my_applications(
    student: dict = Depends(get_current_student),
    applications: ApplicationService = Depends(get_application_service)
):
    """Get all applications of the current student."""
    return [ApplicationResponse(**a) for a in applications.list_for_student(student["id"])]


@router.get("/job/{job_id}", response_model=List[ApplicationResponse])
async def job_applications(
    job_id: str,
    recruiter: dict = Depends(get_current_recruiter),
    jobs: JobService = Depends(get_job_service),
    applications: ApplicationService = Depends(get_application_service)
):
    """Get applications for one of the recruiter's jobs."""
    job = jobs.get_by_id(job_id)
    if not job or job["recruiter_id"] != recruiter["id"]:
        raise HTTPException(status_code=403, detail="Not authorized")

    return [ApplicationResponse(**a) for a in applications.list_for_job(job_id)]


@router.put("/{application_id}/status", response_model=ApplicationResponse)
async def update_status(
    application_id: str,
    update: ApplicationStatusUpdate,
    recruiter: dict = Depends(get_current_recruiter),
    jobs: JobService = Depends(get_job_service),
    applications: ApplicationService = Depends(get_application_service)
):
    """Accept or reject an application to one of the recruiter's jobs."""
    existing = applications.get_by_id(application_id)
    if not existing:
        raise HTTPException(status_code=404, detail="Application not found")

    job = jobs.get_by_id(existing["job_id"])
    if not job or job["recruiter_id"] != recruiter["id"]:
        raise HTTPException(status_code=403, detail="Not authorized")

    updated = applications.update_status(application_id, update.status.value)
    logger.info("Application %s marked %s", application_id, update.status.value)
    return ApplicationResponse(**updated)
