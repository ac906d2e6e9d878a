"""
Job Routes

POST /jobs - Create job posting (recruiter only), auto-tags suitable roles
GET /jobs - List all jobs, newest first
GET /jobs/eligible - Jobs the current student can apply to, best fit first
GET /jobs/{job_id} - Get job details
PUT /jobs/{job_id} - Update job (owning recruiter only)
GET /jobs/{job_id}/eligibility - Apply-time eligibility check (student only)
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Depends, Query

from placement_portal.core.auth import get_current_student, get_current_recruiter
from placement_portal.models.eligibility import StudentProfile
from placement_portal.services.matching_service import JobMatchingService, get_matching_service
from placement_portal.services.mongo_service import (
    JobService, ResumeService, get_job_service, get_resume_service
)
from placement_portal.schemas.schemas import (
    JobCreate, JobUpdate, JobResponse, JobMatchResponse, EligibilityResponse
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/jobs", tags=["Jobs"])


def student_profile(student: dict) -> StudentProfile:
    return StudentProfile(cgpa=student.get("cgpa"), branch=student.get("branch"))


def get_job_or_404(jobs: JobService, job_id: str) -> dict:
    job = jobs.get_by_id(job_id)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    return job


def best_roles_of(analysis) -> List[str]:
    """bestRoles of a stored analysis document, [] if absent or malformed."""
    if not isinstance(analysis, dict):
        return []
    roles = analysis.get("bestRoles")
    if not isinstance(roles, list):
        return []
    return [r for r in roles if isinstance(r, str)]


@router.post("", response_model=JobResponse, status_code=201)
async def create_job(
    job: JobCreate,
    recruiter: dict = Depends(get_current_recruiter),
    jobs: JobService = Depends(get_job_service),
    matcher: JobMatchingService = Depends(get_matching_service)
):
    """Create a new job posting. Suitable roles are derived from requirements."""
    doc = job.model_dump(mode="json")
    doc["recruiter_id"] = recruiter["id"]
    doc["company"] = recruiter.get("company")
    doc["suitable_roles"] = matcher.tag_job(job.requirements)

    created = jobs.create(doc)
    logger.info("Job %s created with roles %s", created["id"], created["suitable_roles"])
    return JobResponse(**created)


@router.get("", response_model=List[JobResponse])
async def list_jobs(jobs: JobService = Depends(get_job_service)):
    """List all job postings, newest first."""
    return [JobResponse(**j) for j in jobs.list_all()]


@router.get("/eligible", response_model=JobMatchResponse)
async def list_eligible_jobs(
    resume_id: Optional[str] = Query(None, description="Resume to match against (default: latest)"),
    student: dict = Depends(get_current_student),
    jobs: JobService = Depends(get_job_service),
    resumes: ResumeService = Depends(get_resume_service),
    matcher: JobMatchingService = Depends(get_matching_service)
):
    """
    Jobs the student is eligible for (CGPA / branch).

    If the chosen resume has a skill analysis, jobs whose suitable
    roles overlap the resume's best roles are returned first-choice;
    otherwise every eligible job is returned.
    """
    if resume_id:
        resume = resumes.get_by_id(resume_id)
        if not resume or resume["student_id"] != student["id"]:
            raise HTTPException(status_code=404, detail="Resume not found or not authorized")
    else:
        resume = resumes.get_latest_for_student(student["id"])

    analysis = resume.get("skill_analysis") if resume else None
    pool = [JobResponse(**j) for j in jobs.list_all()]

    result = matcher.list_jobs_for_student(student_profile(student), pool, analysis)
    return JobMatchResponse(
        jobs=result.jobs,
        total_jobs=result.total_jobs,
        matched_count=result.matched_count,
        best_roles=best_roles_of(analysis)
    )


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(job_id: str, jobs: JobService = Depends(get_job_service)):
    """Get details of a specific job."""
    return JobResponse(**get_job_or_404(jobs, job_id))


@router.put("/{job_id}", response_model=JobResponse)
async def update_job(
    job_id: str,
    update: JobUpdate,
    recruiter: dict = Depends(get_current_recruiter),
    jobs: JobService = Depends(get_job_service),
    matcher: JobMatchingService = Depends(get_matching_service)
):
    """Update a job posting. Changing requirements re-tags suitable roles."""
    job = get_job_or_404(jobs, job_id)
    if job["recruiter_id"] != recruiter["id"]:
        raise HTTPException(status_code=403, detail="Not authorized")

    fields = update.model_dump(mode="json", exclude_none=True)
    if not fields:
        raise HTTPException(status_code=400, detail="No fields to update")

    if "requirements" in fields:
        fields["suitable_roles"] = matcher.tag_job(fields["requirements"])

    updated = jobs.update(job_id, fields)
    return JobResponse(**updated)


@router.get("/{job_id}/eligibility", response_model=EligibilityResponse)
async def check_job_eligibility(
    job_id: str,
    student: dict = Depends(get_current_student),
    jobs: JobService = Depends(get_job_service),
    matcher: JobMatchingService = Depends(get_matching_service)
):
    """Check whether the current student may apply, with every failing reason."""
    job = JobResponse(**get_job_or_404(jobs, job_id))
    result = matcher.check(student_profile(student), job)
    return EligibilityResponse(job_id=job_id, eligible=result.eligible, reasons=result.reasons)
