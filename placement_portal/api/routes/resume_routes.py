"""
Resume Routes

GET /resumes/{resume_id}/file - Download the uploaded resume file

Allowed viewers:
- the student who uploaded it
- a recruiter who received an application made with it
"""

import os

from fastapi import APIRouter, HTTPException, Depends
from fastapi.responses import FileResponse

from placement_portal.core.auth import get_current_user
from placement_portal.services.mongo_service import (
    JobService, ResumeService, ApplicationService,
    get_job_service, get_resume_service, get_application_service
)

router = APIRouter(prefix="/resumes", tags=["Resumes"])


def can_view_resume(user: dict, resume: dict, jobs: JobService, applications: ApplicationService) -> bool:
    if user["role"] == "student":
        return resume["student_id"] == user["id"]

    for application in applications.list_for_resume(resume["id"]):
        job = jobs.get_by_id(application["job_id"])
        if job and job["recruiter_id"] == user["id"]:
            return True
    return False


@router.get("/{resume_id}/file")
async def download_resume(
    resume_id: str,
    user: dict = Depends(get_current_user),
    resumes: ResumeService = Depends(get_resume_service),
    jobs: JobService = Depends(get_job_service),
    applications: ApplicationService = Depends(get_application_service)
):
    """Return the stored resume file."""
    resume = resumes.get_by_id(resume_id)
    if not resume:
        raise HTTPException(status_code=404, detail="Resume not found")

    if not can_view_resume(user, resume, jobs, applications):
        raise HTTPException(status_code=403, detail="Not authorized")

    path = resume.get("file_path")
    if not path or not os.path.isfile(path):
        raise HTTPException(status_code=404, detail="Resume file not found")

    return FileResponse(path, filename=resume.get("filename") or os.path.basename(path))
