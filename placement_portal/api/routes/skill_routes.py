"""
Skill Routes - direct access to the analyzer and role tagger.

POST /skills/analyze - Analyze pasted resume text (nothing is stored)
POST /skills/job-roles - Preview suitable roles for a requirement list
GET /skills/taxonomy - Canonical skills, synonyms and role table
"""

from typing import List

from fastapi import APIRouter, Depends

from placement_portal.core.auth import get_current_user
from placement_portal.models.analysis import ResumeAnalysis
from placement_portal.services.matching_service import JobMatchingService, get_matching_service
from placement_portal.schemas.schemas import AnalyzeTextRequest, RoleTagRequest

router = APIRouter(prefix="/skills", tags=["Skills"])


@router.post("/analyze", response_model=ResumeAnalysis)
async def analyze_text(
    request: AnalyzeTextRequest,
    user: dict = Depends(get_current_user),
    matcher: JobMatchingService = Depends(get_matching_service)
):
    return matcher.analyze_resume(request.text)


@router.post("/job-roles", response_model=List[str])
async def preview_job_roles(
    request: RoleTagRequest,
    user: dict = Depends(get_current_user),
    matcher: JobMatchingService = Depends(get_matching_service)
):
    return matcher.tag_job(request.requirements)


@router.get("/taxonomy")
async def taxonomy(matcher: JobMatchingService = Depends(get_matching_service)):
    config = matcher.config
    return {
        "skills": {s.name: list(s.synonyms) for s in config.skills},
        "roles": {r.name: {"skills": list(r.skills), "keywords": list(r.keywords)} for r in config.roles},
        "default_role": config.default_role
    }
