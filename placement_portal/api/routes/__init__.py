"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from placement_portal.api.routes.auth_routes import router as auth_router
from placement_portal.api.routes.student_routes import router as student_router
from placement_portal.api.routes.resume_routes import router as resume_router
from placement_portal.api.routes.recruiter_routes import router as recruiter_router
from placement_portal.api.routes.job_routes import router as job_router
from placement_portal.api.routes.application_routes import router as application_router
from placement_portal.api.routes.statistics_routes import router as statistics_router
from placement_portal.api.routes.skill_routes import router as skill_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(student_router)
api_router.include_router(resume_router)
api_router.include_router(recruiter_router)
api_router.include_router(job_router)
api_router.include_router(application_router)
api_router.include_router(statistics_router)
api_router.include_router(skill_router)
