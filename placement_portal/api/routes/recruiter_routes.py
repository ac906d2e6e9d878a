"""
Recruiter Routes

GET /recruiters/profile - Get own profile
PUT /recruiters/profile - Set company name
"""

from fastapi import APIRouter, Depends

from placement_portal.core.auth import get_current_recruiter
from placement_portal.services.mongo_service import UserService, get_user_service
from placement_portal.schemas.schemas import RecruiterProfileUpdate, UserResponse

router = APIRouter(prefix="/recruiters", tags=["Recruiters"])


@router.get("/profile", response_model=UserResponse)
async def get_profile(recruiter: dict = Depends(get_current_recruiter)):
    return UserResponse(**recruiter)


@router.put("/profile", response_model=UserResponse)
async def update_profile(
    data: RecruiterProfileUpdate,
    recruiter: dict = Depends(get_current_recruiter),
    users: UserService = Depends(get_user_service)
):
    """Update the company the recruiter posts for."""
    user = users.update_profile(recruiter["id"], {"company": data.company.strip()})
    return UserResponse(**user)
