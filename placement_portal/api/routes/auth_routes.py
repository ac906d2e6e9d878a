"""
Authentication Routes

POST /auth/register - Register student or recruiter, returns JWT
POST /auth/login - Login (email + password + role), returns JWT
GET /auth/me - Get current user info
"""

import logging

from fastapi import APIRouter, HTTPException, Depends

from placement_portal.core.auth import hash_password, verify_password, create_access_token, get_current_user
from placement_portal.services.mongo_service import UserService, get_user_service
from placement_portal.schemas.schemas import (
    RegisterRequest, LoginRequest, TokenResponse, UserResponse
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


def issue_token(user: dict) -> TokenResponse:
    token = create_access_token(data={"sub": user["id"], "role": user["role"]})
    return TokenResponse(token=token, user=UserResponse(**user))


@router.post("/register", response_model=TokenResponse, status_code=201)
async def register(request: RegisterRequest, users: UserService = Depends(get_user_service)):
    """
    Register a new user account and log in immediately.
    """
    if users.get_by_email(request.email):
        raise HTTPException(status_code=400, detail="User already exists")

    user = users.create(
        email=request.email,
        password_hash=hash_password(request.password),
        role=request.role.value,
        name=request.name
    )
    logger.info("Registered %s account %s", user["role"], user["id"])
    return issue_token(user)


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest, users: UserService = Depends(get_user_service)):
    """
    Login and receive JWT access token.

    Include token in requests: Authorization: Bearer <token>
    """
    user = users.get_by_email(request.email, role=request.role.value)

    if not user or not verify_password(request.password, user["password_hash"]):
        raise HTTPException(status_code=400, detail="Invalid credentials")

    return issue_token(user)


@router.get("/me", response_model=UserResponse)
async def get_me(user: dict = Depends(get_current_user)):
    """Get current authenticated user's info."""
    return UserResponse(**user)
