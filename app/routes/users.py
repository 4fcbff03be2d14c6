"""
Citizen account endpoints - registration and profile.
"""

from fastapi import APIRouter, Depends, HTTPException, status
import logging

from app.core.exceptions import NotFoundError, StatusPermissionError
from app.models.base import BaseResponse
from app.models.user import AuthIdUpdate, CitizenRegister, UserProfileUpdate, UserResponse
from app.routes.dependencies import get_current_user_id, get_user_service
from app.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("/citizens", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register_citizen(request: CitizenRegister, service: UserService = Depends(get_user_service)):
    """
    Register a citizen after phone verification.

    The phone number becomes the user's document ID.
    """
    if service.check_user_exists(request.phone):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"User {request.phone} is already registered",
        )
    return service.register_citizen(
        phone=request.phone,
        first_name=request.first_name,
        last_name=request.last_name,
        gender=request.gender,
        uid=request.uid,
    )


@router.get("/{user_id}", response_model=UserResponse)
async def get_user_profile(user_id: str, service: UserService = Depends(get_user_service)):
    """Look up by phone/UID document ID, falling back to the uid field."""
    profile = service.get_user_profile(user_id)
    if profile is None:
        raise NotFoundError("users", user_id)
    return profile


@router.patch("/{user_id}", response_model=UserResponse)
async def update_user_profile(
    user_id: str,
    update: UserProfileUpdate,
    caller_id: str = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service),
):
    if caller_id != user_id:
        raise StatusPermissionError("You can only update your own profile")
    service.update_user_profile(user_id, update.to_document(exclude_unset=True))
    return service.get_user_profile(user_id)


@router.put("/{phone}/uid", response_model=BaseResponse)
async def update_auth_id(
    phone: str,
    request: AuthIdUpdate,
    caller_id: str = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service),
):
    """Record the Auth UID issued at the latest phone login. Callers identify by phone."""
    if caller_id != phone:
        raise StatusPermissionError("You can only update your own account")
    if not service.check_user_exists(phone):
        raise NotFoundError("users", phone)
    service.update_user_auth_id(phone, request.uid)
    return BaseResponse(message="Auth ID updated")
