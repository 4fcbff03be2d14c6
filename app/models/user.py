"""
User models for citizens, department users and admins.
"""

from pydantic import ConfigDict, Field
from typing import Optional
from enum import Enum

from app.models.base import CamelModel


class UserRole(str, Enum):
    CITIZEN = "citizen"
    DEPARTMENT_USER = "departmentUser"
    ADMIN = "admin"


class CitizenRegister(CamelModel):
    """Registration after phone OTP login. The phone number is the document ID."""
    phone: str = Field(..., min_length=10, max_length=15, description="Phone number (with country code)")
    first_name: Optional[str] = Field(None, max_length=50)
    last_name: Optional[str] = Field(None, max_length=50)
    gender: Optional[str] = None
    uid: Optional[str] = Field(None, description="Firebase Auth UID, if already known")


class UserProfileUpdate(CamelModel):
    name: Optional[str] = None
    phone: Optional[str] = None


class UserResponse(CamelModel):
    """User document. Citizens and staff carry different profile fields."""

    model_config = ConfigDict(extra="allow")

    id: str
    uid: Optional[str] = None
    role: UserRole = UserRole.CITIZEN
    name: Optional[str] = None
    full_name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    department_id: Optional[str] = None
    status: Optional[str] = None
    is_active: Optional[bool] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class DepartmentUserCreate(CamelModel):
    full_name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=254)
    phone: Optional[str] = None
    department_id: str = Field(..., min_length=1)


class DepartmentUserUpdate(CamelModel):
    """Email is not editable: it is the sign-in identity."""
    full_name: Optional[str] = None
    phone: Optional[str] = None
    department_id: Optional[str] = None
    status: Optional[str] = None


class DepartmentUserCreated(CamelModel):
    uid: str
    temp_password: str


class ToggleActiveRequest(CamelModel):
    is_active: bool


class PasswordResetRequest(CamelModel):
    email: str = Field(..., min_length=3)


class UserStatusRequest(CamelModel):
    status: str = Field(..., min_length=1, description="online | offline | busy")


class AuthIdUpdate(CamelModel):
    uid: str = Field(..., min_length=1)
