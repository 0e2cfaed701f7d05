# Pydantic schemas (request/response)
from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from user_portal.core.security import MAX_PASSWORD_BYTES
from user_portal.models.user import UserRole


def _check_password_length(value: Optional[str]) -> Optional[str]:
    if value is not None and len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password cannot be longer than {MAX_PASSWORD_BYTES} bytes")
    return value


class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)
    role: UserRole
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, value: str) -> str:
        return _check_password_length(value)


class UserUpdate(BaseModel):
    """Partial update. Only the fields sent by the client are applied."""

    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=1)
    role: Optional[UserRole] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, value: Optional[str]) -> Optional[str]:
        return _check_password_length(value)


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    role: UserRole
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class LoginRequest(BaseModel):
    # Optional so a missing field is answered with 400 by the login handler
    email: Optional[str] = None
    password: Optional[str] = None


class MessageResponse(BaseModel):
    message: str


class SessionStatus(BaseModel):
    authenticated: bool
    user_id: Optional[UUID] = None
    email: Optional[str] = None
    role: Optional[UserRole] = None


class RoleGroup(str, Enum):
    """Path segment of the role listing endpoints."""

    MANAGERS = "managers"
    SUPERVISORS = "supervisors"
    HR = "hr"
    SECRETARIES = "secretaries"
    EMPLOYEES = "employees"

    @property
    def role(self) -> UserRole:
        return ROLE_GROUPS[self]


ROLE_GROUPS = {
    RoleGroup.MANAGERS: UserRole.MANAGER,
    RoleGroup.SUPERVISORS: UserRole.SUPERVISOR,
    RoleGroup.HR: UserRole.HR,
    RoleGroup.SECRETARIES: UserRole.SECRETARY,
    RoleGroup.EMPLOYEES: UserRole.EMPLOYEE,
}
