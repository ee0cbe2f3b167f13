"""User DTOs for API layer"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel
from typing import Optional
from datetime import datetime
from uuid import UUID

from ...domain.enums import UserRole


class RequestDto(BaseModel):
    """Request bodies accept both camelCase and snake_case field names"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DeviceFieldsMixin(RequestDto):
    """Optional device description sent with login and verification"""
    device_type: Optional[str] = None
    platform: Optional[str] = None
    app_version: Optional[str] = None
    os_version: Optional[str] = None
    device_model: Optional[str] = None

    def device_fields(self) -> dict:
        return {
            "device_type": self.device_type,
            "platform": self.platform,
            "app_version": self.app_version,
            "os_version": self.os_version,
            "device_model": self.device_model,
        }


class CreateUserDto(RequestDto):
    """DTO for user registration"""
    name: str = Field(..., min_length=1)
    email: EmailStr
    phone: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    role: Optional[UserRole] = None
    company: Optional[str] = None
    department: Optional[str] = None


class LoginUserDto(DeviceFieldsMixin):
    """DTO for user login"""
    email: EmailStr
    password: str


class VerifyOtpDto(DeviceFieldsMixin):
    """DTO for email verification with a one-time code"""
    user_id: UUID
    otp: str = Field(..., min_length=1)


class ResendVerificationDto(RequestDto):
    email: EmailStr


class ForgotPasswordDto(RequestDto):
    """DTO for forgot password request"""
    email: EmailStr


class ResetPasswordDto(RequestDto):
    """DTO for reset password request"""
    email: EmailStr
    code: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=1)


class UpdateProfileDto(RequestDto):
    name: Optional[str] = None
    phone: Optional[str] = None


class MessageResponse(BaseModel):
    """Generic acknowledgement"""
    message: str
    success: bool = True


class UserDto(BaseModel):
    """DTO for user response"""
    id: UUID
    email: str
    name: str
    phone: str
    role: str
    company: Optional[str] = None
    department: Optional[str] = None
    is_email_verified: bool
    created_at: datetime
    last_login: Optional[datetime] = None


class UserStatsDto(BaseModel):
    total_calls: int = 0
    avg_spin_score: int = 0
    total_appointments: int = 0


class UserProfileDto(UserDto):
    joined_date: str
    stats: UserStatsDto


class RegistrationResponse(BaseModel):
    """Registration outcome; ``warning`` is set when the verification email could not be sent"""
    success: bool = True
    message: str
    user_id: UUID
    email: str
    name: str
    role: str
    requires_otp: bool = True
    verification_email_sent: bool = True
    warning: Optional[str] = None


class AuthResponse(BaseModel):
    """Login / verification response carrying the bearer token"""
    success: bool = True
    message: str
    token: str
    token_type: str = "bearer"
    session_id: UUID
    expires_at: datetime
    user: UserDto


def user_to_dto(user) -> UserDto:
    """Map a ``User`` entity to its public representation"""
    return UserDto(
        id=user.id.value,
        email=user.email.value,
        name=user.name,
        phone=user.phone,
        role=user.role.value,
        company=user.company,
        department=user.department,
        is_email_verified=user.is_email_verified,
        created_at=user.created_at,
        last_login=user.last_login,
    )
