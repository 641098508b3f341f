# schemas/user_auth.py
from pydantic import BaseModel, EmailStr, Field, ConfigDict, field_validator
from typing import Optional
from uuid import UUID


# =====================================================================
# IDENTITY
# =====================================================================

class Identity(BaseModel):
    """Signed-in user as seen by the rest of the app."""
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: UUID
    email: EmailStr
    display_name: Optional[str] = None


# =====================================================================
# AUTH SCHEMAS
# =====================================================================

class LoginRequest(BaseModel):
    """User login request."""
    email: EmailStr
    password: str = Field(..., min_length=1)


class SignupRequest(BaseModel):
    """User sign-up request. Password strength is checked by the service."""
    email: EmailStr
    password: str
    display_name: str

    @field_validator('display_name')
    @classmethod
    def validate_display_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError('Please enter your name')
        return v.strip()


class TokenResponse(BaseModel):
    """Authentication token response."""
    access_token: str
    token_type: str = "bearer"
    user: Identity


# =====================================================================
# RESPONSE WRAPPERS
# =====================================================================

class SuccessResponse(BaseModel):
    """Generic success response."""
    success: bool = True
    message: Optional[str] = None
