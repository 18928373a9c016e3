"""Auth domain schemas"""

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import validate_email


class RegisterRequest(BaseModel):
    email: str
    password: str = Field(min_length=1)
    name: str = Field(min_length=1)
    phone: Optional[str] = None
    role: Optional[Literal["admin", "provider", "client"]] = None

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v):
        return validate_email(v)


class LoginRequest(BaseModel):
    email: str
    password: str


class GoogleLoginRequest(BaseModel):
    idToken: str = Field(min_length=1)


class AuthUser(BaseModel):
    """Minimal, non-sensitive user view returned with a token"""

    id: str
    email: str
    name: str
    role: str

    class Config:
        from_attributes = True


class TokenResponse(BaseModel):
    token: str
    user: AuthUser
