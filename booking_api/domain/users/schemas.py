"""User domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ...shared.validators import validate_email

Role = Literal["admin", "provider", "client"]
AuthProvider = Literal["google", "credentials"]


class UserCreate(BaseModel):
    """Schema for an admin creating a user"""

    authProvider: AuthProvider
    authId: Optional[str] = None
    email: str
    password: Optional[str] = Field(default=None, min_length=1)
    name: str = Field(min_length=1)
    phone: Optional[str] = None
    role: Role = "client"
    avatarUrl: Optional[str] = None

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v):
        return validate_email(v)

    @model_validator(mode="after")
    def check_external_id(self):
        if self.authProvider == "google" and not self.authId:
            raise ValueError("authId is required for google users")
        return self


class UserUpdate(BaseModel):
    """Schema for a partial user update; absent fields are left untouched"""

    authProvider: Optional[AuthProvider] = None
    authId: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = Field(default=None, min_length=1)
    name: Optional[str] = Field(default=None, min_length=1)
    phone: Optional[str] = None
    role: Optional[Role] = None
    avatarUrl: Optional[str] = None

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v):
        return validate_email(v)


class UserResponse(BaseModel):
    """Public view of a user (never includes the password hash)"""

    id: str
    authProvider: str = Field(validation_alias="auth_provider")
    authId: Optional[str] = Field(default=None, validation_alias="auth_id")
    email: str
    name: str
    phone: Optional[str] = None
    role: str
    avatarUrl: Optional[str] = Field(default=None, validation_alias="avatar_url")
    createdAt: datetime = Field(validation_alias="created_at")
    updatedAt: datetime = Field(validation_alias="updated_at")

    class Config:
        from_attributes = True
