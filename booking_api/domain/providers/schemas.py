"""Provider domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import validate_email


class ProviderCreate(BaseModel):
    """Schema for creating a new provider"""

    name: str = Field(min_length=1)
    email: str
    phone: Optional[str] = None
    specialties: list[str] = Field(default_factory=list)
    availability: Optional[Any] = None
    isActive: bool = True

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v):
        return validate_email(v)


class ProviderUpdate(BaseModel):
    """Schema for updating an existing provider"""

    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[str] = None
    phone: Optional[str] = None
    specialties: Optional[list[str]] = None
    availability: Optional[Any] = None
    isActive: Optional[bool] = None

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v):
        return validate_email(v)


class ProviderResponse(BaseModel):
    id: str
    name: str
    email: str
    phone: Optional[str] = None
    specialties: list[str]
    availability: Optional[Any] = None
    isActive: bool = Field(validation_alias="is_active")
    createdAt: datetime = Field(validation_alias="created_at")
    updatedAt: datetime = Field(validation_alias="updated_at")

    class Config:
        from_attributes = True
