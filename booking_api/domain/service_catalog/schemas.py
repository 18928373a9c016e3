"""Service catalog schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ServiceCreate(BaseModel):
    """Schema for creating a new bookable service"""

    name: str = Field(min_length=1)
    durationMin: int = Field(ge=1)
    price: float = Field(ge=0)
    description: Optional[str] = None
    category: Optional[str] = None
    isActive: bool = True


class ServiceUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    durationMin: Optional[int] = Field(default=None, ge=1)
    price: Optional[float] = Field(default=None, ge=0)
    description: Optional[str] = None
    category: Optional[str] = None
    isActive: Optional[bool] = None


class ServiceResponse(BaseModel):
    id: str
    name: str
    durationMin: int = Field(validation_alias="duration_min")
    price: float
    description: Optional[str] = None
    category: Optional[str] = None
    isActive: bool = Field(validation_alias="is_active")
    createdAt: datetime = Field(validation_alias="created_at")
    updatedAt: datetime = Field(validation_alias="updated_at")

    class Config:
        from_attributes = True
