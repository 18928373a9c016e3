"""Appointment domain schemas

Request fields are deliberately loose (ids and timestamps as strings): the
lifecycle service validates them so every failure carries a field-specific
message.
"""

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, Field

Timestamp = Union[datetime, str]


class AppointmentCreate(BaseModel):
    clientId: Optional[str] = None
    providerId: Optional[str] = None
    serviceId: Optional[str] = None
    startAt: Optional[Timestamp] = None
    endAt: Optional[Timestamp] = None
    status: Optional[str] = None
    notes: Optional[str] = None
    createdBy: Optional[str] = None


class AppointmentUpdate(BaseModel):
    """Partial update; see shared.patch for absent vs explicit null"""

    clientId: Optional[str] = None
    providerId: Optional[str] = None
    serviceId: Optional[str] = None
    startAt: Optional[Timestamp] = None
    endAt: Optional[Timestamp] = None
    status: Optional[str] = None
    notes: Optional[str] = None
    createdBy: Optional[str] = None


class AppointmentResponse(BaseModel):
    id: str
    clientId: str = Field(validation_alias="client_id")
    providerId: str = Field(validation_alias="provider_id")
    serviceId: str = Field(validation_alias="service_id")
    startAt: datetime = Field(validation_alias="start_at")
    endAt: datetime = Field(validation_alias="end_at")
    status: str
    notes: Optional[str] = None
    createdBy: Optional[str] = Field(default=None, validation_alias="created_by")
    createdAt: datetime = Field(validation_alias="created_at")
    updatedAt: datetime = Field(validation_alias="updated_at")

    class Config:
        from_attributes = True
