"""Appointment router - any authenticated caller, no ownership restriction"""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from ...access import Action
from ...auth import require
from ...database import get_db
from ...shared.validators import validate_path_id
from .schemas import AppointmentCreate, AppointmentResponse, AppointmentUpdate
from .service import AppointmentService

router = APIRouter(
    prefix="/appointments",
    tags=["Appointments"],
    dependencies=[Depends(require(Action.ACCESS_APPOINTMENTS))],
)


def get_appointment_service(db: Session = Depends(get_db)) -> AppointmentService:
    """Dependency injection for AppointmentService"""
    return AppointmentService(db)


def valid_appointment_id(appointment_id: str) -> str:
    return validate_path_id(appointment_id)


@router.get("", response_model=list[AppointmentResponse])
def get_appointments(service: AppointmentService = Depends(get_appointment_service)):
    """List all appointments"""
    return [AppointmentResponse.model_validate(a) for a in service.get_appointments()]


@router.get("/{appointment_id}", response_model=AppointmentResponse)
def get_appointment(
    appointment_id: str = Depends(valid_appointment_id),
    service: AppointmentService = Depends(get_appointment_service),
):
    return AppointmentResponse.model_validate(service.get_appointment(appointment_id))


@router.post("", response_model=AppointmentResponse, status_code=201)
def create_appointment(
    data: AppointmentCreate,
    service: AppointmentService = Depends(get_appointment_service),
):
    """Book an appointment; endAt defaults to startAt + the service's duration"""
    return AppointmentResponse.model_validate(service.create_appointment(data))


@router.put("/{appointment_id}", response_model=AppointmentResponse)
def update_appointment(
    data: AppointmentUpdate,
    appointment_id: str = Depends(valid_appointment_id),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Partial update of an appointment"""
    return AppointmentResponse.model_validate(service.update_appointment(appointment_id, data))


@router.delete("/{appointment_id}", status_code=204)
def delete_appointment(
    appointment_id: str = Depends(valid_appointment_id),
    service: AppointmentService = Depends(get_appointment_service),
):
    service.delete_appointment(appointment_id)
    return Response(status_code=204)
