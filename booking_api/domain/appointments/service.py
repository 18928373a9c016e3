"""
Appointment service - lifecycle rules for appointments.

* ``endAt`` is either supplied or derived as ``startAt + service.durationMin``.
  Creation fails when neither is possible; an update only re-derives it when
  ``startAt`` or ``serviceId`` changes and quietly keeps the old value when
  the service has no duration.
* ``status`` is one of scheduled/confirmed/completed/cancelled. Any value
  may follow any other; there is no transition graph.
* Updates are read-then-write without locking: concurrent updates of the
  same appointment are last-write-wins.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from ...exceptions import NotFoundError, ValidationError
from ...models import APPOINTMENT_STATUSES, Appointment
from ...shared.patch import ABSENT, field_state
from ...shared.validators import parse_instant, validate_object_id
from ..service_catalog.repository import ServiceRepository
from .repository import AppointmentRepository
from .schemas import AppointmentCreate, AppointmentUpdate

logger = logging.getLogger(__name__)

DEFAULT_STATUS = "scheduled"

# Required references: request field -> column
REFERENCE_COLUMNS = {
    "clientId": "client_id",
    "providerId": "provider_id",
    "serviceId": "service_id",
}


def validate_status(status: Optional[str]) -> str:
    if status not in APPOINTMENT_STATUSES:
        raise ValidationError(f"status must be one of: {', '.join(APPOINTMENT_STATUSES)}")
    return status


def compute_end_at(start_at: datetime, duration_min: int) -> datetime:
    try:
        return start_at + timedelta(minutes=int(duration_min))
    except OverflowError as e:
        raise ValidationError("endAt is out of range") from e


class AppointmentService:
    """Service layer for the appointment lifecycle"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = AppointmentRepository()
        self.catalog = ServiceRepository()

    def _service_duration(self, service_id: str) -> Optional[int]:
        service = self.catalog.get_service_by_id(self.db, service_id)
        if service and service.duration_min:
            return service.duration_min
        return None

    def get_appointments(self) -> list[Appointment]:
        return self.repo.get_appointments(self.db)

    def get_appointment(self, appointment_id: str) -> Appointment:
        appointment = self.repo.get_appointment_by_id(self.db, appointment_id)
        if not appointment:
            raise NotFoundError("Appointment not found")
        return appointment

    def create_appointment(self, data: AppointmentCreate) -> Appointment:
        """
        Validate, derive a missing ``endAt`` and store a new appointment.

        Raises:
            ValidationError: Bad ids/dates/status, or no ``endAt`` and no
                service duration to derive it from
        """
        client_id = validate_object_id(data.clientId, "clientId", required=True)
        provider_id = validate_object_id(data.providerId, "providerId", required=True)
        service_id = validate_object_id(data.serviceId, "serviceId", required=True)
        start_at = parse_instant(data.startAt, "startAt", required=True)
        end_at = parse_instant(data.endAt, "endAt")
        status = validate_status(data.status if data.status is not None else DEFAULT_STATUS)
        created_by = validate_object_id(data.createdBy, "createdBy")

        if end_at is None:
            duration = self._service_duration(service_id)
            if not duration:
                raise ValidationError("endAt is required when service has no durationMin")
            end_at = compute_end_at(start_at, duration)

        appointment = self.repo.create_appointment(
            self.db,
            client_id=client_id,
            provider_id=provider_id,
            service_id=service_id,
            start_at=start_at,
            end_at=end_at,
            status=status,
            notes=data.notes or None,
            created_by=created_by,
        )
        logger.info(
            f"📅 Appointment {appointment.id} created: client={client_id} provider={provider_id} "
            f"{start_at.isoformat()} -> {end_at.isoformat()}"
        )
        return appointment

    def update_appointment(self, appointment_id: str, data: AppointmentUpdate) -> Appointment:
        """
        Apply a partial update.

        Absent fields are untouched. Explicit null clears ``notes`` and
        ``createdBy``; it is rejected for every other field.

        Raises:
            NotFoundError: No appointment with this id
            ValidationError: Bad field value, or nothing to update
        """
        appointment = self.get_appointment(appointment_id)
        updates = {}

        for field, column in REFERENCE_COLUMNS.items():
            value = field_state(data, field)
            if value is not ABSENT:
                updates[column] = validate_object_id(value, field, required=True)

        start_at = field_state(data, "startAt")
        if start_at is not ABSENT:
            updates["start_at"] = parse_instant(start_at, "startAt", required=True)

        end_at = field_state(data, "endAt")
        if end_at is not ABSENT:
            updates["end_at"] = parse_instant(end_at, "endAt", required=True)

        status = field_state(data, "status")
        if status is not ABSENT:
            updates["status"] = validate_status(status)

        notes = field_state(data, "notes")
        if notes is not ABSENT:
            updates["notes"] = notes

        created_by = field_state(data, "createdBy")
        if created_by is not ABSENT:
            updates["created_by"] = validate_object_id(created_by, "createdBy")

        if not updates:
            raise ValidationError("No fields to update")

        start_changed = updates.get("start_at", appointment.start_at) != appointment.start_at
        service_changed = updates.get("service_id", appointment.service_id) != appointment.service_id
        if "end_at" not in updates and (start_changed or service_changed):
            next_start_at = updates.get("start_at", appointment.start_at)
            next_service_id = updates.get("service_id", appointment.service_id)
            duration = self._service_duration(next_service_id)
            if duration:
                updates["end_at"] = compute_end_at(next_start_at, duration)
            else:
                logger.info(
                    f"Service {next_service_id} has no duration; keeping endAt of appointment {appointment_id}"
                )

        appointment = self.repo.update_appointment(self.db, appointment, **updates)
        logger.info(f"✏️ Appointment {appointment_id} updated: {sorted(updates)}")
        return appointment

    def delete_appointment(self, appointment_id: str) -> None:
        """Hard delete"""
        appointment = self.get_appointment(appointment_id)
        self.repo.delete_appointment(self.db, appointment)
        logger.info(f"🗑️ Appointment {appointment_id} deleted")
