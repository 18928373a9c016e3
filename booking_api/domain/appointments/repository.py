"""Appointment repository - Database operations for appointments"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Appointment
from ...shared.validators import utcnow


class AppointmentRepository:
    """Repository for appointment database operations"""

    @staticmethod
    def get_appointments(db: Session) -> list[Appointment]:
        """All appointments, unfiltered"""
        return db.query(Appointment).order_by(Appointment.start_at.asc()).all()

    @staticmethod
    def get_appointment_by_id(db: Session, appointment_id: str) -> Optional[Appointment]:
        return db.query(Appointment).filter(Appointment.id == appointment_id).first()

    @staticmethod
    def create_appointment(db: Session, **appointment_data) -> Appointment:
        now = utcnow()
        appointment = Appointment(created_at=now, updated_at=now, **appointment_data)
        db.add(appointment)
        db.commit()
        db.refresh(appointment)
        return appointment

    @staticmethod
    def update_appointment(db: Session, appointment: Appointment, **updates) -> Appointment:
        """Merge the given column values and stamp updated_at"""
        for key, value in updates.items():
            setattr(appointment, key, value)
        appointment.updated_at = utcnow()
        db.commit()
        db.refresh(appointment)
        return appointment

    @staticmethod
    def delete_appointment(db: Session, appointment: Appointment) -> None:
        db.delete(appointment)
        db.commit()
