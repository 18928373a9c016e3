"""Service catalog repository - Database operations for services"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Service
from ...shared.validators import utcnow


class ServiceRepository:
    @staticmethod
    def get_services(db: Session) -> list[Service]:
        return db.query(Service).order_by(Service.created_at.asc()).all()

    @staticmethod
    def get_service_by_id(db: Session, service_id: str) -> Optional[Service]:
        return db.query(Service).filter(Service.id == service_id).first()

    @staticmethod
    def create_service(db: Session, **service_data) -> Service:
        now = utcnow()
        service = Service(created_at=now, updated_at=now, **service_data)
        db.add(service)
        db.commit()
        db.refresh(service)
        return service

    @staticmethod
    def update_service(db: Session, service: Service, **updates) -> Service:
        for key, value in updates.items():
            setattr(service, key, value)
        service.updated_at = utcnow()
        db.commit()
        db.refresh(service)
        return service

    @staticmethod
    def delete_service(db: Session, service: Service) -> None:
        db.delete(service)
        db.commit()
