"""Service catalog service - Business logic for bookable services"""

import logging
from typing import Any

from sqlalchemy.orm import Session

from ...exceptions import NotFoundError, ValidationError
from ...models import Service
from ...shared.patch import to_column_updates
from .repository import ServiceRepository
from .schemas import ServiceCreate

logger = logging.getLogger(__name__)

SERVICE_COLUMNS = {
    "name": "name",
    "durationMin": "duration_min",
    "price": "price",
    "description": "description",
    "category": "category",
    "isActive": "is_active",
}
NULLABLE_SERVICE_FIELDS = frozenset({"description", "category"})


class CatalogService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = ServiceRepository()

    def get_services(self) -> list[Service]:
        return self.repo.get_services(self.db)

    def get_service(self, service_id: str) -> Service:
        service = self.repo.get_service_by_id(self.db, service_id)
        if not service:
            raise NotFoundError("Service not found")
        return service

    def create_service(self, data: ServiceCreate) -> Service:
        service = self.repo.create_service(
            self.db,
            name=data.name,
            duration_min=data.durationMin,
            price=data.price,
            description=data.description,
            category=data.category,
            is_active=data.isActive,
        )
        logger.info(f"🆕 Service {service.id} created ({service.duration_min} min)")
        return service

    def update_service(self, service_id: str, fields: dict[str, Any]) -> Service:
        service = self.get_service(service_id)
        if not fields:
            raise ValidationError("No fields to update")
        updates = to_column_updates(fields, SERVICE_COLUMNS, NULLABLE_SERVICE_FIELDS)
        return self.repo.update_service(self.db, service, **updates)

    def delete_service(self, service_id: str) -> None:
        """Hard delete; appointments referencing the service are left as they are"""
        service = self.get_service(service_id)
        self.repo.delete_service(self.db, service)
        logger.info(f"🗑️ Service {service_id} deleted")
