"""Provider service - Business logic for provider operations"""

import logging
from typing import Any

from sqlalchemy.orm import Session

from ...exceptions import ConflictError, NotFoundError, ValidationError
from ...models import Provider
from ...shared.patch import to_column_updates
from .repository import ProviderRepository
from .schemas import ProviderCreate

logger = logging.getLogger(__name__)

PROVIDER_COLUMNS = {
    "name": "name",
    "email": "email",
    "phone": "phone",
    "specialties": "specialties",
    "availability": "availability",
    "isActive": "is_active",
}
NULLABLE_PROVIDER_FIELDS = frozenset({"phone", "availability"})


class ProviderService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = ProviderRepository()

    def get_providers(self) -> list[Provider]:
        return self.repo.get_providers(self.db)

    def get_provider(self, provider_id: str) -> Provider:
        provider = self.repo.get_provider_by_id(self.db, provider_id)
        if not provider:
            raise NotFoundError("Provider not found")
        return provider

    def create_provider(self, data: ProviderCreate) -> Provider:
        if self.repo.get_provider_by_email(self.db, data.email):
            raise ConflictError("Email already in use")

        provider = self.repo.create_provider(
            self.db,
            name=data.name,
            email=data.email,
            phone=data.phone,
            specialties=list(data.specialties),
            availability=data.availability,
            is_active=data.isActive,
        )
        logger.info(f"🆕 Provider {provider.id} created")
        return provider

    def update_provider(self, provider_id: str, fields: dict[str, Any]) -> Provider:
        provider = self.get_provider(provider_id)
        if not fields:
            raise ValidationError("No fields to update")

        updates = to_column_updates(fields, PROVIDER_COLUMNS, NULLABLE_PROVIDER_FIELDS)
        if "email" in updates and updates["email"] != provider.email:
            existing = self.repo.get_provider_by_email(self.db, updates["email"])
            if existing:
                raise ConflictError("Email already in use")

        return self.repo.update_provider(self.db, provider, **updates)

    def delete_provider(self, provider_id: str) -> None:
        """Hard delete; appointments referencing the provider are left as they are"""
        provider = self.get_provider(provider_id)
        self.repo.delete_provider(self.db, provider)
        logger.info(f"🗑️ Provider {provider_id} deleted")
