"""Provider repository - Database operations for providers"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Provider
from ...shared.validators import utcnow


class ProviderRepository:
    @staticmethod
    def get_providers(db: Session) -> list[Provider]:
        return db.query(Provider).order_by(Provider.created_at.asc()).all()

    @staticmethod
    def get_provider_by_id(db: Session, provider_id: str) -> Optional[Provider]:
        return db.query(Provider).filter(Provider.id == provider_id).first()

    @staticmethod
    def get_provider_by_email(db: Session, email: str) -> Optional[Provider]:
        return db.query(Provider).filter(Provider.email == email).first()

    @staticmethod
    def create_provider(db: Session, **provider_data) -> Provider:
        now = utcnow()
        provider = Provider(created_at=now, updated_at=now, **provider_data)
        db.add(provider)
        db.commit()
        db.refresh(provider)
        return provider

    @staticmethod
    def update_provider(db: Session, provider: Provider, **updates) -> Provider:
        for key, value in updates.items():
            setattr(provider, key, value)
        provider.updated_at = utcnow()
        db.commit()
        db.refresh(provider)
        return provider

    @staticmethod
    def delete_provider(db: Session, provider: Provider) -> None:
        db.delete(provider)
        db.commit()
