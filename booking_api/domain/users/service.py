"""User service - Business logic for user operations"""

import logging
from typing import Any

from sqlalchemy.orm import Session

from ...exceptions import ConflictError, NotFoundError, ValidationError
from ...models import User
from ...security_utils import hash_password
from .repository import UserRepository
from .schemas import UserCreate

logger = logging.getLogger(__name__)

# Request field name -> column
USER_COLUMNS = {
    "authProvider": "auth_provider",
    "authId": "auth_id",
    "email": "email",
    "name": "name",
    "phone": "phone",
    "role": "role",
    "avatarUrl": "avatar_url",
}

# Fields that may be sent as explicit null to clear them
NULLABLE_USER_FIELDS = {"authId", "phone", "avatarUrl"}


class UserService:
    """Service layer for user business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepository()

    def get_users(self) -> list[User]:
        return self.repo.get_users(self.db)

    def get_user(self, user_id: str) -> User:
        user = self.repo.get_user_by_id(self.db, user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def ensure_email_available(self, email: str, exclude_user_id: str | None = None) -> None:
        existing = self.repo.get_user_by_email(self.db, email)
        if existing and existing.id != exclude_user_id:
            raise ConflictError("Email already in use")

    def create_user(self, data: UserCreate) -> User:
        """Create a user on behalf of an admin"""
        self.ensure_email_available(data.email)

        user = self.repo.create_user(
            self.db,
            auth_provider=data.authProvider,
            auth_id=data.authId,
            email=data.email,
            password_hash=hash_password(data.password) if data.password else None,
            name=data.name,
            phone=data.phone,
            role=data.role,
            avatar_url=data.avatarUrl,
        )
        logger.info(f"🆕 User {user.id} created ({user.role}, {user.auth_provider})")
        return user

    def update_user(self, user_id: str, fields: dict[str, Any]) -> User:
        """
        Apply a partial update.

        ``fields`` holds only the fields the caller sent and is allowed to
        change (see ``access.filter_user_update``); explicit None clears
        nullable fields.
        """
        user = self.get_user(user_id)

        if not fields:
            raise ValidationError("No fields to update")

        updates = {}
        for name, value in fields.items():
            if value is None and name not in NULLABLE_USER_FIELDS:
                raise ValidationError(f"{name} cannot be null")
            if name == "password":
                updates["password_hash"] = hash_password(value)
            else:
                updates[USER_COLUMNS[name]] = value

        if "email" in updates and updates["email"] != user.email:
            self.ensure_email_available(updates["email"], exclude_user_id=user.id)

        auth_provider = updates.get("auth_provider", user.auth_provider)
        auth_id = updates["auth_id"] if "auth_id" in updates else user.auth_id
        if auth_provider == "google" and not auth_id:
            raise ValidationError("authId is required for google users")

        user = self.repo.update_user(self.db, user, **updates)
        logger.info(f"✏️ User {user.id} updated: {sorted(fields)}")
        return user

    def delete_user(self, user_id: str) -> None:
        """Hard delete; appointments referencing the user are left as they are"""
        user = self.get_user(user_id)
        self.repo.delete_user(self.db, user)
        logger.info(f"🗑️ User {user_id} deleted")
