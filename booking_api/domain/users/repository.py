"""User repository - Database operations for users"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import User
from ...shared.validators import utcnow


class UserRepository:
    """Repository for user database operations"""

    @staticmethod
    def get_users(db: Session) -> list[User]:
        return db.query(User).order_by(User.created_at.asc()).all()

    @staticmethod
    def get_user_by_id(db: Session, user_id: str) -> Optional[User]:
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    def get_user_by_email(db: Session, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email).first()

    @staticmethod
    def get_user_by_auth_id(db: Session, auth_provider: str, auth_id: str) -> Optional[User]:
        """Get a user by external identity (e.g. Google subject id)"""
        return (
            db.query(User)
            .filter(User.auth_provider == auth_provider, User.auth_id == auth_id)
            .first()
        )

    @staticmethod
    def create_user(db: Session, **user_data) -> User:
        now = utcnow()
        user = User(created_at=now, updated_at=now, **user_data)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def update_user(db: Session, user: User, **updates) -> User:
        """Apply the given column values (None clears a column) and stamp updated_at"""
        for key, value in updates.items():
            setattr(user, key, value)
        user.updated_at = utcnow()
        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def delete_user(db: Session, user: User) -> None:
        db.delete(user)
        db.commit()
