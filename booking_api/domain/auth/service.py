"""Credential service - registration, login and session tokens"""

import logging
from typing import Any, Optional

from sqlalchemy.orm import Session

from ...access import Action, Identity, is_allowed
from ...exceptions import ConflictError, ForbiddenError, UnauthorizedError
from ...models import User
from ...security_utils import hash_password, issue_session_token, verify_jwt_token, verify_password
from ...shared.validators import is_valid_object_id
from ..users.repository import UserRepository
from .schemas import RegisterRequest

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


class CredentialService:
    """Verifies credentials and issues/verifies session tokens"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepository()

    def register(self, data: RegisterRequest, requested_by: Optional[Identity] = None) -> User:
        """
        Register a credentials user.

        The role defaults to client; any other role needs an admin caller.
        """
        role = data.role or "client"
        if role != "client" and not is_allowed(requested_by, Action.ASSIGN_ROLE):
            logger.warning(f"🚫 Registration with role '{role}' refused for {data.email}")
            raise ForbiddenError("Only admins can create non-client accounts")

        if self.repo.get_user_by_email(self.db, data.email):
            raise ConflictError("Email already in use")

        user = self.repo.create_user(
            self.db,
            auth_provider="credentials",
            email=data.email,
            password_hash=hash_password(data.password),
            name=data.name,
            phone=data.phone,
            role=role,
        )
        logger.info(f"🆕 Registered user {user.id} ({user.role})")
        return user

    def login(self, email: str, password: str) -> User:
        """
        Check email/password credentials.

        Unknown email, a user without a password and a wrong password all fail
        with the same error.
        """
        user = self.repo.get_user_by_email(self.db, email.strip().lower())
        if not user or user.auth_provider != "credentials" or not user.password_hash:
            raise UnauthorizedError(INVALID_CREDENTIALS)
        if not verify_password(password, user.password_hash):
            raise UnauthorizedError(INVALID_CREDENTIALS)
        logger.info(f"🔐 User {user.id} logged in")
        return user

    def login_with_google(self, claims: dict[str, Any]) -> User:
        """
        Find or create the user behind verified Google ID token claims.

        New users always get the client role.
        """
        auth_id = claims["sub"]
        user = self.repo.get_user_by_auth_id(self.db, "google", auth_id)
        if user:
            return user

        email = (claims.get("email") or "").strip().lower()
        if not email:
            raise UnauthorizedError("Invalid Google id token")
        if self.repo.get_user_by_email(self.db, email):
            logger.warning(f"❌ Google sign-in for {email} collides with an existing account")
            raise ConflictError("Email already in use")

        user = self.repo.create_user(
            self.db,
            auth_provider="google",
            auth_id=auth_id,
            email=email,
            name=claims.get("name") or claims.get("given_name") or "Google User",
            avatar_url=claims.get("picture"),
            role="client",
        )
        logger.info(f"🆕 Created user {user.id} from Google sign-in")
        return user

    @staticmethod
    def issue_token(user: User) -> str:
        return issue_session_token(user.id, user.role)

    def verify_token(self, token: str) -> Identity:
        """
        Verify signature and expiry, then confirm the user still exists.

        The role comes from the stored user, so role changes apply to
        already issued tokens.
        """
        payload = verify_jwt_token(token)
        if not payload:
            raise UnauthorizedError("Invalid or expired authentication token")

        user_id = payload.get("id")
        user = self.repo.get_user_by_id(self.db, user_id) if is_valid_object_id(user_id) else None
        if not user:
            logger.warning(f"Token presented for unknown user {user_id}")
            raise UnauthorizedError("Invalid authentication token")

        return Identity(user_id=user.id, role=user.role)
