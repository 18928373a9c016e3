import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from .access import Action, Identity, authorize
from .database import get_db
from .domain.auth.service import CredentialService
from .exceptions import UnauthorizedError

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> Identity:
    """Resolve the Bearer token into the caller's identity"""
    if not credentials or not credentials.credentials:
        raise UnauthorizedError("Authentication required")
    return CredentialService(db).verify_token(credentials.credentials)


def get_optional_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> Optional[Identity]:
    """Like get_current_identity, but anonymous callers get None instead of a 401"""
    if not credentials or not credentials.credentials:
        return None
    return CredentialService(db).verify_token(credentials.credentials)


def require(action: Action):
    """
    Dependency factory for actions that do not depend on a target record.

    Example:
        @router.post("", dependencies=[Depends(require(Action.WRITE_CATALOG))])
    """

    def dependency(identity: Identity = Depends(get_current_identity)) -> Identity:
        authorize(identity, action)
        return identity

    return dependency
