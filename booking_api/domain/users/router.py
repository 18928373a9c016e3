"""User router - FastAPI endpoints for user operations"""

import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from ...access import Action, Identity, authorize, filter_user_update
from ...auth import get_current_identity, require
from ...database import get_db
from ...shared.patch import sent_fields
from ...shared.validators import validate_path_id
from .schemas import UserCreate, UserResponse, UserUpdate
from .service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    """Dependency injection for UserService"""
    return UserService(db)


def valid_user_id(user_id: str) -> str:
    return validate_path_id(user_id)


@router.get("", response_model=list[UserResponse], dependencies=[Depends(require(Action.LIST_USERS))])
def get_users(service: UserService = Depends(get_user_service)):
    """List all users (admin only)"""
    return [UserResponse.model_validate(u) for u in service.get_users()]


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: str = Depends(valid_user_id),
    identity: Identity = Depends(get_current_identity),
    service: UserService = Depends(get_user_service),
):
    """Get a user (admin or the user themself)"""
    authorize(identity, Action.READ_USER, user_id)
    return UserResponse.model_validate(service.get_user(user_id))


@router.post(
    "",
    response_model=UserResponse,
    status_code=201,
    dependencies=[Depends(require(Action.CREATE_USER))],
)
def create_user(data: UserCreate, service: UserService = Depends(get_user_service)):
    """Create a user (admin only)"""
    return UserResponse.model_validate(service.create_user(data))


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    data: UserUpdate,
    user_id: str = Depends(valid_user_id),
    identity: Identity = Depends(get_current_identity),
    service: UserService = Depends(get_user_service),
):
    """
    Partially update a user.

    Non-admins may only update themselves; role, authProvider and authId
    sent by a non-admin are ignored. A body made only of ignored fields
    returns the user unchanged.
    """
    authorize(identity, Action.UPDATE_USER, user_id)
    sent = sent_fields(data)
    fields = filter_user_update(identity, sent)
    if sent and not fields:
        return UserResponse.model_validate(service.get_user(user_id))
    return UserResponse.model_validate(service.update_user(user_id, fields))


@router.delete("/{user_id}", status_code=204)
def delete_user(
    user_id: str = Depends(valid_user_id),
    identity: Identity = Depends(get_current_identity),
    service: UserService = Depends(get_user_service),
):
    """Delete a user (admin or the user themself)"""
    authorize(identity, Action.DELETE_USER, user_id)
    service.delete_user(user_id)
    return Response(status_code=204)
