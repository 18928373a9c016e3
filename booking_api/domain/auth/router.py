"""Auth router - registration, login and Google sign-in"""

import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...access import Identity
from ...auth import get_optional_identity
from ...database import get_db
from ...models import User
from .google import GoogleTokenVerifier, get_google_verifier
from .schemas import AuthUser, GoogleLoginRequest, LoginRequest, RegisterRequest, TokenResponse
from .service import CredentialService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


def get_credential_service(db: Session = Depends(get_db)) -> CredentialService:
    return CredentialService(db)


def _token_response(user: User) -> TokenResponse:
    return TokenResponse(token=CredentialService.issue_token(user), user=AuthUser.model_validate(user))


@router.post("/register", response_model=TokenResponse, status_code=201)
def register(
    data: RegisterRequest,
    identity: Optional[Identity] = Depends(get_optional_identity),
    service: CredentialService = Depends(get_credential_service),
):
    """Register with email and password"""
    user = service.register(data, requested_by=identity)
    return _token_response(user)


@router.post("/login", response_model=TokenResponse)
def login(data: LoginRequest, service: CredentialService = Depends(get_credential_service)):
    """Log in with email and password"""
    user = service.login(data.email, data.password)
    return _token_response(user)


@router.post("/google", response_model=TokenResponse)
async def google_login(
    data: GoogleLoginRequest,
    verifier: GoogleTokenVerifier = Depends(get_google_verifier),
    service: CredentialService = Depends(get_credential_service),
):
    """Sign in with a Google ID token (find-or-create)"""
    claims = await verifier.verify(data.idToken)
    # Session work is blocking; keep it off the event loop
    user = await asyncio.to_thread(service.login_with_google, claims)
    return _token_response(user)
