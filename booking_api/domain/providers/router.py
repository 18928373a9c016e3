"""Provider router - public reads, admin writes"""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from ...access import Action
from ...auth import require
from ...database import get_db
from ...shared.patch import sent_fields
from ...shared.validators import validate_path_id
from .schemas import ProviderCreate, ProviderResponse, ProviderUpdate
from .service import ProviderService

router = APIRouter(prefix="/providers", tags=["Providers"])

admin_only = [Depends(require(Action.WRITE_CATALOG))]


def get_provider_service(db: Session = Depends(get_db)) -> ProviderService:
    return ProviderService(db)


def valid_provider_id(provider_id: str) -> str:
    return validate_path_id(provider_id)


@router.get("", response_model=list[ProviderResponse])
def get_providers(service: ProviderService = Depends(get_provider_service)):
    return [ProviderResponse.model_validate(p) for p in service.get_providers()]


@router.get("/{provider_id}", response_model=ProviderResponse)
def get_provider(
    provider_id: str = Depends(valid_provider_id),
    service: ProviderService = Depends(get_provider_service),
):
    return ProviderResponse.model_validate(service.get_provider(provider_id))


@router.post("", response_model=ProviderResponse, status_code=201, dependencies=admin_only)
def create_provider(data: ProviderCreate, service: ProviderService = Depends(get_provider_service)):
    return ProviderResponse.model_validate(service.create_provider(data))


@router.put("/{provider_id}", response_model=ProviderResponse, dependencies=admin_only)
def update_provider(
    data: ProviderUpdate,
    provider_id: str = Depends(valid_provider_id),
    service: ProviderService = Depends(get_provider_service),
):
    """Partial update: only the fields sent are changed"""
    return ProviderResponse.model_validate(service.update_provider(provider_id, sent_fields(data)))


@router.delete("/{provider_id}", status_code=204, dependencies=admin_only)
def delete_provider(
    provider_id: str = Depends(valid_provider_id),
    service: ProviderService = Depends(get_provider_service),
):
    service.delete_provider(provider_id)
    return Response(status_code=204)
