"""Service catalog router - public reads, admin writes"""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from ...access import Action
from ...auth import require
from ...database import get_db
from ...shared.patch import sent_fields
from ...shared.validators import validate_path_id
from .schemas import ServiceCreate, ServiceResponse, ServiceUpdate
from .service import CatalogService

router = APIRouter(prefix="/services", tags=["Services"])

admin_only = [Depends(require(Action.WRITE_CATALOG))]


def get_catalog_service(db: Session = Depends(get_db)) -> CatalogService:
    return CatalogService(db)


def valid_service_id(service_id: str) -> str:
    return validate_path_id(service_id)


@router.get("", response_model=list[ServiceResponse])
def get_services(catalog: CatalogService = Depends(get_catalog_service)):
    return [ServiceResponse.model_validate(s) for s in catalog.get_services()]


@router.get("/{service_id}", response_model=ServiceResponse)
def get_service(
    service_id: str = Depends(valid_service_id),
    catalog: CatalogService = Depends(get_catalog_service),
):
    return ServiceResponse.model_validate(catalog.get_service(service_id))


@router.post("", response_model=ServiceResponse, status_code=201, dependencies=admin_only)
def create_service(data: ServiceCreate, catalog: CatalogService = Depends(get_catalog_service)):
    return ServiceResponse.model_validate(catalog.create_service(data))


@router.put("/{service_id}", response_model=ServiceResponse, dependencies=admin_only)
def update_service(
    data: ServiceUpdate,
    service_id: str = Depends(valid_service_id),
    catalog: CatalogService = Depends(get_catalog_service),
):
    """Partial update: only the fields sent are changed"""
    return ServiceResponse.model_validate(catalog.update_service(service_id, sent_fields(data)))


@router.delete("/{service_id}", status_code=204, dependencies=admin_only)
def delete_service(
    service_id: str = Depends(valid_service_id),
    catalog: CatalogService = Depends(get_catalog_service),
):
    catalog.delete_service(service_id)
    return Response(status_code=204)
