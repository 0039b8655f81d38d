"""Distributor, branding and audit log routes."""

from fastapi import APIRouter

from src.api.deps import get_audit_log_service, get_branding_service, get_distributor_service
from src.api.routes._crud import add_crud_routes
from src.domain.entities import (
    Distributor,
    DistributorAuditLog,
    DistributorAuditLogFields,
    DistributorBranding,
    DistributorBrandingFields,
    DistributorFields,
)

router = APIRouter()
branding_router = APIRouter()
audit_router = APIRouter()

add_crud_routes(
    router,
    service_dep=get_distributor_service,
    fields=DistributorFields,
    entity=Distributor,
)

add_crud_routes(
    branding_router,
    service_dep=get_branding_service,
    fields=DistributorBrandingFields,
    entity=DistributorBranding,
    scope=("distributor_id",),
)

add_crud_routes(
    audit_router,
    service_dep=get_audit_log_service,
    fields=DistributorAuditLogFields,
    entity=DistributorAuditLog,
    scope=("distributor_id",),
)
