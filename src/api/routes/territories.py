"""Authorized territory and operation routes."""

from uuid import UUID

from fastapi import APIRouter, Depends

from src.api.deps import get_operation_service, get_territory_service
from src.api.routes._crud import add_crud_routes, add_flag_route
from src.components.crud import run_list
from src.components.territories import OperationService
from src.domain.entities import (
    DistributorAuthorizedTerritory,
    DistributorAuthorizedTerritoryFields,
    DistributorOperation,
    DistributorOperationFields,
)

territory_router = APIRouter()
operation_router = APIRouter()

add_crud_routes(
    territory_router,
    service_dep=get_territory_service,
    fields=DistributorAuthorizedTerritoryFields,
    entity=DistributorAuthorizedTerritory,
    scope=("distributor_id",),
)


@operation_router.get("", response_model=list[DistributorOperation])
def list_operations(
    distributor_id: UUID,
    service: OperationService = Depends(get_operation_service),
) -> list[DistributorOperation]:
    return run_list(service, {"distributor_id": distributor_id}).items


@operation_router.get("/active", response_model=list[DistributorOperation])
def list_active_operations(
    distributor_id: UUID,
    service: OperationService = Depends(get_operation_service),
) -> list[DistributorOperation]:
    return run_list(service, {"distributor_id": distributor_id}, is_active=True).items


@operation_router.get("/can-operate", response_model=bool)
def can_operate(
    distributor_id: UUID,
    country_id: UUID,
    administrative_division_id: UUID,
    service: OperationService = Depends(get_operation_service),
) -> bool:
    """Whether the distributor has an active operation in the region."""
    return service.can_operate(distributor_id, country_id, administrative_division_id)


for _path, _value in (("activate", True), ("deactivate", False)):
    add_flag_route(
        operation_router,
        _path,
        service_dep=get_operation_service,
        entity=DistributorOperation,
        flag="is_active",
        value=_value,
        scope=("distributor_id",),
    )

add_crud_routes(
    operation_router,
    service_dep=get_operation_service,
    fields=DistributorOperationFields,
    entity=DistributorOperation,
    scope=("distributor_id",),
)
