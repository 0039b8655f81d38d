"""Lending type, configuration and contract routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from src.api.deps import (
    get_actor_id,
    get_lending_configuration_service,
    get_lending_contract_service,
    get_lending_type_service,
)
from src.api.routes._crud import add_crud_routes, raise_for_errors
from src.api.schemas import LendingApprovalResponse
from src.components.crud import run_list
from src.components.lending import (
    LendingConfigurationService,
    LendingContractService,
    LendingTypeService,
)
from src.domain.entities import (
    LendingConfiguration,
    LendingConfigurationFields,
    LendingContract,
    LendingContractFields,
    LendingContractStatus,
    LendingType,
    LendingTypeFields,
)

type_router = APIRouter()
configuration_router = APIRouter()
distributor_configuration_router = APIRouter()
contract_router = APIRouter()


# --- Lending types ---


@type_router.get("", response_model=list[LendingType])
def list_lending_types(
    service: LendingTypeService = Depends(get_lending_type_service),
) -> list[LendingType]:
    return run_list(service).items


@type_router.get("/active", response_model=list[LendingType])
def list_active_lending_types(
    service: LendingTypeService = Depends(get_lending_type_service),
) -> list[LendingType]:
    return run_list(service, is_active=True).items


@type_router.get("/code/{code}", response_model=LendingType)
def get_lending_type_by_code(
    code: str,
    service: LendingTypeService = Depends(get_lending_type_service),
) -> LendingType:
    lending_type = service.get_by_code(code)
    if lending_type is None:
        raise HTTPException(status_code=404, detail=f"Lending type '{code}' not found")
    return lending_type


add_crud_routes(
    type_router,
    service_dep=get_lending_type_service,
    fields=LendingTypeFields,
    entity=LendingType,
)


# --- Lending configurations ---

add_crud_routes(
    configuration_router,
    service_dep=get_lending_configuration_service,
    fields=LendingConfigurationFields,
    entity=LendingConfiguration,
)


@distributor_configuration_router.get("", response_model=list[LendingConfiguration])
def list_distributor_lending_configurations(
    distributor_id: UUID,
    service: LendingConfigurationService = Depends(get_lending_configuration_service),
) -> list[LendingConfiguration]:
    """Active lending configurations of the distributor's products."""
    return service.list_for_distributor(distributor_id)


# --- Lending contracts ---


@contract_router.get("/contract/{contract_id}", response_model=list[LendingContract])
def list_by_contract(
    contract_id: UUID,
    service: LendingContractService = Depends(get_lending_contract_service),
) -> list[LendingContract]:
    return run_list(service, contract_id=contract_id).items


@contract_router.get("/distributor/{distributor_id}", response_model=list[LendingContract])
def list_by_distributor(
    distributor_id: UUID,
    service: LendingContractService = Depends(get_lending_contract_service),
) -> list[LendingContract]:
    return run_list(service, distributor_id=distributor_id).items


@contract_router.get("/product/{product_id}", response_model=list[LendingContract])
def list_by_product(
    product_id: UUID,
    service: LendingContractService = Depends(get_lending_contract_service),
) -> list[LendingContract]:
    return run_list(service, product_id=product_id).items


@contract_router.get("/party/{party_id}", response_model=list[LendingContract])
def list_by_party(
    party_id: UUID,
    service: LendingContractService = Depends(get_lending_contract_service),
) -> list[LendingContract]:
    return run_list(service, party_id=party_id).items


@contract_router.get("/status/{status}", response_model=list[LendingContract])
def list_by_status(
    status: LendingContractStatus,
    service: LendingContractService = Depends(get_lending_contract_service),
) -> list[LendingContract]:
    return run_list(service, status=status).items


@contract_router.post("/{contract_id}/approve", response_model=LendingApprovalResponse)
def approve_contract(
    contract_id: UUID,
    service: LendingContractService = Depends(get_lending_contract_service),
    actor_id: UUID | None = Depends(get_actor_id),
) -> LendingApprovalResponse:
    """Approve the contract and open a pending shipment for its product."""
    result, errors = service.approve(contract_id, actor_id=actor_id)
    if result is None:
        raise_for_errors(errors)
    contract, shipment = result
    return LendingApprovalResponse(contract=contract, shipment=shipment)


add_crud_routes(
    contract_router,
    service_dep=get_lending_contract_service,
    fields=LendingContractFields,
    entity=LendingContract,
)
