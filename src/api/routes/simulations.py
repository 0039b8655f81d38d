"""Distributor simulation routes."""

from uuid import UUID

from fastapi import APIRouter, Depends

from src.api.deps import get_actor_id, get_simulation_service
from src.api.routes._crud import add_crud_routes, add_flag_route, raise_for_errors
from src.api.schemas import SimulationStatusRequest
from src.components.crud import run_list
from src.components.simulations import SimulationService
from src.domain.entities import DistributorSimulation, DistributorSimulationFields

router = APIRouter()
lookup_router = APIRouter()


@router.get("", response_model=list[DistributorSimulation])
def list_simulations(
    distributor_id: UUID,
    service: SimulationService = Depends(get_simulation_service),
) -> list[DistributorSimulation]:
    return run_list(service, {"distributor_id": distributor_id}).items


@router.get("/active", response_model=list[DistributorSimulation])
def list_active_simulations(
    distributor_id: UUID,
    service: SimulationService = Depends(get_simulation_service),
) -> list[DistributorSimulation]:
    return run_list(service, {"distributor_id": distributor_id}, is_active=True).items


@router.get("/status/{status}", response_model=list[DistributorSimulation])
def list_simulations_by_status(
    distributor_id: UUID,
    status: str,
    service: SimulationService = Depends(get_simulation_service),
) -> list[DistributorSimulation]:
    return run_list(
        service, {"distributor_id": distributor_id}, simulation_status=status
    ).items


@router.patch("/{simulation_id}/status", response_model=DistributorSimulation)
def update_simulation_status(
    distributor_id: UUID,
    simulation_id: UUID,
    body: SimulationStatusRequest,
    service: SimulationService = Depends(get_simulation_service),
    actor_id: UUID | None = Depends(get_actor_id),
) -> DistributorSimulation:
    simulation, errors = service.update_status(
        simulation_id, body.status, scope={"distributor_id": distributor_id}, actor_id=actor_id
    )
    if simulation is None:
        raise_for_errors(errors)
    return simulation


for _path, _value in (("activate", True), ("deactivate", False)):
    add_flag_route(
        router,
        _path,
        service_dep=get_simulation_service,
        entity=DistributorSimulation,
        flag="is_active",
        value=_value,
        scope=("distributor_id",),
    )

add_crud_routes(
    router,
    service_dep=get_simulation_service,
    fields=DistributorSimulationFields,
    entity=DistributorSimulation,
    scope=("distributor_id",),
)


# --- Cross-distributor lookups ---


@lookup_router.get("/application/{application_id}", response_model=list[DistributorSimulation])
def list_by_application(
    application_id: UUID,
    service: SimulationService = Depends(get_simulation_service),
) -> list[DistributorSimulation]:
    return run_list(service, application_id=application_id).items


@lookup_router.get("/status/{status}", response_model=list[DistributorSimulation])
def list_all_by_status(
    status: str,
    service: SimulationService = Depends(get_simulation_service),
) -> list[DistributorSimulation]:
    return run_list(service, simulation_status=status).items
