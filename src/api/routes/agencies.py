"""Agency, agent, agent role and assignment routes."""

from fastapi import APIRouter

from src.api.deps import (
    get_agency_service,
    get_agent_agency_service,
    get_agent_role_service,
    get_agent_service,
)
from src.api.routes._crud import add_crud_routes
from src.domain.entities import (
    AgentRole,
    AgentRoleFields,
    DistributorAgency,
    DistributorAgencyFields,
    DistributorAgent,
    DistributorAgentAgency,
    DistributorAgentAgencyFields,
    DistributorAgentFields,
)

agency_router = APIRouter()
agent_router = APIRouter()
agent_agency_router = APIRouter()
agent_role_router = APIRouter()

add_crud_routes(
    agency_router,
    service_dep=get_agency_service,
    fields=DistributorAgencyFields,
    entity=DistributorAgency,
    scope=("distributor_id",),
)

add_crud_routes(
    agent_router,
    service_dep=get_agent_service,
    fields=DistributorAgentFields,
    entity=DistributorAgent,
    scope=("distributor_id",),
)

add_crud_routes(
    agent_agency_router,
    service_dep=get_agent_agency_service,
    fields=DistributorAgentAgencyFields,
    entity=DistributorAgentAgency,
    scope=("distributor_id",),
)

add_crud_routes(
    agent_role_router,
    service_dep=get_agent_role_service,
    fields=AgentRoleFields,
    entity=AgentRole,
)
