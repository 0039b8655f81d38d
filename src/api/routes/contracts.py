"""Distributor contract routes."""

from fastapi import APIRouter

from src.api.deps import get_contract_service
from src.api.routes._crud import add_crud_routes
from src.domain.entities import DistributorContract, DistributorContractFields

router = APIRouter()

add_crud_routes(
    router,
    service_dep=get_contract_service,
    fields=DistributorContractFields,
    entity=DistributorContract,
    scope=("distributor_id",),
)
