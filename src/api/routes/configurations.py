"""Configuration scope, data type and distributor configuration routes."""

from fastapi import APIRouter

from src.api.deps import (
    get_configuration_data_type_service,
    get_configuration_scope_service,
    get_configuration_service,
)
from src.api.routes._crud import add_crud_routes
from src.domain.entities import (
    ConfigurationDataType,
    ConfigurationDataTypeFields,
    ConfigurationScope,
    ConfigurationScopeFields,
    DistributorConfiguration,
    DistributorConfigurationFields,
)

scope_router = APIRouter()
data_type_router = APIRouter()
configuration_router = APIRouter()

add_crud_routes(
    scope_router,
    service_dep=get_configuration_scope_service,
    fields=ConfigurationScopeFields,
    entity=ConfigurationScope,
)

add_crud_routes(
    data_type_router,
    service_dep=get_configuration_data_type_service,
    fields=ConfigurationDataTypeFields,
    entity=ConfigurationDataType,
)

add_crud_routes(
    configuration_router,
    service_dep=get_configuration_service,
    fields=DistributorConfigurationFields,
    entity=DistributorConfiguration,
    scope=("distributor_id",),
)
