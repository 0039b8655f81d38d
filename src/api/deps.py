import os
from collections.abc import Callable
from functools import lru_cache
from pathlib import Path
from typing import Any, TypeVar
from uuid import UUID

from fastapi import Depends, Header

from src.adapters.clock import SystemClock
from src.adapters.sqlite.repos import (
    SQLiteAgencyRepo,
    SQLiteAgentAgencyRepo,
    SQLiteAgentRepo,
    SQLiteAgentRoleRepo,
    SQLiteAuditLogRepo,
    SQLiteBrandingRepo,
    SQLiteConfigurationDataTypeRepo,
    SQLiteConfigurationScopeRepo,
    SQLiteDistributorConfigurationRepo,
    SQLiteDistributorContractRepo,
    SQLiteDistributorRepo,
    SQLiteDistributorTermsRepo,
    SQLiteEntityRepo,
    SQLiteLendingConfigurationRepo,
    SQLiteLendingContractRepo,
    SQLiteLendingTypeRepo,
    SQLiteOperationRepo,
    SQLitePaymentMethodRepo,
    SQLiteProductCatalogRepo,
    SQLiteProductCategoryRepo,
    SQLiteProductRepo,
    SQLiteShipmentRepo,
    SQLiteSimulationRepo,
    SQLiteTermsTemplateRepo,
    SQLiteTerritoryRepo,
)
from src.components.agencies import (
    AgencyService,
    AgentAgencyService,
    AgentRoleService,
    AgentService,
)
from src.components.catalog import ProductCatalogService, ProductCategoryService, ProductService
from src.components.configurations import (
    ConfigurationDataTypeService,
    ConfigurationScopeService,
    DistributorConfigurationService,
)
from src.components.contracts import DistributorContractService
from src.components.distributor_terms import DistributorTermsService
from src.components.distributors import AuditLogService, BrandingService, DistributorService
from src.components.lending import (
    LendingConfigurationService,
    LendingContractService,
    LendingTypeService,
)
from src.components.payment_methods import PaymentMethodService
from src.components.shipments import ShipmentService
from src.components.simulations import SimulationService
from src.components.terms_generation import TermsGenerationService
from src.components.terms_templates import TemplateService
from src.components.territories import OperationService, TerritoryService
from src.rules.loader import load_rules
from src.rules.models import Rules

R = TypeVar("R", bound=SQLiteEntityRepo[Any])


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.data_dir = Path(os.environ.get("DISTRIBUTOR_DATA_DIR", "./data"))
        self.db_path = str(self.data_dir / "distributor.db")
        self.rules_path = Path(
            os.environ.get("DISTRIBUTOR_RULES_PATH", str(self.base_dir / "rules.yaml"))
        )
        self.migrations_dir = os.environ.get(
            "DISTRIBUTOR_MIGRATIONS_DIR", str(self.base_dir / "migrations")
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def get_rules(settings: Settings = Depends(get_settings)) -> Rules:
    return load_rules(settings.rules_path)


def get_clock() -> SystemClock:
    return SystemClock()


def get_actor_id(x_user_id: UUID | None = Header(default=None)) -> UUID | None:
    """Acting user, taken from the X-User-Id header."""
    return x_user_id


# --- Repos ---
def _repo_dependency(repo_cls: type[R]) -> Callable[..., R]:
    def dependency(settings: Settings = Depends(get_settings)) -> R:
        return repo_cls(settings.db_path)

    dependency.__name__ = f"get_{repo_cls.table}_repo"
    return dependency


get_distributor_repo = _repo_dependency(SQLiteDistributorRepo)
get_branding_repo = _repo_dependency(SQLiteBrandingRepo)
get_audit_log_repo = _repo_dependency(SQLiteAuditLogRepo)
get_agency_repo = _repo_dependency(SQLiteAgencyRepo)
get_agent_repo = _repo_dependency(SQLiteAgentRepo)
get_agent_role_repo = _repo_dependency(SQLiteAgentRoleRepo)
get_agent_agency_repo = _repo_dependency(SQLiteAgentAgencyRepo)
get_payment_method_repo = _repo_dependency(SQLitePaymentMethodRepo)
get_territory_repo = _repo_dependency(SQLiteTerritoryRepo)
get_operation_repo = _repo_dependency(SQLiteOperationRepo)
get_product_category_repo = _repo_dependency(SQLiteProductCategoryRepo)
get_product_repo = _repo_dependency(SQLiteProductRepo)
get_product_catalog_repo = _repo_dependency(SQLiteProductCatalogRepo)
get_lending_type_repo = _repo_dependency(SQLiteLendingTypeRepo)
get_lending_configuration_repo = _repo_dependency(SQLiteLendingConfigurationRepo)
get_lending_contract_repo = _repo_dependency(SQLiteLendingContractRepo)
get_shipment_repo = _repo_dependency(SQLiteShipmentRepo)
get_contract_repo = _repo_dependency(SQLiteDistributorContractRepo)
get_simulation_repo = _repo_dependency(SQLiteSimulationRepo)
get_configuration_scope_repo = _repo_dependency(SQLiteConfigurationScopeRepo)
get_configuration_data_type_repo = _repo_dependency(SQLiteConfigurationDataTypeRepo)
get_configuration_repo = _repo_dependency(SQLiteDistributorConfigurationRepo)
get_template_repo = _repo_dependency(SQLiteTermsTemplateRepo)
get_terms_repo = _repo_dependency(SQLiteDistributorTermsRepo)


def _common(rules: Rules, clock: SystemClock) -> dict[str, Any]:
    return {"clock": clock, "pagination": rules.pagination}


# --- Component Services ---
def get_distributor_service(
    repo: SQLiteDistributorRepo = Depends(get_distributor_repo),
    audit_repo: SQLiteAuditLogRepo = Depends(get_audit_log_repo),
    rules: Rules = Depends(get_rules),
    clock: SystemClock = Depends(get_clock),
) -> DistributorService:
    """Get distributor component service."""
    return DistributorService(repo, audit_repo, **_common(rules, clock))


def get_branding_service(
    repo: SQLiteBrandingRepo = Depends(get_branding_repo),
    rules: Rules = Depends(get_rules),
    clock: SystemClock = Depends(get_clock),
) -> BrandingService:
    return BrandingService(repo, **_common(rules, clock))


def get_audit_log_service(
    repo: SQLiteAuditLogRepo = Depends(get_audit_log_repo),
    rules: Rules = Depends(get_rules),
    clock: SystemClock = Depends(get_clock),
) -> AuditLogService:
    return AuditLogService(repo, **_common(rules, clock))


def get_agency_service(
    repo: SQLiteAgencyRepo = Depends(get_agency_repo),
    rules: Rules = Depends(get_rules),
    clock: SystemClock = Depends(get_clock),
) -> AgencyService:
    return AgencyService(repo, **_common(rules, clock))


def get_agent_service(
    repo: SQLiteAgentRepo = Depends(get_agent_repo),
    rules: Rules = Depends(get_rules),
    clock: SystemClock = Depends(get_clock),
) -> AgentService:
    return AgentService(repo, **_common(rules, clock))


def get_agent_role_service(
    repo: SQLiteAgentRoleRepo = Depends(get_agent_role_repo),
    rules: Rules = Depends(get_rules),
    clock: SystemClock = Depends(get_clock),
) -> AgentRoleService:
    return AgentRoleService(repo, **_common(rules, clock))


def get_agent_agency_service(
    repo: SQLiteAgentAgencyRepo = Depends(get_agent_agency_repo),
    agent_repo: SQLiteAgentRepo = Depends(get_agent_repo),
    agency_repo: SQLiteAgencyRepo = Depends(get_agency_repo),
    role_repo: SQLiteAgentRoleRepo = Depends(get_agent_role_repo),
    rules: Rules = Depends(get_rules),
    clock: SystemClock = Depends(get_clock),
) -> AgentAgencyService:
    return AgentAgencyService(repo, agent_repo, agency_repo, role_repo, **_common(rules, clock))


def get_payment_method_service(
    repo: SQLitePaymentMethodRepo = Depends(get_payment_method_repo),
    agency_repo: SQLiteAgencyRepo = Depends(get_agency_repo),
    rules: Rules = Depends(get_rules),
    clock: SystemClock = Depends(get_clock),
) -> PaymentMethodService:
    """Get payment method component service."""
    return PaymentMethodService(repo, agency_repo, **_common(rules, clock))


def get_territory_service(
    repo: SQLiteTerritoryRepo = Depends(get_territory_repo),
    rules: Rules = Depends(get_rules),
    clock: SystemClock = Depends(get_clock),
) -> TerritoryService:
    return TerritoryService(repo, **_common(rules, clock))


def get_operation_service(
    repo: SQLiteOperationRepo = Depends(get_operation_repo),
    rules: Rules = Depends(get_rules),
    clock: SystemClock = Depends(get_clock),
) -> OperationService:
    return OperationService(repo, **_common(rules, clock))


def get_product_category_service(
    repo: SQLiteProductCategoryRepo = Depends(get_product_category_repo),
    rules: Rules = Depends(get_rules),
    clock: SystemClock = Depends(get_clock),
) -> ProductCategoryService:
    return ProductCategoryService(repo, **_common(rules, clock))


def get_product_service(
    repo: SQLiteProductRepo = Depends(get_product_repo),
    rules: Rules = Depends(get_rules),
    clock: SystemClock = Depends(get_clock),
) -> ProductService:
    return ProductService(repo, **_common(rules, clock))


def get_product_catalog_service(
    repo: SQLiteProductCatalogRepo = Depends(get_product_catalog_repo),
    rules: Rules = Depends(get_rules),
    clock: SystemClock = Depends(get_clock),
) -> ProductCatalogService:
    return ProductCatalogService(repo, **_common(rules, clock))


def get_lending_type_service(
    repo: SQLiteLendingTypeRepo = Depends(get_lending_type_repo),
    rules: Rules = Depends(get_rules),
    clock: SystemClock = Depends(get_clock),
) -> LendingTypeService:
    return LendingTypeService(repo, **_common(rules, clock))


def get_lending_configuration_service(
    repo: SQLiteLendingConfigurationRepo = Depends(get_lending_configuration_repo),
    rules: Rules = Depends(get_rules),
    clock: SystemClock = Depends(get_clock),
) -> LendingConfigurationService:
    return LendingConfigurationService(repo, **_common(rules, clock))


def get_shipment_service(
    repo: SQLiteShipmentRepo = Depends(get_shipment_repo),
    rules: Rules = Depends(get_rules),
    clock: SystemClock = Depends(get_clock),
) -> ShipmentService:
    """Get shipment component service."""
    return ShipmentService(repo, rules.shipments, **_common(rules, clock))


def get_lending_contract_service(
    repo: SQLiteLendingContractRepo = Depends(get_lending_contract_repo),
    shipments: ShipmentService = Depends(get_shipment_service),
    rules: Rules = Depends(get_rules),
    clock: SystemClock = Depends(get_clock),
) -> LendingContractService:
    """Get lending contract component service."""
    return LendingContractService(repo, shipments, **_common(rules, clock))


def get_contract_service(
    repo: SQLiteDistributorContractRepo = Depends(get_contract_repo),
    rules: Rules = Depends(get_rules),
    clock: SystemClock = Depends(get_clock),
) -> DistributorContractService:
    return DistributorContractService(repo, **_common(rules, clock))


def get_simulation_service(
    repo: SQLiteSimulationRepo = Depends(get_simulation_repo),
    rules: Rules = Depends(get_rules),
    clock: SystemClock = Depends(get_clock),
) -> SimulationService:
    return SimulationService(repo, **_common(rules, clock))


def get_configuration_scope_service(
    repo: SQLiteConfigurationScopeRepo = Depends(get_configuration_scope_repo),
    rules: Rules = Depends(get_rules),
    clock: SystemClock = Depends(get_clock),
) -> ConfigurationScopeService:
    return ConfigurationScopeService(repo, **_common(rules, clock))


def get_configuration_data_type_service(
    repo: SQLiteConfigurationDataTypeRepo = Depends(get_configuration_data_type_repo),
    rules: Rules = Depends(get_rules),
    clock: SystemClock = Depends(get_clock),
) -> ConfigurationDataTypeService:
    return ConfigurationDataTypeService(repo, **_common(rules, clock))


def get_configuration_service(
    repo: SQLiteDistributorConfigurationRepo = Depends(get_configuration_repo),
    data_type_repo: SQLiteConfigurationDataTypeRepo = Depends(get_configuration_data_type_repo),
    rules: Rules = Depends(get_rules),
    clock: SystemClock = Depends(get_clock),
) -> DistributorConfigurationService:
    return DistributorConfigurationService(repo, data_type_repo, **_common(rules, clock))


def get_template_service(
    repo: SQLiteTermsTemplateRepo = Depends(get_template_repo),
    rules: Rules = Depends(get_rules),
    clock: SystemClock = Depends(get_clock),
) -> TemplateService:
    """Get terms template component service."""
    return TemplateService(repo, **_common(rules, clock))


def get_terms_service(
    repo: SQLiteDistributorTermsRepo = Depends(get_terms_repo),
    rules: Rules = Depends(get_rules),
    clock: SystemClock = Depends(get_clock),
) -> DistributorTermsService:
    """Get distributor terms component service."""
    return DistributorTermsService(repo, rules.terms, **_common(rules, clock))


def get_terms_generation_service(
    template_repo: SQLiteTermsTemplateRepo = Depends(get_template_repo),
    distributor_repo: SQLiteDistributorRepo = Depends(get_distributor_repo),
    terms: DistributorTermsService = Depends(get_terms_service),
    rules: Rules = Depends(get_rules),
    clock: SystemClock = Depends(get_clock),
) -> TermsGenerationService:
    """Get terms generation component service."""
    return TermsGenerationService(template_repo, distributor_repo, terms, clock, rules.terms)
