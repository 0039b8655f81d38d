from datetime import UTC, date, datetime
from decimal import Decimal
from typing import Any, Literal
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, IPvAnyAddress, field_validator

# --- Enums / Literals ---
BrandingTheme = Literal["LIGHT", "DARK", "CUSTOM"]
AuditAction = Literal["CREATED", "UPDATED", "TERMINATED"]
TemplateCategory = Literal[
    "GENERAL", "LENDING", "OPERATIONAL", "COMPLIANCE", "MARKETING", "TECHNICAL"
]
TermsStatus = Literal["DRAFT", "PENDING_SIGNATURE", "SIGNED", "EXPIRED", "TERMINATED"]
LendingContractStatus = Literal[
    "DRAFT", "PENDING", "APPROVED", "ACTIVE", "COMPLETED", "CANCELLED", "TERMINATED"
]
ShipmentStatus = Literal["PENDING", "SHIPPED", "IN_TRANSIT", "DELIVERED", "CANCELLED", "RETURNED"]

HEX_COLOR_PATTERN = r"^#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})$"
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


def to_naive_utc(value: datetime) -> datetime:
    """Timestamps are compared and stored as naive UTC."""
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


class DomainModel(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    @field_validator("*", mode="after")
    @classmethod
    def _store_naive_utc(cls, value: Any) -> Any:
        if isinstance(value, datetime):
            return to_naive_utc(value)
        return value


class Audited(DomainModel):
    """Identity and bookkeeping columns shared by every managed entity."""

    id: UUID = Field(default_factory=uuid4)
    created_at: datetime | None = None
    created_by: UUID | None = None
    updated_at: datetime | None = None
    updated_by: UUID | None = None


# --- Distributors ---


class DistributorFields(DomainModel):
    external_code: str | None = Field(default=None, max_length=255)
    name: str = Field(min_length=1, max_length=255)
    display_name: str | None = Field(default=None, max_length=255)
    tax_id: str | None = Field(default=None, max_length=100)
    registration_number: str | None = Field(default=None, max_length=100)
    website_url: str | None = Field(default=None, max_length=255)
    phone_number: str | None = Field(default=None, max_length=50)
    email: str | None = Field(default=None, max_length=255, pattern=EMAIL_PATTERN)
    support_email: str | None = Field(default=None, max_length=255, pattern=EMAIL_PATTERN)
    address_line: str | None = Field(default=None, max_length=255)
    postal_code: str | None = Field(default=None, max_length=20)
    city: str | None = Field(default=None, max_length=100)
    state: str | None = Field(default=None, max_length=100)
    country_id: UUID | None = None
    country_code: str | None = Field(default=None, max_length=3)
    is_active: bool = True
    is_test_distributor: bool = False
    time_zone: str | None = Field(default=None, max_length=50)
    default_locale: str | None = Field(default=None, max_length=10)
    onboarded_at: datetime | None = None
    terminated_at: datetime | None = None


class Distributor(DistributorFields, Audited):
    pass


class DistributorBrandingFields(DomainModel):
    distributor_id: UUID | None = None
    logo_url: str | None = Field(default=None, max_length=500)
    favicon_url: str | None = Field(default=None, max_length=500)
    primary_color: str | None = Field(default=None, pattern=HEX_COLOR_PATTERN)
    secondary_color: str | None = Field(default=None, pattern=HEX_COLOR_PATTERN)
    background_color: str | None = Field(default=None, pattern=HEX_COLOR_PATTERN)
    font_family: str | None = Field(default=None, max_length=100)
    theme: BrandingTheme | None = None
    is_default: bool = False


class DistributorBranding(DistributorBrandingFields, Audited):
    pass


class DistributorAuditLogFields(DomainModel):
    distributor_id: UUID | None = None
    action: AuditAction
    entity: str = Field(min_length=1, max_length=100)
    entity_id: str = Field(min_length=1, max_length=100)
    metadata: dict[str, Any] | None = None
    ip_address: IPvAnyAddress | None = None
    user_id: UUID | None = None
    timestamp: datetime | None = None


class DistributorAuditLog(DistributorAuditLogFields):
    id: UUID = Field(default_factory=uuid4)


# --- Agencies & agents ---


class DistributorAgencyFields(DomainModel):
    distributor_id: UUID | None = None
    name: str = Field(min_length=1, max_length=255)
    code: str = Field(min_length=1, max_length=50)
    description: str | None = Field(default=None, max_length=1000)
    country_id: UUID
    administrative_division_id: UUID | None = None
    address_line: str | None = Field(default=None, max_length=255)
    postal_code: str | None = Field(default=None, max_length=20)
    city: str | None = Field(default=None, max_length=100)
    state: str | None = Field(default=None, max_length=100)
    phone_number: str | None = Field(default=None, max_length=50)
    email: str | None = Field(default=None, max_length=255, pattern=EMAIL_PATTERN)
    is_headquarters: bool = False
    is_active: bool = True
    opened_at: datetime | None = None
    closed_at: datetime | None = None


class DistributorAgency(DistributorAgencyFields, Audited):
    pass


class DistributorAgentFields(DomainModel):
    distributor_id: UUID | None = None
    user_id: UUID | None = None
    employee_code: str | None = Field(default=None, max_length=50)
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: str | None = Field(default=None, max_length=255, pattern=EMAIL_PATTERN)
    phone_number: str | None = Field(default=None, max_length=50)
    avatar_url: str | None = Field(default=None, max_length=500)
    department: str | None = Field(default=None, max_length=100)
    unit: str | None = Field(default=None, max_length=100)
    job_title: str | None = Field(default=None, max_length=100)
    address_line: str | None = Field(default=None, max_length=255)
    postal_code: str | None = Field(default=None, max_length=20)
    city: str | None = Field(default=None, max_length=100)
    state: str | None = Field(default=None, max_length=100)
    country_code: str | None = Field(default=None, max_length=3)
    hire_date: date | None = None
    termination_date: date | None = None
    is_active: bool = True


class DistributorAgent(DistributorAgentFields, Audited):
    pass


class AgentRoleFields(DomainModel):
    name: str = Field(min_length=1, max_length=100)
    code: str = Field(min_length=1, max_length=50)
    description: str | None = Field(default=None, max_length=500)
    is_active: bool = True


class AgentRole(AgentRoleFields, Audited):
    pass


class DistributorAgentAgencyFields(DomainModel):
    distributor_id: UUID | None = None
    agent_id: UUID
    agency_id: UUID
    role_id: UUID
    is_primary_agency: bool = False
    is_active: bool = True
    assigned_at: datetime | None = None
    unassigned_at: datetime | None = None


class DistributorAgentAgency(DistributorAgentAgencyFields, Audited):
    pass


class AgencyPaymentMethodFields(DomainModel):
    agency_id: UUID | None = None
    payment_method_type: str = Field(min_length=1, max_length=50)
    payment_provider: str | None = Field(default=None, max_length=100)
    account_holder_name: str | None = Field(default=None, max_length=255)
    account_number: str | None = Field(default=None, max_length=100)
    routing_number: str | None = Field(default=None, max_length=50)
    swift_code: str | None = Field(default=None, max_length=20)
    iban: str | None = Field(default=None, max_length=50)
    bank_name: str | None = Field(default=None, max_length=255)
    bank_branch: str | None = Field(default=None, max_length=255)
    bank_address: str | None = Field(default=None, max_length=500)
    currency_code: str | None = Field(default=None, max_length=3)
    wallet_id: str | None = Field(default=None, max_length=100)
    wallet_phone: str | None = Field(default=None, max_length=50)
    wallet_email: str | None = Field(default=None, max_length=255, pattern=EMAIL_PATTERN)
    is_primary: bool = False
    is_verified: bool = False
    verified_at: datetime | None = None
    verified_by: UUID | None = None
    is_active: bool = True
    notes: str | None = Field(default=None, max_length=1000)
    metadata: str | None = None


class AgencyPaymentMethod(AgencyPaymentMethodFields, Audited):
    pass


# --- Territories & operations ---


class DistributorAuthorizedTerritoryFields(DomainModel):
    distributor_id: UUID | None = None
    country_id: UUID
    administrative_division_id: UUID | None = None
    authorization_level: str | None = Field(default=None, max_length=50)
    is_active: bool = True
    authorized_from: datetime | None = None
    authorized_until: datetime | None = None
    notes: str | None = Field(default=None, max_length=500)


class DistributorAuthorizedTerritory(DistributorAuthorizedTerritoryFields, Audited):
    pass


class DistributorOperationFields(DomainModel):
    distributor_id: UUID | None = None
    country_id: UUID
    administrative_division_id: UUID
    is_active: bool = True


class DistributorOperation(DistributorOperationFields, Audited):
    pass


# --- Catalog ---


class ProductCategoryFields(DomainModel):
    name: str = Field(min_length=1, max_length=255)
    code: str = Field(min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=1000)
    is_active: bool = True


class ProductCategory(ProductCategoryFields, Audited):
    pass


class ProductFields(DomainModel):
    distributor_id: UUID | None = None
    name: str = Field(min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=1000)
    sku: str | None = Field(default=None, max_length=100)
    model_number: str | None = Field(default=None, max_length=100)
    manufacturer: str | None = Field(default=None, max_length=255)
    category_id: UUID | None = None
    image_url: str | None = Field(default=None, max_length=500)
    specifications: dict[str, Any] | None = None
    is_active: bool = True


class Product(ProductFields, Audited):
    pass


class DistributorProductCatalogFields(DomainModel):
    distributor_id: UUID | None = None
    product_id: UUID
    catalog_code: str | None = Field(default=None, max_length=100)
    display_name: str | None = Field(default=None, max_length=255)
    custom_description: str | None = Field(default=None, max_length=2000)
    is_featured: bool = False
    is_available: bool = True
    availability_start_date: datetime | None = None
    availability_end_date: datetime | None = None
    display_order: int | None = None
    min_quantity: int | None = Field(default=None, ge=0)
    max_quantity: int | None = Field(default=None, ge=0)
    shipping_available: bool = True
    shipping_cost: Decimal | None = Field(default=None, ge=0)
    shipping_time_days: int | None = Field(default=None, ge=0)
    special_conditions: str | None = None
    metadata: str | None = None
    is_active: bool = True


class DistributorProductCatalog(DistributorProductCatalogFields, Audited):
    pass


# --- Lending ---


class LendingTypeFields(DomainModel):
    name: str = Field(min_length=1, max_length=255)
    code: str = Field(min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=1000)
    is_active: bool = True


class LendingType(LendingTypeFields, Audited):
    pass


class LendingConfigurationFields(DomainModel):
    product_id: UUID
    name: str = Field(min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=1000)
    lending_type_id: UUID
    min_term_months: int | None = Field(default=None, ge=1)
    max_term_months: int | None = Field(default=None, ge=1)
    default_term_months: int = Field(ge=1)
    min_down_payment_percentage: Decimal | None = Field(default=None, ge=0, le=100)
    default_down_payment_percentage: Decimal | None = Field(default=None, ge=0, le=100)
    interest_rate: Decimal | None = Field(default=None, ge=0)
    processing_fee_percentage: Decimal | None = Field(default=None, ge=0, le=100)
    early_termination_fee_percentage: Decimal | None = Field(default=None, ge=0, le=100)
    late_payment_fee_amount: Decimal | None = Field(default=None, ge=0)
    grace_period_days: int | None = Field(default=None, ge=0)
    is_default: bool = False
    is_active: bool = True
    terms_conditions: str | None = None


class LendingConfiguration(LendingConfigurationFields, Audited):
    pass


class LendingContractFields(DomainModel):
    contract_id: UUID
    party_id: UUID
    distributor_id: UUID
    product_id: UUID
    lending_configuration_id: UUID
    originating_agent_id: UUID | None = None
    agency_id: UUID | None = None
    start_date: date
    end_date: date
    monthly_payment: Decimal = Field(ge=0)
    down_payment: Decimal = Field(ge=0)
    total_amount: Decimal = Field(ge=0)
    status: LendingContractStatus = "DRAFT"
    approval_date: datetime | None = None
    approved_by: UUID | None = None
    terms_conditions: str | None = None
    notes: str | None = Field(default=None, max_length=1000)
    is_active: bool = True


class LendingContract(LendingContractFields, Audited):
    pass


class ShipmentFields(DomainModel):
    lending_contract_id: UUID
    product_id: UUID
    tracking_number: str | None = Field(default=None, max_length=100)
    carrier: str | None = Field(default=None, max_length=100)
    shipping_address: str | None = Field(default=None, max_length=500)
    shipping_date: datetime | None = None
    estimated_delivery_date: datetime | None = None
    actual_delivery_date: datetime | None = None
    status: ShipmentStatus = "PENDING"
    notes: str | None = Field(default=None, max_length=1000)


class Shipment(ShipmentFields, Audited):
    pass


# --- Contracts & simulations ---


class DistributorContractFields(DomainModel):
    distributor_id: UUID | None = None
    contract_number: str | None = Field(default=None, max_length=100)
    contract_type: str | None = Field(default=None, max_length=50)
    title: str | None = Field(default=None, max_length=255)
    description: str | None = Field(default=None, max_length=2000)
    status: str | None = Field(default=None, max_length=50)
    start_date: date | None = None
    end_date: date | None = None
    renewal_date: date | None = None
    notice_period_days: int | None = Field(default=None, ge=0)
    auto_renewal: bool = False
    contract_value: Decimal | None = Field(default=None, ge=0)
    currency_code: str | None = Field(default=None, max_length=3)
    payment_terms: str | None = None
    special_terms: str | None = None
    financial_conditions: str | None = None
    product_conditions: str | None = None
    service_level_agreements: str | None = None
    metadata: str | None = None
    signed_date: date | None = None
    signed_by: UUID | None = None
    approved_date: date | None = None
    approved_by: UUID | None = None
    terminated_date: date | None = None
    terminated_by: UUID | None = None
    termination_reason: str | None = Field(default=None, max_length=1000)
    is_active: bool = True


class DistributorContract(DistributorContractFields, Audited):
    pass


class DistributorSimulationFields(DomainModel):
    distributor_id: UUID | None = None
    application_id: UUID
    agent_id: UUID | None = None
    agency_id: UUID | None = None
    simulation_status: str = Field(default="PENDING", min_length=1, max_length=50)
    notes: str | None = Field(default=None, max_length=1000)
    is_active: bool = True


class DistributorSimulation(DistributorSimulationFields, Audited):
    pass


# --- Configuration ---


class ConfigurationScopeFields(DomainModel):
    name: str = Field(min_length=1, max_length=100)
    code: str = Field(min_length=1, max_length=50)
    description: str | None = Field(default=None, max_length=500)
    priority: int = 0
    is_active: bool = True


class ConfigurationScope(ConfigurationScopeFields, Audited):
    pass


class ConfigurationDataTypeFields(DomainModel):
    name: str = Field(min_length=1, max_length=100)
    code: str = Field(min_length=1, max_length=50)
    description: str | None = Field(default=None, max_length=500)
    validation_regex: str | None = Field(default=None, max_length=500)
    is_active: bool = True


class ConfigurationDataType(ConfigurationDataTypeFields, Audited):
    pass


class DistributorConfigurationFields(DomainModel):
    distributor_id: UUID | None = None
    agency_id: UUID | None = None
    agent_id: UUID | None = None
    scope_id: UUID | None = None
    config_key: str = Field(min_length=1, max_length=255)
    config_value: str | None = None
    data_type_id: UUID | None = None
    category: str | None = Field(default=None, max_length=100)
    description: str | None = Field(default=None, max_length=1000)
    is_sensitive: bool = False
    is_overridable: bool = True
    is_active: bool = True
    effective_from: datetime | None = None
    effective_until: datetime | None = None


class DistributorConfiguration(DistributorConfigurationFields, Audited):
    pass


# --- Terms & conditions ---


class TermsAndConditionsTemplateFields(DomainModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=1000)
    category: TemplateCategory
    template_content: str = Field(min_length=1)
    variables: str | None = None  # JSON object: name -> {"type": ..., "required": ...}
    version: str = Field(min_length=1, max_length=50)
    is_default: bool = False
    is_active: bool = True
    approval_required: bool = True
    auto_renewal: bool = False
    renewal_period_months: int | None = Field(default=None, ge=1)


class TermsAndConditionsTemplate(TermsAndConditionsTemplateFields, Audited):
    pass


class DistributorTermsAndConditionsFields(DomainModel):
    distributor_id: UUID | None = None
    template_id: UUID | None = None
    title: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1)
    version: str = Field(min_length=1, max_length=50)
    effective_date: datetime
    expiration_date: datetime | None = None
    signed_date: datetime | None = None
    signed_by: UUID | None = None
    status: TermsStatus = "DRAFT"
    is_active: bool = True
    notes: str | None = Field(default=None, max_length=1000)


class DistributorTermsAndConditions(DistributorTermsAndConditionsFields, Audited):
    pass
