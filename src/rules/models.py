from pydantic import BaseModel, Field


class ProjectRules(BaseModel):
    slug: str
    rules_version: str


class PaginationRules(BaseModel):
    default_size: int = Field(default=10, ge=1)
    max_size: int = Field(default=100, ge=1)


class TermsRules(BaseModel):
    renewal_window_days: int = Field(default=30, ge=0)
    date_format: str = "%Y-%m-%d"
    datetime_format: str = "%Y-%m-%d %H:%M:%S"


class ShipmentRules(BaseModel):
    tracking_prefix: str = "SHIP-"
    tracking_length: int = Field(default=8, ge=4, le=32)


class CorsRules(BaseModel):
    allowed_origins: list[str] = []


class OpsRules(BaseModel):
    required_env: list[str] = []
    run_migrations_on_startup: bool = True


class Rules(BaseModel):
    project: ProjectRules
    pagination: PaginationRules = PaginationRules()
    terms: TermsRules = TermsRules()
    shipments: ShipmentRules = ShipmentRules()
    cors: CorsRules = CorsRules()
    ops: OpsRules = OpsRules()
