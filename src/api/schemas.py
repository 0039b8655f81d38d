from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

from src.domain.entities import LendingContract, Shipment, ShipmentStatus, TermsStatus

T = TypeVar("T")


# --- Filtering & paging ---
class PaginationRequest(BaseModel):
    page: int = Field(default=0, ge=0)
    size: int | None = Field(default=None, ge=1)
    sort_by: str | None = None
    sort_direction: str = Field(default="DESC", pattern=r"^(?i:asc|desc)$")

    @property
    def descending(self) -> bool:
        return self.sort_direction.upper() == "DESC"


class FilterRequest(BaseModel):
    filters: dict[str, Any] = Field(default_factory=dict)
    pagination: PaginationRequest = Field(default_factory=PaginationRequest)


class PaginationResponse(BaseModel, Generic[T]):
    content: list[T]
    total_elements: int
    total_pages: int
    current_page: int
    page_size: int


# --- Errors ---
class ErrorDetail(BaseModel):
    code: str
    message: str
    field: str | None = None


# --- Actions ---
class ShipmentStatusRequest(BaseModel):
    status: ShipmentStatus


class TermsStatusRequest(BaseModel):
    status: TermsStatus


class SimulationStatusRequest(BaseModel):
    status: str = Field(min_length=1, max_length=50)


class LendingApprovalResponse(BaseModel):
    contract: LendingContract
    shipment: Shipment
