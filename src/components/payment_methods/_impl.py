"""
PaymentMethodService - Disbursement instruments configured per agency.

An agency has at most one primary payment method. Whenever a method
becomes primary (on create, on update or through set_primary) every other
primary method of the same agency is unset first.

Functional Core - business logic against repository ports.
"""

from __future__ import annotations

from typing import Any
from uuid import UUID

from src.components.crud import (
    EntityRepoPort,
    EntityService,
    EntityValidationError,
    ExclusiveFlag,
)
from src.domain.entities import AgencyPaymentMethod, DistributorAgency


class PaymentMethodService(EntityService[AgencyPaymentMethod]):
    """Payment method service."""

    model = AgencyPaymentMethod
    label = "payment_method"
    scope_fields = ("agency_id",)
    exclusive_flags = (ExclusiveFlag("is_primary", group_by=("agency_id",)),)

    def __init__(
        self,
        repo: EntityRepoPort[AgencyPaymentMethod],
        agency_repo: EntityRepoPort[DistributorAgency],
        **kwargs: Any,
    ) -> None:
        super().__init__(repo, **kwargs)
        self._agency_repo = agency_repo

    def create(
        self,
        data: dict[str, Any],
        scope: dict[str, UUID] | None = None,
        actor_id: UUID | None = None,
    ) -> tuple[AgencyPaymentMethod | None, list[EntityValidationError]]:
        agency_id = (scope or {}).get("agency_id")
        if agency_id is not None and self._agency_repo.get_by_id(agency_id) is None:
            return None, [
                EntityValidationError(
                    code="agency_not_found",
                    message=f"Agency with ID {agency_id} not found",
                )
            ]
        return super().create(data, scope=scope, actor_id=actor_id)

    def validate(
        self, entity: AgencyPaymentMethod, existing: AgencyPaymentMethod | None
    ) -> list[EntityValidationError]:
        if entity.is_primary and not entity.is_active:
            return [
                EntityValidationError(
                    code="primary_method_inactive",
                    message="An inactive payment method cannot be primary",
                    field="is_primary",
                )
            ]
        return []

    def set_primary(
        self,
        method_id: UUID,
        scope: dict[str, UUID] | None = None,
        actor_id: UUID | None = None,
    ) -> tuple[AgencyPaymentMethod | None, list[EntityValidationError]]:
        """
        Make a method the agency's primary one.

        Returns:
            Tuple of (method, errors). Method is None if not found in the agency.
        """
        return self.set_flag(method_id, "is_primary", True, scope=scope, actor_id=actor_id)

    def get_primary(self, agency_id: UUID) -> AgencyPaymentMethod | None:
        methods = self.list_by({"agency_id": agency_id}, is_primary=True)
        return methods[0] if methods else None
