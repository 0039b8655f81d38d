"""
Territory and operation services.

A distributor may operate in a region when it has an active operation
record for that country and administrative division.
"""

from __future__ import annotations

from uuid import UUID

from src.components.crud import EntityService, EntityValidationError
from src.domain.entities import DistributorAuthorizedTerritory, DistributorOperation


class TerritoryService(EntityService[DistributorAuthorizedTerritory]):
    model = DistributorAuthorizedTerritory
    label = "territory"
    scope_fields = ("distributor_id",)

    def validate(
        self,
        entity: DistributorAuthorizedTerritory,
        existing: DistributorAuthorizedTerritory | None,
    ) -> list[EntityValidationError]:
        if (
            entity.authorized_from
            and entity.authorized_until
            and entity.authorized_until < entity.authorized_from
        ):
            return [
                EntityValidationError(
                    code="authorization_period_invalid",
                    message="authorized_until cannot precede authorized_from",
                    field="authorized_until",
                )
            ]
        return []


class OperationService(EntityService[DistributorOperation]):
    model = DistributorOperation
    label = "operation"
    scope_fields = ("distributor_id",)

    def can_operate(
        self, distributor_id: UUID, country_id: UUID, administrative_division_id: UUID
    ) -> bool:
        """Whether an active operation covers the given region."""
        return self.exists_by(
            {"distributor_id": distributor_id},
            country_id=country_id,
            administrative_division_id=administrative_division_id,
            is_active=True,
        )
