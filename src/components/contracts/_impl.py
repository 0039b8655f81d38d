"""
DistributorContractService - Commercial agreements with distributors.
"""

from __future__ import annotations

from src.components.crud import EntityService, EntityValidationError
from src.domain.entities import DistributorContract


class DistributorContractService(EntityService[DistributorContract]):
    model = DistributorContract
    label = "contract"
    scope_fields = ("distributor_id",)
    unique_together = (("distributor_id", "contract_number"),)

    def validate(
        self, entity: DistributorContract, existing: DistributorContract | None
    ) -> list[EntityValidationError]:
        if entity.start_date and entity.end_date and entity.end_date < entity.start_date:
            return [
                EntityValidationError(
                    code="contract_period_invalid",
                    message="end_date cannot precede start_date",
                    field="end_date",
                )
            ]
        return []
