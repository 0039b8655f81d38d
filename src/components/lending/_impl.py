"""
Lending services - Lending types, configurations and leasing contracts.

Approving a contract opens a pending shipment for the leased product.

Functional Core - business logic against repository ports.
"""

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from src.components.crud import (
    EntityRepoPort,
    EntityService,
    EntityValidationError,
    ExclusiveFlag,
)
from src.components.shipments import ShipmentService
from src.domain.entities import (
    LendingConfiguration,
    LendingContract,
    LendingContractStatus,
    LendingType,
    Shipment,
)

from .ports import LendingConfigurationRepoPort

logger = logging.getLogger(__name__)

APPROVABLE_STATUSES: frozenset[LendingContractStatus] = frozenset({"DRAFT", "PENDING"})


class LendingTypeService(EntityService[LendingType]):
    model = LendingType
    label = "lending_type"
    unique_together = (("code",),)

    def get_by_code(self, code: str) -> LendingType | None:
        found = self.list_by(code=code)
        return found[0] if found else None


class LendingConfigurationService(EntityService[LendingConfiguration]):
    """Lending configurations; at most one default per product."""

    model = LendingConfiguration
    label = "lending_configuration"
    exclusive_flags = (ExclusiveFlag("is_default", group_by=("product_id",)),)

    def __init__(self, repo: LendingConfigurationRepoPort, **kwargs: Any) -> None:
        super().__init__(repo, **kwargs)
        self._config_repo = repo

    def validate(
        self, entity: LendingConfiguration, existing: LendingConfiguration | None
    ) -> list[EntityValidationError]:
        errors: list[EntityValidationError] = []
        low, high = entity.min_term_months, entity.max_term_months
        default = entity.default_term_months

        if low is not None and high is not None and low > high:
            errors.append(
                EntityValidationError(
                    code="term_range_invalid",
                    message="min_term_months cannot exceed max_term_months",
                    field="min_term_months",
                )
            )
        if (low is not None and default < low) or (high is not None and default > high):
            errors.append(
                EntityValidationError(
                    code="default_term_out_of_range",
                    message="default_term_months must lie between the minimum and maximum terms",
                    field="default_term_months",
                )
            )
        if (
            entity.min_down_payment_percentage is not None
            and entity.default_down_payment_percentage is not None
            and entity.default_down_payment_percentage < entity.min_down_payment_percentage
        ):
            errors.append(
                EntityValidationError(
                    code="down_payment_out_of_range",
                    message="Default down payment is below the minimum",
                    field="default_down_payment_percentage",
                )
            )
        return errors

    def list_for_distributor(self, distributor_id: UUID) -> list[LendingConfiguration]:
        return self._config_repo.find_active_by_distributor(distributor_id)


class LendingContractService(EntityService[LendingContract]):
    """Lending (leasing) contract service."""

    model = LendingContract
    label = "lending_contract"

    def __init__(
        self,
        repo: EntityRepoPort[LendingContract],
        shipments: ShipmentService,
        **kwargs: Any,
    ) -> None:
        super().__init__(repo, **kwargs)
        self._shipments = shipments

    def validate(
        self, entity: LendingContract, existing: LendingContract | None
    ) -> list[EntityValidationError]:
        if entity.end_date <= entity.start_date:
            return [
                EntityValidationError(
                    code="contract_period_invalid",
                    message="end_date must be after start_date",
                    field="end_date",
                )
            ]
        return []

    def approve(
        self, contract_id: UUID, actor_id: UUID | None = None
    ) -> tuple[tuple[LendingContract, Shipment] | None, list[EntityValidationError]]:
        """
        Approve a contract and open its shipment.

        Returns:
            Tuple of ((contract, shipment), errors). None if the contract is
            missing or not in an approvable status.
        """
        contract = self.get_by_id(contract_id)
        if contract is None:
            return None, [self.not_found(contract_id)]

        if contract.status not in APPROVABLE_STATUSES:
            return None, [
                EntityValidationError(
                    code="lending_contract_status_conflict",
                    message=f"Contract in status {contract.status} cannot be approved",
                    field="status",
                )
            ]

        approved, errors = self.update(
            contract_id,
            {"status": "APPROVED", "approval_date": self.now(), "approved_by": actor_id},
            actor_id=actor_id,
        )
        if approved is None:
            return None, errors

        shipment, errors = self._shipments.create_for_contract(
            approved.id, approved.product_id, actor_id=actor_id
        )
        if shipment is None:
            self._repo.save(contract)
            logger.warning("Approval of lending contract %s rolled back: %s", contract_id, errors)
            return None, errors

        logger.info(
            "Approved lending contract %s; shipment %s opened",
            approved.id,
            shipment.tracking_number,
        )
        return (approved, shipment), []
