"""
ShipmentService - Delivery of leased products.

Shipments without a tracking number get a generated one. Status changes
stamp the shipping and delivery dates the first time they are reached.

Functional Core - business logic against repository ports.
"""

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID, uuid4

from src.components.crud import EntityRepoPort, EntityService, EntityValidationError
from src.domain.entities import Shipment, ShipmentStatus
from src.rules.models import ShipmentRules

logger = logging.getLogger(__name__)


def generate_tracking_number(rules: ShipmentRules) -> str:
    """Prefix followed by upper-case hex characters, e.g. SHIP-3F2A9C1B."""
    return rules.tracking_prefix + uuid4().hex[: rules.tracking_length].upper()


class ShipmentService(EntityService[Shipment]):
    """Shipment service."""

    model = Shipment
    label = "shipment"
    unique_together = (("tracking_number",),)

    def __init__(
        self,
        repo: EntityRepoPort[Shipment],
        rules: ShipmentRules | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(repo, **kwargs)
        self._rules = rules or ShipmentRules()

    def prepare(self, entity: Shipment, existing: Shipment | None) -> Shipment:
        updates: dict[str, Any] = {}
        if not entity.tracking_number:
            updates["tracking_number"] = (
                existing.tracking_number
                if existing and existing.tracking_number
                else generate_tracking_number(self._rules)
            )
        if entity.status == "SHIPPED" and entity.shipping_date is None:
            updates["shipping_date"] = self.now()
        if entity.status == "DELIVERED" and entity.actual_delivery_date is None:
            updates["actual_delivery_date"] = self.now()
        return entity.model_copy(update=updates) if updates else entity

    def validate(self, entity: Shipment, existing: Shipment | None) -> list[EntityValidationError]:
        if (
            entity.shipping_date
            and entity.actual_delivery_date
            and entity.actual_delivery_date < entity.shipping_date
        ):
            return [
                EntityValidationError(
                    code="delivery_date_invalid",
                    message="Delivery cannot precede shipping",
                    field="actual_delivery_date",
                )
            ]
        return []

    def update_status(
        self, shipment_id: UUID, status: ShipmentStatus, actor_id: UUID | None = None
    ) -> tuple[Shipment | None, list[EntityValidationError]]:
        """Move a shipment to a new status."""
        shipment, errors = self.update(shipment_id, {"status": status}, actor_id=actor_id)
        if shipment is not None:
            logger.info("Shipment %s is now %s", shipment.tracking_number, status)
        return shipment, errors

    def get_by_tracking_number(self, tracking_number: str) -> Shipment | None:
        found = self.list_by(tracking_number=tracking_number)
        return found[0] if found else None

    def create_for_contract(
        self, lending_contract_id: UUID, product_id: UUID, actor_id: UUID | None = None
    ) -> tuple[Shipment | None, list[EntityValidationError]]:
        """Open a pending shipment for an approved lending contract."""
        return self.create(
            {"lending_contract_id": lending_contract_id, "product_id": product_id},
            actor_id=actor_id,
        )
