"""
SimulationService - Credit simulations run by a distributor's agents.
"""

from __future__ import annotations

from uuid import UUID

from src.components.crud import EntityService, EntityValidationError
from src.domain.entities import DistributorSimulation


class SimulationService(EntityService[DistributorSimulation]):
    model = DistributorSimulation
    label = "simulation"
    scope_fields = ("distributor_id",)

    def update_status(
        self,
        simulation_id: UUID,
        status: str,
        scope: dict[str, UUID] | None = None,
        actor_id: UUID | None = None,
    ) -> tuple[DistributorSimulation | None, list[EntityValidationError]]:
        return self.update(
            simulation_id, {"simulation_status": status}, scope=scope, actor_id=actor_id
        )
