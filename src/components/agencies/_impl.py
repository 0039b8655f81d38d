"""
Agency and agent services.

Functional Core - business logic against repository ports.
"""

from __future__ import annotations

from typing import Any

from src.components.crud import (
    EntityRepoPort,
    EntityService,
    EntityValidationError,
    ExclusiveFlag,
)
from src.domain.entities import (
    AgentRole,
    DistributorAgency,
    DistributorAgent,
    DistributorAgentAgency,
)


class AgencyService(EntityService[DistributorAgency]):
    model = DistributorAgency
    label = "agency"
    scope_fields = ("distributor_id",)
    unique_together = (("distributor_id", "code"),)

    def validate(
        self, entity: DistributorAgency, existing: DistributorAgency | None
    ) -> list[EntityValidationError]:
        if entity.opened_at and entity.closed_at and entity.closed_at < entity.opened_at:
            return [
                EntityValidationError(
                    code="agency_dates_invalid",
                    message="Agency cannot close before it opens",
                    field="closed_at",
                )
            ]
        return []


class AgentService(EntityService[DistributorAgent]):
    model = DistributorAgent
    label = "agent"
    scope_fields = ("distributor_id",)

    def validate(
        self, entity: DistributorAgent, existing: DistributorAgent | None
    ) -> list[EntityValidationError]:
        if (
            entity.hire_date
            and entity.termination_date
            and entity.termination_date < entity.hire_date
        ):
            return [
                EntityValidationError(
                    code="agent_dates_invalid",
                    message="Termination date cannot precede hire date",
                    field="termination_date",
                )
            ]
        return []


class AgentRoleService(EntityService[AgentRole]):
    model = AgentRole
    label = "agent_role"
    unique_together = (("code",),)


class AgentAgencyService(EntityService[DistributorAgentAgency]):
    """Assignments of agents to agencies; an agent has at most one primary agency."""

    model = DistributorAgentAgency
    label = "agent_agency"
    scope_fields = ("distributor_id",)
    exclusive_flags = (ExclusiveFlag("is_primary_agency", group_by=("agent_id",)),)

    def __init__(
        self,
        repo: EntityRepoPort[DistributorAgentAgency],
        agent_repo: EntityRepoPort[DistributorAgent],
        agency_repo: EntityRepoPort[DistributorAgency],
        role_repo: EntityRepoPort[AgentRole],
        **kwargs: Any,
    ) -> None:
        super().__init__(repo, **kwargs)
        self._agent_repo = agent_repo
        self._agency_repo = agency_repo
        self._role_repo = role_repo

    def validate(
        self, entity: DistributorAgentAgency, existing: DistributorAgentAgency | None
    ) -> list[EntityValidationError]:
        errors: list[EntityValidationError] = []

        agent = self._agent_repo.get_by_id(entity.agent_id)
        if agent is None or agent.distributor_id != entity.distributor_id:
            errors.append(
                EntityValidationError(
                    code="agent_unknown",
                    message=f"Agent {entity.agent_id} does not belong to this distributor",
                    field="agent_id",
                )
            )

        agency = self._agency_repo.get_by_id(entity.agency_id)
        if agency is None or agency.distributor_id != entity.distributor_id:
            errors.append(
                EntityValidationError(
                    code="agency_unknown",
                    message=f"Agency {entity.agency_id} does not belong to this distributor",
                    field="agency_id",
                )
            )

        if self._role_repo.get_by_id(entity.role_id) is None:
            errors.append(
                EntityValidationError(
                    code="role_unknown",
                    message=f"Agent role {entity.role_id} does not exist",
                    field="role_id",
                )
            )

        return errors
