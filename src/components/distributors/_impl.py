"""
Distributor services.

Every change to a distributor is written to its audit log.

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
from src.components.crud._impl import PROTECTED_FIELDS
from src.domain.entities import (
    AuditAction,
    Distributor,
    DistributorAuditLog,
    DistributorBranding,
)

logger = logging.getLogger(__name__)


class DistributorService(EntityService[Distributor]):
    model = Distributor
    label = "distributor"

    def __init__(
        self,
        repo: EntityRepoPort[Distributor],
        audit_repo: EntityRepoPort[DistributorAuditLog],
        **kwargs: Any,
    ) -> None:
        super().__init__(repo, **kwargs)
        self._audit_repo = audit_repo

    def after_save(
        self, entity: Distributor, existing: Distributor | None, actor_id: UUID | None
    ) -> None:
        if existing is None:
            self.record(entity.id, "CREATED", actor_id, {"name": entity.name})
            return

        changed = sorted(
            name
            for name in Distributor.model_fields
            if name not in PROTECTED_FIELDS and getattr(entity, name) != getattr(existing, name)
        )
        action: AuditAction = "UPDATED"
        if entity.terminated_at is not None and existing.terminated_at is None:
            action = "TERMINATED"
        self.record(entity.id, action, actor_id, {"changed": changed})

    def delete(
        self,
        entity_id: UUID,
        scope: dict[str, UUID] | None = None,
        actor_id: UUID | None = None,
    ) -> tuple[bool, list[EntityValidationError]]:
        existing = self.get_by_id(entity_id, scope)
        deleted, errors = super().delete(entity_id, scope=scope, actor_id=actor_id)
        if deleted and existing is not None:
            self.record(entity_id, "TERMINATED", actor_id, {"name": existing.name, "deleted": True})
        return deleted, errors

    def record(
        self,
        distributor_id: UUID,
        action: AuditAction,
        actor_id: UUID | None,
        metadata: dict[str, Any] | None = None,
    ) -> DistributorAuditLog:
        """Append an audit entry for a distributor."""
        entry = DistributorAuditLog(
            distributor_id=distributor_id,
            action=action,
            entity="Distributor",
            entity_id=str(distributor_id),
            metadata=metadata,
            user_id=actor_id,
            timestamp=self.now(),
        )
        logger.info("Distributor %s %s", distributor_id, action.lower())
        return self._audit_repo.save(entry)


class BrandingService(EntityService[DistributorBranding]):
    model = DistributorBranding
    label = "branding"
    scope_fields = ("distributor_id",)
    exclusive_flags = (ExclusiveFlag("is_default", group_by=("distributor_id",)),)


class AuditLogService(EntityService[DistributorAuditLog]):
    model = DistributorAuditLog
    label = "audit_log"
    scope_fields = ("distributor_id",)
    default_sort = "timestamp"

    def prepare(
        self, entity: DistributorAuditLog, existing: DistributorAuditLog | None
    ) -> DistributorAuditLog:
        if entity.timestamp is None:
            return entity.model_copy(update={"timestamp": self.now()})
        return entity
