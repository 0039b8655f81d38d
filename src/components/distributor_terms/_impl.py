"""
DistributorTermsService - Terms and conditions documents held by distributors.

Handles the document life cycle: draft, signature, expiry lookups.

Functional Core - business logic against repository ports.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Any
from uuid import UUID

from src.components.crud import EntityService, EntityValidationError
from src.domain.entities import DistributorTermsAndConditions, TermsStatus
from src.rules.models import TermsRules

from .ports import DistributorTermsRepoPort

logger = logging.getLogger(__name__)

UNSIGNABLE_STATUSES: frozenset[TermsStatus] = frozenset({"EXPIRED", "TERMINATED"})


class DistributorTermsService(EntityService[DistributorTermsAndConditions]):
    """Distributor terms service."""

    model = DistributorTermsAndConditions
    label = "terms"
    scope_fields = ("distributor_id",)

    def __init__(
        self,
        repo: DistributorTermsRepoPort,
        rules: TermsRules | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(repo, **kwargs)
        self._terms_repo = repo
        self._rules = rules or TermsRules()

    def validate(
        self,
        entity: DistributorTermsAndConditions,
        existing: DistributorTermsAndConditions | None,
    ) -> list[EntityValidationError]:
        if entity.expiration_date is not None and entity.expiration_date <= entity.effective_date:
            return [
                EntityValidationError(
                    code="terms_period_invalid",
                    message="expiration_date must be after effective_date",
                    field="expiration_date",
                )
            ]
        return []

    def update_status(
        self,
        terms_id: UUID,
        status: TermsStatus,
        scope: dict[str, UUID] | None = None,
        actor_id: UUID | None = None,
    ) -> tuple[DistributorTermsAndConditions | None, list[EntityValidationError]]:
        return self.update(terms_id, {"status": status}, scope=scope, actor_id=actor_id)

    def sign(
        self,
        terms_id: UUID,
        scope: dict[str, UUID] | None = None,
        actor_id: UUID | None = None,
    ) -> tuple[DistributorTermsAndConditions | None, list[EntityValidationError]]:
        """
        Record the distributor's signature.

        Returns:
            Tuple of (document, errors). Expired or terminated documents
            cannot be signed.
        """
        document = self.get_by_id(terms_id, scope)
        if document is None:
            return None, [self.not_found(terms_id)]
        if document.status in UNSIGNABLE_STATUSES:
            return None, [
                EntityValidationError(
                    code="terms_status_conflict",
                    message=f"Terms in status {document.status} cannot be signed",
                    field="status",
                )
            ]

        signed, errors = self.update(
            terms_id,
            {"status": "SIGNED", "signed_date": self.now(), "signed_by": actor_id},
            scope=scope,
            actor_id=actor_id,
        )
        if signed is not None:
            logger.info("Terms %s signed for distributor %s", signed.id, signed.distributor_id)
        return signed, errors

    def has_active_signed(self, distributor_id: UUID) -> bool:
        return self.exists_by({"distributor_id": distributor_id}, status="SIGNED", is_active=True)

    def latest_active(self, distributor_id: UUID) -> DistributorTermsAndConditions | None:
        """Most recently created active document of the distributor."""
        documents = self.list_by({"distributor_id": distributor_id}, is_active=True)
        if not documents:
            return None
        return max(documents, key=lambda d: d.created_at or datetime.min)

    def expiring_before(
        self, before: datetime | None = None, distributor_id: UUID | None = None
    ) -> list[DistributorTermsAndConditions]:
        """Active documents expiring before `before` (default: end of the renewal window)."""
        if before is None:
            before = self.now() + timedelta(days=self._rules.renewal_window_days)
        return self._terms_repo.find_expiring_before(before, distributor_id=distributor_id)
