"""
Distributor terms component - Port interfaces.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol
from uuid import UUID

from src.components.crud import EntityRepoPort
from src.domain.entities import DistributorTermsAndConditions


class DistributorTermsRepoPort(EntityRepoPort[DistributorTermsAndConditions], Protocol):
    """Terms document repository."""

    def find_expiring_before(
        self, before: datetime, distributor_id: UUID | None = None
    ) -> list[DistributorTermsAndConditions]:
        """Active documents whose expiration date is earlier than `before`."""
        ...
