"""
Lending component - Port interfaces.
"""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.components.crud import EntityRepoPort
from src.domain.entities import LendingConfiguration


class LendingConfigurationRepoPort(EntityRepoPort[LendingConfiguration], Protocol):
    """Lending configuration repository."""

    def find_active_by_distributor(self, distributor_id: UUID) -> list[LendingConfiguration]:
        """Active configurations of the distributor's products."""
        ...
