"""
CRUD component - Port interfaces.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Protocol, TypeVar
from uuid import UUID

from pydantic import BaseModel

E = TypeVar("E", bound=BaseModel)


class EntityRepoPort(Protocol[E]):
    """Repository interface for one entity table."""

    def save(self, entity: E) -> E:
        """Insert or update entity."""
        ...

    def get_by_id(self, entity_id: UUID) -> E | None:
        """Get entity by ID."""
        ...

    def delete(self, entity_id: UUID) -> None:
        """Delete entity."""
        ...

    def find_by(self, **criteria: Any) -> list[E]:
        """All entities whose columns equal the given values."""
        ...

    def exists_by(self, **criteria: Any) -> bool:
        """Whether any entity matches the given values."""
        ...

    def filter(
        self,
        criteria: dict[str, Any],
        *,
        limit: int,
        offset: int,
        sort_by: str,
        descending: bool,
    ) -> tuple[list[E], int]:
        """One page of matching entities plus the total match count."""
        ...


class ClockPort(Protocol):
    """Clock interface."""

    def now(self) -> datetime:
        """Current time as naive UTC."""
        ...
