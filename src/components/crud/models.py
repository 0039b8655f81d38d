"""
CRUD component - Data models.

Inputs and outputs shared by every managed resource.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from math import ceil
from typing import Any
from uuid import UUID

# --- Validation Errors ---


@dataclass(frozen=True)
class EntityValidationError:
    """Entity validation error."""

    code: str
    message: str
    field: str | None = None


# --- Input Models ---


@dataclass(frozen=True)
class FilterInput:
    """Equality filters plus paging for a resource listing."""

    filters: dict[str, Any] = field(default_factory=dict)
    page: int = 0
    size: int | None = None
    sort_by: str | None = None
    descending: bool = True
    scope: dict[str, UUID] = field(default_factory=dict)


@dataclass(frozen=True)
class CreateInput:
    """Input for creating an entity."""

    data: dict[str, Any]
    scope: dict[str, UUID] = field(default_factory=dict)
    actor_id: UUID | None = None


@dataclass(frozen=True)
class UpdateInput:
    """Input for updating an entity. Only keys present in data are applied."""

    entity_id: UUID
    data: dict[str, Any]
    scope: dict[str, UUID] = field(default_factory=dict)
    actor_id: UUID | None = None


@dataclass(frozen=True)
class DeleteInput:
    """Input for deleting an entity."""

    entity_id: UUID
    scope: dict[str, UUID] = field(default_factory=dict)
    actor_id: UUID | None = None


@dataclass(frozen=True)
class GetInput:
    """Input for getting an entity."""

    entity_id: UUID
    scope: dict[str, UUID] = field(default_factory=dict)


@dataclass(frozen=True)
class SetFlagInput:
    """Input for toggling a boolean column (activate, set-primary, ...)."""

    entity_id: UUID
    flag: str
    value: bool
    scope: dict[str, UUID] = field(default_factory=dict)
    actor_id: UUID | None = None


# --- Output Models ---


@dataclass
class OperationOutput:
    """Output from a single-entity operation."""

    entity: Any | None
    errors: list[EntityValidationError]
    success: bool


@dataclass
class ListOutput:
    """Output from an unpaged listing."""

    items: list[Any]
    total: int


@dataclass
class PageOutput:
    """One page of a filtered listing."""

    items: list[Any]
    total: int
    page: int
    size: int

    @property
    def total_pages(self) -> int:
        return ceil(self.total / self.size) if self.size else 0


@dataclass
class FilterOutput:
    """Output from a filter operation."""

    page: PageOutput | None
    errors: list[EntityValidationError]
    success: bool
