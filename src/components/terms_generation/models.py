"""
Terms generation component - Data models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

from src.components.crud import EntityValidationError
from src.domain.entities import DistributorTermsAndConditions

# --- Input Models ---


@dataclass(frozen=True)
class GenerateInput:
    """Input for rendering a template into a distributor's document."""

    template_id: UUID
    distributor_id: UUID
    variables: dict[str, Any] = field(default_factory=dict)
    actor_id: UUID | None = None


@dataclass(frozen=True)
class PreviewInput:
    """Input for rendering a template without storing anything."""

    template_id: UUID
    variables: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class RenewInput:
    """Input for renewing a document."""

    terms_id: UUID
    distributor_id: UUID | None = None
    actor_id: UUID | None = None


# --- Output Models ---


@dataclass
class GenerationOutput:
    """Output from generation and renewal."""

    document: DistributorTermsAndConditions | None
    errors: list[EntityValidationError]
    success: bool


@dataclass
class PreviewOutput:
    """Rendered content plus the placeholders left unresolved."""

    content: str | None
    unresolved: list[str]
    errors: list[EntityValidationError]
    success: bool


@dataclass
class RenewalCheckOutput:
    """Output from a renewal check."""

    needs_renewal: bool
    errors: list[EntityValidationError]
    success: bool


@dataclass
class RenewalReport:
    """Outcome of a renewal sweep."""

    renewed: list[DistributorTermsAndConditions] = field(default_factory=list)
    skipped: list[UUID] = field(default_factory=list)
    failed: dict[UUID, list[EntityValidationError]] = field(default_factory=dict)
