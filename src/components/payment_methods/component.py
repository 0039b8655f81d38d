"""
Payment methods component - Primary method selection.

Shell Layer - handles I/O and error conversion.
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from src.components.crud import OperationOutput

from ._impl import PaymentMethodService


@dataclass(frozen=True)
class SetPrimaryInput:
    """Input for marking a payment method primary."""

    agency_id: UUID
    method_id: UUID
    actor_id: UUID | None = None


def run_set_primary(input_data: SetPrimaryInput, service: PaymentMethodService) -> OperationOutput:
    """Make the method its agency's primary payment method."""
    method, errors = service.set_primary(
        input_data.method_id,
        scope={"agency_id": input_data.agency_id},
        actor_id=input_data.actor_id,
    )

    return OperationOutput(
        entity=method,
        errors=errors,
        success=method is not None,
    )
