"""
CRUD component - Shared entry points for managed resources.

Shell Layer - handles I/O and error conversion.
"""

from __future__ import annotations

from typing import Any

from ._impl import EntityService
from .models import (
    CreateInput,
    DeleteInput,
    FilterInput,
    FilterOutput,
    GetInput,
    ListOutput,
    OperationOutput,
    SetFlagInput,
    UpdateInput,
)


def run_create(input_data: CreateInput, service: EntityService[Any]) -> OperationOutput:
    """Create a new entity."""
    entity, errors = service.create(
        input_data.data,
        scope=input_data.scope,
        actor_id=input_data.actor_id,
    )

    return OperationOutput(
        entity=entity,
        errors=errors,
        success=entity is not None,
    )


def run_update(input_data: UpdateInput, service: EntityService[Any]) -> OperationOutput:
    """Update an existing entity."""
    entity, errors = service.update(
        input_data.entity_id,
        input_data.data,
        scope=input_data.scope,
        actor_id=input_data.actor_id,
    )

    return OperationOutput(
        entity=entity,
        errors=errors,
        success=entity is not None,
    )


def run_set_flag(input_data: SetFlagInput, service: EntityService[Any]) -> OperationOutput:
    """Toggle a boolean column on an entity."""
    entity, errors = service.set_flag(
        input_data.entity_id,
        input_data.flag,
        input_data.value,
        scope=input_data.scope,
        actor_id=input_data.actor_id,
    )

    return OperationOutput(
        entity=entity,
        errors=errors,
        success=entity is not None,
    )


def run_delete(input_data: DeleteInput, service: EntityService[Any]) -> OperationOutput:
    """Delete an entity."""
    success, errors = service.delete(
        input_data.entity_id,
        scope=input_data.scope,
        actor_id=input_data.actor_id,
    )

    return OperationOutput(
        entity=None,
        errors=errors,
        success=success,
    )


def run_get(input_data: GetInput, service: EntityService[Any]) -> OperationOutput:
    """Get an entity by ID."""
    entity = service.get_by_id(input_data.entity_id, scope=input_data.scope)

    if entity is None:
        return OperationOutput(
            entity=None,
            errors=[service.not_found(input_data.entity_id)],
            success=False,
        )

    return OperationOutput(
        entity=entity,
        errors=[],
        success=True,
    )


def run_filter(input_data: FilterInput, service: EntityService[Any]) -> FilterOutput:
    """One page of entities matching the filters."""
    page, errors = service.filter(input_data)

    return FilterOutput(
        page=page,
        errors=errors,
        success=page is not None,
    )


def run_list(
    service: EntityService[Any],
    scope: dict[str, Any] | None = None,
    **criteria: Any,
) -> ListOutput:
    """List entities in scope matching the criteria."""
    items = service.list_by(scope, **criteria)
    return ListOutput(
        items=items,
        total=len(items),
    )
