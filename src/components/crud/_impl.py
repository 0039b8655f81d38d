"""
EntityService - Generic lookup/save/delete for managed entities.

Every resource of the service shares the same life cycle: create with
server-side identity and bookkeeping columns, partial update that keeps the
creation columns, delete, get and paged equality filtering. Resource
services subclass EntityService and declare their model, parent scope,
uniqueness constraints and exclusive flags; extra rules go in the
prepare/validate/after_save hooks.

Functional Core - business logic against repository ports.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, ClassVar, Generic
from uuid import UUID

from pydantic import TypeAdapter, ValidationError

from src.rules.models import PaginationRules

from .models import EntityValidationError, FilterInput, PageOutput
from .ports import ClockPort, E, EntityRepoPort

logger = logging.getLogger(__name__)

PROTECTED_FIELDS = frozenset({"id", "created_at", "created_by", "updated_at", "updated_by"})


@dataclass(frozen=True)
class ExclusiveFlag:
    """
    A boolean column that may be true for at most one row per group.

    E.g. one primary payment method per agency:
    ExclusiveFlag("is_primary", group_by=("agency_id",)).
    """

    flag: str
    group_by: tuple[str, ...]


class _UTCClock:
    def now(self) -> datetime:
        return datetime.now(UTC).replace(tzinfo=None)


def errors_from_validation(exc: ValidationError) -> list[EntityValidationError]:
    """Convert pydantic errors into entity validation errors."""
    return [
        EntityValidationError(
            code="invalid_field",
            message=str(err["msg"]),
            field=".".join(str(part) for part in err["loc"]) or None,
        )
        for err in exc.errors()
    ]


class EntityService(Generic[E]):
    """
    Entity service.

    Subclasses set `model` and `label`; `label` prefixes error codes
    (`<label>_not_found`, `<label>_<field>_duplicate`).
    """

    model: ClassVar[type[Any]]
    label: ClassVar[str] = "entity"
    scope_fields: ClassVar[tuple[str, ...]] = ()
    unique_together: ClassVar[tuple[tuple[str, ...], ...]] = ()
    exclusive_flags: ClassVar[tuple[ExclusiveFlag, ...]] = ()
    default_sort: ClassVar[str] = "created_at"

    def __init__(
        self,
        repo: EntityRepoPort[E],
        clock: ClockPort | None = None,
        pagination: PaginationRules | None = None,
    ) -> None:
        """Initialize service."""
        self._repo = repo
        self._clock = clock or _UTCClock()
        self._pagination = pagination or PaginationRules()

    @property
    def repo(self) -> EntityRepoPort[E]:
        return self._repo

    def now(self) -> datetime:
        return self._clock.now()

    # --- Hooks ---

    def prepare(self, entity: E, existing: E | None) -> E:
        """Fill derived columns before validation."""
        return entity

    def validate(self, entity: E, existing: E | None) -> list[EntityValidationError]:
        """Cross-field and cross-row rules beyond the model constraints."""
        return []

    def after_save(self, entity: E, existing: E | None, actor_id: UUID | None) -> None:
        """Side effects once the entity is stored."""

    # --- Queries ---

    def get_by_id(self, entity_id: UUID, scope: dict[str, UUID] | None = None) -> E | None:
        """Get entity by ID; entities outside the scope are invisible."""
        entity = self._repo.get_by_id(entity_id)
        if entity is None or not self._in_scope(entity, scope):
            return None
        return entity

    def list_by(self, scope: dict[str, UUID] | None = None, **criteria: Any) -> list[E]:
        """All entities in scope matching the given column values."""
        return self._repo.find_by(**{**criteria, **(scope or {})})

    def exists_by(self, scope: dict[str, UUID] | None = None, **criteria: Any) -> bool:
        return self._repo.exists_by(**{**criteria, **(scope or {})})

    def filter(self, request: FilterInput) -> tuple[PageOutput | None, list[EntityValidationError]]:
        """
        Filter entities by column equality, one page at a time.

        Returns:
            Tuple of (page, errors). Page is None if a filter is invalid.
        """
        errors: list[EntityValidationError] = []
        criteria: dict[str, Any] = {}
        fields = self.model.model_fields

        for name, value in request.filters.items():
            if name not in fields:
                errors.append(
                    EntityValidationError(
                        code="filter_field_unknown",
                        message=f"Cannot filter {self.label} by '{name}'",
                        field=name,
                    )
                )
                continue
            if value is None:
                criteria[name] = None
                continue
            try:
                criteria[name] = TypeAdapter(fields[name].annotation).validate_python(value)
            except ValidationError:
                errors.append(
                    EntityValidationError(
                        code="filter_value_invalid",
                        message=f"Invalid value for filter '{name}'",
                        field=name,
                    )
                )

        sort_by = request.sort_by or self.default_sort
        if sort_by not in fields:
            errors.append(
                EntityValidationError(
                    code="sort_field_unknown",
                    message=f"Cannot sort {self.label} by '{sort_by}'",
                    field="sort_by",
                )
            )

        if request.page < 0:
            errors.append(
                EntityValidationError(
                    code="page_invalid", message="Page must be 0 or greater", field="page"
                )
            )

        if errors:
            return None, errors

        criteria.update(request.scope)
        size = min(request.size or self._pagination.default_size, self._pagination.max_size)
        items, total = self._repo.filter(
            criteria,
            limit=size,
            offset=request.page * size,
            sort_by=sort_by,
            descending=request.descending,
        )
        return PageOutput(items=items, total=total, page=request.page, size=size), []

    # --- Commands ---

    def create(
        self,
        data: dict[str, Any],
        scope: dict[str, UUID] | None = None,
        actor_id: UUID | None = None,
    ) -> tuple[E | None, list[EntityValidationError]]:
        """
        Create a new entity.

        Returns:
            Tuple of (entity, errors). Entity is None if validation fails.
        """
        payload = {k: v for k, v in data.items() if k not in PROTECTED_FIELDS}
        payload.update(scope or {})
        payload.update(self._stamp_created(actor_id))

        try:
            entity = self.model.model_validate(payload)
        except ValidationError as e:
            return None, errors_from_validation(e)

        entity = self.prepare(entity, None)
        errors = self.validate(entity, None) + self._check_unique(entity)
        if errors:
            return None, errors

        self._release_exclusive_flags(entity, actor_id)
        saved = self._repo.save(entity)
        self.after_save(saved, None, actor_id)
        return saved, []

    def update(
        self,
        entity_id: UUID,
        data: dict[str, Any],
        scope: dict[str, UUID] | None = None,
        actor_id: UUID | None = None,
    ) -> tuple[E | None, list[EntityValidationError]]:
        """
        Update an existing entity with the keys present in data.

        Returns:
            Tuple of (entity, errors). Entity is None if not found or validation fails.
        """
        existing = self.get_by_id(entity_id, scope)
        if existing is None:
            return None, [self.not_found(entity_id)]

        merged = existing.model_dump()
        merged.update({k: v for k, v in data.items() if k not in PROTECTED_FIELDS})
        merged.update(scope or {})
        merged.update(self._stamp_updated(actor_id))

        try:
            entity = self.model.model_validate(merged)
        except ValidationError as e:
            return None, errors_from_validation(e)

        entity = self.prepare(entity, existing)
        errors = self.validate(entity, existing) + self._check_unique(entity)
        if errors:
            return None, errors

        self._release_exclusive_flags(entity, actor_id)
        saved = self._repo.save(entity)
        self.after_save(saved, existing, actor_id)
        return saved, []

    def set_flag(
        self,
        entity_id: UUID,
        flag: str,
        value: bool,
        scope: dict[str, UUID] | None = None,
        actor_id: UUID | None = None,
    ) -> tuple[E | None, list[EntityValidationError]]:
        """Set one boolean column, honouring exclusive flags."""
        return self.update(entity_id, {flag: value}, scope=scope, actor_id=actor_id)

    def delete(
        self,
        entity_id: UUID,
        scope: dict[str, UUID] | None = None,
        actor_id: UUID | None = None,
    ) -> tuple[bool, list[EntityValidationError]]:
        """
        Delete an entity.

        Returns:
            Tuple of (success, errors).
        """
        entity = self.get_by_id(entity_id, scope)
        if entity is None:
            return False, [self.not_found(entity_id)]

        self._repo.delete(entity_id)
        return True, []

    # --- Helpers ---

    def not_found(self, entity_id: UUID) -> EntityValidationError:
        readable = self.label.replace("_", " ")
        return EntityValidationError(
            code=f"{self.label}_not_found",
            message=f"{readable.capitalize()} with ID {entity_id} not found",
        )

    def _in_scope(self, entity: E, scope: dict[str, UUID] | None) -> bool:
        return all(getattr(entity, key) == value for key, value in (scope or {}).items())

    def _stamp_created(self, actor_id: UUID | None) -> dict[str, Any]:
        if "created_at" not in self.model.model_fields:
            return {}
        return {"created_at": self.now(), "created_by": actor_id}

    def _stamp_updated(self, actor_id: UUID | None) -> dict[str, Any]:
        if "updated_at" not in self.model.model_fields:
            return {}
        return {"updated_at": self.now(), "updated_by": actor_id}

    def _check_unique(self, entity: E) -> list[EntityValidationError]:
        errors: list[EntityValidationError] = []
        for columns in self.unique_together:
            criteria = {column: getattr(entity, column) for column in columns}
            if any(value is None for value in criteria.values()):
                continue
            clashes = [other for other in self._repo.find_by(**criteria) if other.id != entity.id]
            if clashes:
                column = columns[-1]
                errors.append(
                    EntityValidationError(
                        code=f"{self.label}_{column}_duplicate",
                        message=(
                            f"{self.label.replace('_', ' ').capitalize()} with {column} "
                            f"'{criteria[column]}' already exists"
                        ),
                        field=column,
                    )
                )
        return errors

    def _release_exclusive_flags(self, entity: E, actor_id: UUID | None) -> None:
        # Find-and-unset: clear the flag on every other row of the group first.
        for exclusive in self.exclusive_flags:
            if not getattr(entity, exclusive.flag):
                continue
            group = {column: getattr(entity, column) for column in exclusive.group_by}
            for other in self._repo.find_by(**group, **{exclusive.flag: True}):
                if other.id == entity.id:
                    continue
                released = other.model_copy(
                    update={exclusive.flag: False, **self._stamp_updated(actor_id)}
                )
                self._repo.save(released)
                logger.info(
                    "Cleared %s on %s %s in favour of %s",
                    exclusive.flag,
                    self.label,
                    other.id,
                    entity.id,
                )
