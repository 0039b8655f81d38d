"""
TemplateService - Terms and conditions templates.

Template names are unique and each category has at most one default
template; making a template the default first clears the flag on every
other template of its category.

Functional Core - business logic against repository ports.
"""

from __future__ import annotations

from uuid import UUID

from src.components.crud import EntityService, EntityValidationError, ExclusiveFlag
from src.components.terms_generation.engine import VariableSchemaError, parse_variable_schema
from src.domain.entities import TemplateCategory, TermsAndConditionsTemplate


class TemplateService(EntityService[TermsAndConditionsTemplate]):
    """Template service."""

    model = TermsAndConditionsTemplate
    label = "template"
    unique_together = (("name",),)
    exclusive_flags = (ExclusiveFlag("is_default", group_by=("category",)),)

    def validate(
        self,
        entity: TermsAndConditionsTemplate,
        existing: TermsAndConditionsTemplate | None,
    ) -> list[EntityValidationError]:
        try:
            parse_variable_schema(entity.variables)
        except VariableSchemaError as e:
            return [
                EntityValidationError(
                    code="template_variables_invalid",
                    message=str(e),
                    field="variables",
                )
            ]
        return []

    def get_by_name(self, name: str) -> TermsAndConditionsTemplate | None:
        found = self.list_by(name=name)
        return found[0] if found else None

    def list_by_category(
        self, category: TemplateCategory, active_only: bool = False
    ) -> list[TermsAndConditionsTemplate]:
        if active_only:
            return self.list_by(category=category, is_active=True)
        return self.list_by(category=category)

    def list_defaults(self) -> list[TermsAndConditionsTemplate]:
        """Active default templates, at most one per category."""
        return self.list_by(is_default=True, is_active=True)

    def get_default(self, category: TemplateCategory) -> TermsAndConditionsTemplate | None:
        found = self.list_by(category=category, is_default=True, is_active=True)
        return found[0] if found else None

    def set_default(
        self, template_id: UUID, actor_id: UUID | None = None
    ) -> tuple[TermsAndConditionsTemplate | None, list[EntityValidationError]]:
        return self.set_flag(template_id, "is_default", True, actor_id=actor_id)

    def remove_default(
        self, template_id: UUID, actor_id: UUID | None = None
    ) -> tuple[TermsAndConditionsTemplate | None, list[EntityValidationError]]:
        return self.set_flag(template_id, "is_default", False, actor_id=actor_id)
