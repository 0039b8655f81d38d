"""
TermsGenerationService - Renders templates into distributor documents.

Generation merges the distributor's default variables with the caller's,
validates the result against the template schema and stores the rendered
document as a draft. Renewal re-generates a document from its template
once it enters the renewal window.

Functional Core - business logic against repository ports.
"""

from __future__ import annotations

import logging
from datetime import datetime, time
from typing import Any
from uuid import UUID

from src.components.crud import ClockPort, EntityRepoPort, EntityValidationError
from src.components.distributor_terms import DistributorTermsService
from src.domain.entities import (
    Distributor,
    DistributorTermsAndConditions,
    TermsAndConditionsTemplate,
)
from src.rules.models import TermsRules

from .engine import (
    VariableSchemaError,
    add_months,
    default_variables,
    extract_placeholders,
    needs_renewal,
    parse_variable_schema,
    process_template,
    validate_variables,
)
from .models import RenewalReport

logger = logging.getLogger(__name__)


class TermsGenerationService:
    """Terms generation service."""

    def __init__(
        self,
        template_repo: EntityRepoPort[TermsAndConditionsTemplate],
        distributor_repo: EntityRepoPort[Distributor],
        terms: DistributorTermsService,
        clock: ClockPort,
        rules: TermsRules | None = None,
    ) -> None:
        """Initialize service."""
        self._templates = template_repo
        self._distributors = distributor_repo
        self._terms = terms
        self._clock = clock
        self._rules = rules or TermsRules()

    # --- Queries ---

    def default_variables_for(self, distributor_id: UUID) -> dict[str, Any]:
        """Default variables for a distributor; only the dates if it does not exist."""
        distributor = self._distributors.get_by_id(distributor_id)
        return default_variables(distributor, self._clock.now(), self._rules)

    def validate_for_template(
        self, template: TermsAndConditionsTemplate, variables: dict[str, Any]
    ) -> list[EntityValidationError]:
        try:
            schema = parse_variable_schema(template.variables)
        except VariableSchemaError as e:
            return [
                EntityValidationError(
                    code="template_variables_invalid", message=str(e), field="variables"
                )
            ]
        return validate_variables(schema, variables)

    def preview(
        self, template_id: UUID, variables: dict[str, Any]
    ) -> tuple[tuple[str, list[str]] | None, list[EntityValidationError]]:
        """
        Render a template with the supplied variables only.

        Returns:
            Tuple of ((content, unresolved placeholders), errors).
        """
        template = self._templates.get_by_id(template_id)
        if template is None:
            return None, [_template_not_found(template_id)]

        content = process_template(template.template_content, variables, self._rules) or ""
        unresolved = [
            name
            for name in extract_placeholders(template.template_content)
            if variables.get(name) is None
        ]
        return (content, unresolved), []

    def needs_renewal(
        self, terms_id: UUID, scope: dict[str, UUID] | None = None
    ) -> tuple[bool | None, list[EntityValidationError]]:
        document = self._terms.get_by_id(terms_id, scope)
        if document is None:
            return None, [self._terms.not_found(terms_id)]
        return self._is_due(document), []

    # --- Commands ---

    def generate_from_template(
        self,
        template_id: UUID,
        distributor_id: UUID,
        variables: dict[str, Any],
        actor_id: UUID | None = None,
    ) -> tuple[DistributorTermsAndConditions | None, list[EntityValidationError]]:
        """
        Render a template into a new draft document for a distributor.

        Returns:
            Tuple of (document, errors). Document is None if the template or
            distributor is missing, the template is inactive, or the
            variables do not satisfy the template schema.
        """
        template = self._templates.get_by_id(template_id)
        if template is None:
            return None, [_template_not_found(template_id)]
        if not template.is_active:
            return None, [
                EntityValidationError(
                    code="template_inactive",
                    message=f"Template {template.name} is not active",
                )
            ]

        now = self._clock.now()
        expiration = (
            add_months(now, template.renewal_period_months)
            if template.renewal_period_months
            else None
        )
        return self._render(template, distributor_id, variables, now, expiration, actor_id)

    def auto_renew(
        self,
        terms_id: UUID,
        scope: dict[str, UUID] | None = None,
        actor_id: UUID | None = None,
    ) -> tuple[DistributorTermsAndConditions | None, list[EntityValidationError]]:
        """
        Replace a document with a fresh one generated from its template.

        The new document takes effect today; when the template declares a
        renewal period it expires that many months later. The superseded
        document is deactivated.
        """
        existing = self._terms.get_by_id(terms_id, scope)
        if existing is None:
            return None, [self._terms.not_found(terms_id)]
        if existing.template_id is None:
            return None, [
                EntityValidationError(
                    code="auto_renewal_unsupported",
                    message="Cannot auto-renew terms without template",
                    field="template_id",
                )
            ]

        template = self._templates.get_by_id(existing.template_id)
        if template is None:
            return None, [_template_not_found(existing.template_id)]
        if not template.auto_renewal:
            return None, [
                EntityValidationError(
                    code="auto_renewal_unsupported",
                    message="Template does not support auto-renewal",
                    field="template_id",
                )
            ]

        effective = datetime.combine(self._clock.now().date(), time.min)
        variables: dict[str, Any] = {"effectiveDate": effective.date()}
        expiration = None
        if template.renewal_period_months:
            expiration = add_months(effective, template.renewal_period_months)
            variables["expirationDate"] = expiration.date()

        renewed, errors = self._render(
            template, existing.distributor_id, variables, effective, expiration, actor_id
        )
        if renewed is None:
            return None, errors

        self._terms.set_flag(existing.id, "is_active", False, actor_id=actor_id)
        logger.info("Renewed terms %s as %s", existing.id, renewed.id)
        return renewed, []

    def renew_due(self, actor_id: UUID | None = None) -> RenewalReport:
        """Renew every active signed document inside its renewal window."""
        report = RenewalReport()
        for document in self._terms.expiring_before():
            if document.status != "SIGNED" or not self._is_due(document):
                continue

            template = (
                self._templates.get_by_id(document.template_id) if document.template_id else None
            )
            if template is None or not template.auto_renewal:
                report.skipped.append(document.id)
                continue

            renewed, errors = self.auto_renew(document.id, actor_id=actor_id)
            if renewed is None:
                logger.warning("Could not renew terms %s: %s", document.id, errors)
                report.failed[document.id] = errors
            else:
                report.renewed.append(renewed)

        logger.info(
            "Renewal sweep: %d renewed, %d skipped, %d failed",
            len(report.renewed),
            len(report.skipped),
            len(report.failed),
        )
        return report

    # --- Helpers ---

    def _is_due(self, document: DistributorTermsAndConditions) -> bool:
        return needs_renewal(
            document.expiration_date, self._clock.now(), self._rules.renewal_window_days
        )

    def _render(
        self,
        template: TermsAndConditionsTemplate,
        distributor_id: UUID | None,
        variables: dict[str, Any],
        effective: datetime,
        expiration: datetime | None,
        actor_id: UUID | None,
    ) -> tuple[DistributorTermsAndConditions | None, list[EntityValidationError]]:
        distributor = self._distributors.get_by_id(distributor_id) if distributor_id else None
        if distributor is None:
            return None, [
                EntityValidationError(
                    code="distributor_not_found",
                    message=f"Distributor with ID {distributor_id} not found",
                )
            ]

        merged = default_variables(distributor, self._clock.now(), self._rules)
        merged.update(variables)

        errors = self.validate_for_template(template, merged)
        if errors:
            return None, errors

        content = process_template(template.template_content, merged, self._rules)
        document, errors = self._terms.create(
            {
                "template_id": template.id,
                "title": template.name,
                "content": content,
                "version": template.version,
                "effective_date": effective,
                "expiration_date": expiration,
                "status": "DRAFT",
                "is_active": True,
            },
            scope={"distributor_id": distributor_id},
            actor_id=actor_id,
        )
        if document is not None:
            logger.info(
                "Generated terms %s from template %s for distributor %s",
                document.id,
                template.name,
                distributor_id,
            )
        return document, errors


def _template_not_found(template_id: UUID) -> EntityValidationError:
    return EntityValidationError(
        code="template_not_found",
        message=f"Template with ID {template_id} not found",
    )
