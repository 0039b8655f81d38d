"""
Terms generation component - Template rendering and renewal.

Shell Layer - handles I/O and error conversion.
"""

from __future__ import annotations

from ._impl import TermsGenerationService
from .models import (
    GenerateInput,
    GenerationOutput,
    PreviewInput,
    PreviewOutput,
    RenewalCheckOutput,
    RenewalReport,
    RenewInput,
)


def _scope(input_data: RenewInput) -> dict:
    return {"distributor_id": input_data.distributor_id} if input_data.distributor_id else {}


def run_generate(input_data: GenerateInput, service: TermsGenerationService) -> GenerationOutput:
    """Generate a distributor document from a template."""
    document, errors = service.generate_from_template(
        input_data.template_id,
        input_data.distributor_id,
        input_data.variables,
        actor_id=input_data.actor_id,
    )

    return GenerationOutput(
        document=document,
        errors=errors,
        success=document is not None,
    )


def run_preview(input_data: PreviewInput, service: TermsGenerationService) -> PreviewOutput:
    """Render a template without storing the result."""
    result, errors = service.preview(input_data.template_id, input_data.variables)

    if result is None:
        return PreviewOutput(content=None, unresolved=[], errors=errors, success=False)

    content, unresolved = result
    return PreviewOutput(
        content=content,
        unresolved=unresolved,
        errors=[],
        success=True,
    )


def run_needs_renewal(
    input_data: RenewInput, service: TermsGenerationService
) -> RenewalCheckOutput:
    """Check whether a document is inside its renewal window."""
    due, errors = service.needs_renewal(input_data.terms_id, scope=_scope(input_data))

    return RenewalCheckOutput(
        needs_renewal=bool(due),
        errors=errors,
        success=due is not None,
    )


def run_renew(input_data: RenewInput, service: TermsGenerationService) -> GenerationOutput:
    """Renew a document from its template."""
    document, errors = service.auto_renew(
        input_data.terms_id,
        scope=_scope(input_data),
        actor_id=input_data.actor_id,
    )

    return GenerationOutput(
        document=document,
        errors=errors,
        success=document is not None,
    )


def run_renew_due(service: TermsGenerationService) -> RenewalReport:
    """Renew every signed document that is due."""
    return service.renew_due()
