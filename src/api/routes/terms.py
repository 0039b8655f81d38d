"""Terms and conditions template and document routes."""

from datetime import datetime
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Body, Depends, HTTPException
from fastapi.responses import PlainTextResponse

from src.api.deps import (
    get_actor_id,
    get_template_service,
    get_terms_generation_service,
    get_terms_service,
)
from src.api.routes._crud import add_crud_routes, add_flag_route, raise_for_errors
from src.api.schemas import TermsStatusRequest
from src.components.crud import run_list
from src.components.distributor_terms import DistributorTermsService
from src.components.terms_generation import (
    GenerateInput,
    PreviewInput,
    RenewInput,
    TermsGenerationService,
    run_generate,
    run_needs_renewal,
    run_preview,
    run_renew,
)
from src.components.terms_templates import TemplateService
from src.domain.entities import (
    DistributorTermsAndConditions,
    DistributorTermsAndConditionsFields,
    TemplateCategory,
    TermsAndConditionsTemplate,
    TermsAndConditionsTemplateFields,
    TermsStatus,
    to_naive_utc,
)

template_router = APIRouter()
terms_router = APIRouter()


# --- Templates ---


@template_router.get("/active", response_model=list[TermsAndConditionsTemplate])
def list_active_templates(
    service: TemplateService = Depends(get_template_service),
) -> list[TermsAndConditionsTemplate]:
    return run_list(service, is_active=True).items


@template_router.get("/category/{category}", response_model=list[TermsAndConditionsTemplate])
def list_templates_by_category(
    category: TemplateCategory,
    service: TemplateService = Depends(get_template_service),
) -> list[TermsAndConditionsTemplate]:
    return service.list_by_category(category)


@template_router.get(
    "/category/{category}/active", response_model=list[TermsAndConditionsTemplate]
)
def list_active_templates_by_category(
    category: TemplateCategory,
    service: TemplateService = Depends(get_template_service),
) -> list[TermsAndConditionsTemplate]:
    return service.list_by_category(category, active_only=True)


@template_router.get("/name/{name}", response_model=TermsAndConditionsTemplate)
def get_template_by_name(
    name: str,
    service: TemplateService = Depends(get_template_service),
) -> TermsAndConditionsTemplate:
    template = service.get_by_name(name)
    if template is None:
        raise HTTPException(status_code=404, detail=f"Template '{name}' not found")
    return template


@template_router.get("/default", response_model=list[TermsAndConditionsTemplate])
def list_default_templates(
    service: TemplateService = Depends(get_template_service),
) -> list[TermsAndConditionsTemplate]:
    """The active default template of every category."""
    return service.list_defaults()


@template_router.get("/default/category/{category}", response_model=TermsAndConditionsTemplate)
def get_default_template_for_category(
    category: TemplateCategory,
    service: TemplateService = Depends(get_template_service),
) -> TermsAndConditionsTemplate:
    template = service.get_default(category)
    if template is None:
        raise HTTPException(status_code=404, detail=f"No default template for {category}")
    return template


@template_router.post("/{template_id}/preview", response_class=PlainTextResponse)
def preview_template(
    template_id: UUID,
    variables: dict[str, Any] | None = Body(default=None),
    service: TermsGenerationService = Depends(get_terms_generation_service),
) -> PlainTextResponse:
    """
    Render the template with the supplied variables only.

    Placeholders left unresolved are listed in the X-Unresolved-Placeholders header.
    """
    result = run_preview(
        PreviewInput(template_id=template_id, variables=variables or {}), service
    )
    if not result.success:
        raise_for_errors(result.errors)

    headers = {}
    if result.unresolved:
        headers["X-Unresolved-Placeholders"] = ",".join(result.unresolved)
    return PlainTextResponse(result.content or "", headers=headers)


for _path, _flag, _value in (
    ("activate", "is_active", True),
    ("deactivate", "is_active", False),
    ("set-default", "is_default", True),
    ("remove-default", "is_default", False),
):
    add_flag_route(
        template_router,
        _path,
        service_dep=get_template_service,
        entity=TermsAndConditionsTemplate,
        flag=_flag,
        value=_value,
    )

add_crud_routes(
    template_router,
    service_dep=get_template_service,
    fields=TermsAndConditionsTemplateFields,
    entity=TermsAndConditionsTemplate,
)


# --- Distributor documents ---


@terms_router.get("", response_model=list[DistributorTermsAndConditions])
def list_terms(
    distributor_id: UUID,
    service: DistributorTermsService = Depends(get_terms_service),
) -> list[DistributorTermsAndConditions]:
    return run_list(service, {"distributor_id": distributor_id}).items


@terms_router.get("/active", response_model=list[DistributorTermsAndConditions])
def list_active_terms(
    distributor_id: UUID,
    service: DistributorTermsService = Depends(get_terms_service),
) -> list[DistributorTermsAndConditions]:
    return run_list(service, {"distributor_id": distributor_id}, is_active=True).items


@terms_router.get("/status/{status}", response_model=list[DistributorTermsAndConditions])
def list_terms_by_status(
    distributor_id: UUID,
    status: TermsStatus,
    service: DistributorTermsService = Depends(get_terms_service),
) -> list[DistributorTermsAndConditions]:
    return run_list(service, {"distributor_id": distributor_id}, status=status).items


@terms_router.get("/has-active-signed", response_model=bool)
def has_active_signed_terms(
    distributor_id: UUID,
    service: DistributorTermsService = Depends(get_terms_service),
) -> bool:
    return service.has_active_signed(distributor_id)


@terms_router.get("/latest", response_model=DistributorTermsAndConditions)
def get_latest_terms(
    distributor_id: UUID,
    service: DistributorTermsService = Depends(get_terms_service),
) -> DistributorTermsAndConditions:
    document = service.latest_active(distributor_id)
    if document is None:
        raise HTTPException(status_code=404, detail="No active terms for distributor")
    return document


@terms_router.get("/expiring", response_model=list[DistributorTermsAndConditions])
def list_expiring_terms(
    distributor_id: UUID,
    before: datetime | None = None,
    service: DistributorTermsService = Depends(get_terms_service),
) -> list[DistributorTermsAndConditions]:
    """Active documents expiring before the given instant (default: the renewal window)."""
    if before is not None:
        before = to_naive_utc(before)
    return service.expiring_before(before, distributor_id=distributor_id)


@terms_router.patch("/{terms_id}/status", response_model=DistributorTermsAndConditions)
def update_terms_status(
    distributor_id: UUID,
    terms_id: UUID,
    body: TermsStatusRequest,
    service: DistributorTermsService = Depends(get_terms_service),
    actor_id: UUID | None = Depends(get_actor_id),
) -> DistributorTermsAndConditions:
    document, errors = service.update_status(
        terms_id, body.status, scope={"distributor_id": distributor_id}, actor_id=actor_id
    )
    if document is None:
        raise_for_errors(errors)
    return document


@terms_router.patch("/{terms_id}/sign", response_model=DistributorTermsAndConditions)
def sign_terms(
    distributor_id: UUID,
    terms_id: UUID,
    service: DistributorTermsService = Depends(get_terms_service),
    actor_id: UUID | None = Depends(get_actor_id),
) -> DistributorTermsAndConditions:
    """Mark the document signed by the acting user."""
    document, errors = service.sign(
        terms_id, scope={"distributor_id": distributor_id}, actor_id=actor_id
    )
    if document is None:
        raise_for_errors(errors)
    return document


@terms_router.post(
    "/generate/{template_id}", response_model=DistributorTermsAndConditions, status_code=201
)
def generate_terms(
    distributor_id: UUID,
    template_id: UUID,
    variables: dict[str, Any] | None = Body(default=None),
    service: TermsGenerationService = Depends(get_terms_generation_service),
    actor_id: UUID | None = Depends(get_actor_id),
) -> DistributorTermsAndConditions:
    """Render a template into a new draft document for the distributor."""
    result = run_generate(
        GenerateInput(
            template_id=template_id,
            distributor_id=distributor_id,
            variables=variables or {},
            actor_id=actor_id,
        ),
        service,
    )
    if not result.success:
        raise_for_errors(result.errors)
    assert result.document is not None
    return result.document


@terms_router.get("/{terms_id}/needs-renewal", response_model=bool)
def terms_need_renewal(
    distributor_id: UUID,
    terms_id: UUID,
    service: TermsGenerationService = Depends(get_terms_generation_service),
) -> bool:
    result = run_needs_renewal(
        RenewInput(terms_id=terms_id, distributor_id=distributor_id), service
    )
    if not result.success:
        raise_for_errors(result.errors)
    return result.needs_renewal


@terms_router.post(
    "/{terms_id}/renew", response_model=DistributorTermsAndConditions, status_code=201
)
def renew_terms(
    distributor_id: UUID,
    terms_id: UUID,
    service: TermsGenerationService = Depends(get_terms_generation_service),
    actor_id: UUID | None = Depends(get_actor_id),
) -> DistributorTermsAndConditions:
    """Replace the document with a fresh one generated from its template."""
    result = run_renew(
        RenewInput(terms_id=terms_id, distributor_id=distributor_id, actor_id=actor_id),
        service,
    )
    if not result.success:
        raise_for_errors(result.errors)
    assert result.document is not None
    return result.document


for _path, _value in (("activate", True), ("deactivate", False)):
    add_flag_route(
        terms_router,
        _path,
        service_dep=get_terms_service,
        entity=DistributorTermsAndConditions,
        flag="is_active",
        value=_value,
        scope=("distributor_id",),
    )

add_crud_routes(
    terms_router,
    service_dep=get_terms_service,
    fields=DistributorTermsAndConditionsFields,
    entity=DistributorTermsAndConditions,
    scope=("distributor_id",),
)
