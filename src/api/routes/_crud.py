"""Shared route builders for managed resources.

Each resource module registers its own extra endpoints first and then calls
`add_crud_routes`, so fixed paths such as ``/active`` win over ``/{entity_id}``.
"""

from collections.abc import Callable
from typing import Any, NoReturn
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from pydantic import BaseModel

from src.api.deps import get_actor_id
from src.api.schemas import ErrorDetail, FilterRequest, PaginationResponse
from src.components.crud import (
    CreateInput,
    DeleteInput,
    EntityService,
    EntityValidationError,
    FilterInput,
    GetInput,
    OperationOutput,
    PageOutput,
    SetFlagInput,
    UpdateInput,
    run_create,
    run_delete,
    run_filter,
    run_get,
    run_set_flag,
    run_update,
)


def error_status(errors: list[EntityValidationError]) -> int:
    codes = [err.code for err in errors]
    if any(code.endswith("_not_found") for code in codes):
        return 404
    if any(code.endswith(("_duplicate", "_conflict")) for code in codes):
        return 409
    return 400


def raise_for_errors(errors: list[EntityValidationError]) -> NoReturn:
    raise HTTPException(
        status_code=error_status(errors),
        detail=[
            ErrorDetail(code=err.code, message=err.message, field=err.field).model_dump()
            for err in errors
        ],
    )


def unwrap(result: OperationOutput) -> Any:
    """Return the entity of a successful operation or raise the mapped HTTP error."""
    if not result.success:
        raise_for_errors(result.errors)
    return result.entity


def path_scope(request: Request, names: tuple[str, ...]) -> dict[str, UUID]:
    """Parent ids taken from the router prefix, e.g. ``/distributors/{distributor_id}``."""
    scope = {}
    for name in names:
        try:
            scope[name] = UUID(request.path_params[name])
        except (KeyError, ValueError) as e:
            raise HTTPException(status_code=422, detail=f"Invalid path parameter: {name}") from e
    return scope


def page_response(page: PageOutput) -> dict[str, Any]:
    return {
        "content": page.items,
        "total_elements": page.total,
        "total_pages": page.total_pages,
        "current_page": page.page,
        "page_size": page.size,
    }


def add_crud_routes(
    router: APIRouter,
    *,
    service_dep: Callable[..., EntityService[Any]],
    fields: type[BaseModel],
    entity: type[BaseModel],
    scope: tuple[str, ...] = (),
) -> None:
    """Register filter, create, get, update and delete endpoints on a router."""

    @router.post("/filter", response_model=PaginationResponse[entity])  # type: ignore[valid-type]
    def filter_entities(
        request: Request,
        body: FilterRequest,
        service: EntityService[Any] = Depends(service_dep),
    ) -> dict[str, Any]:
        result = run_filter(
            FilterInput(
                filters=body.filters,
                page=body.pagination.page,
                size=body.pagination.size,
                sort_by=body.pagination.sort_by,
                descending=body.pagination.descending,
                scope=path_scope(request, scope),
            ),
            service,
        )
        if not result.success or result.page is None:
            raise_for_errors(result.errors)
        return page_response(result.page)

    @router.post("", response_model=entity, status_code=201)
    def create_entity(
        request: Request,
        body: fields,  # type: ignore[valid-type]
        service: EntityService[Any] = Depends(service_dep),
        actor_id: UUID | None = Depends(get_actor_id),
    ) -> Any:
        return unwrap(
            run_create(
                CreateInput(
                    data=body.model_dump(exclude_unset=True),
                    scope=path_scope(request, scope),
                    actor_id=actor_id,
                ),
                service,
            )
        )

    @router.get("/{entity_id}", response_model=entity)
    def get_entity(
        request: Request,
        entity_id: UUID,
        service: EntityService[Any] = Depends(service_dep),
    ) -> Any:
        return unwrap(
            run_get(GetInput(entity_id=entity_id, scope=path_scope(request, scope)), service)
        )

    @router.put("/{entity_id}", response_model=entity)
    def update_entity(
        request: Request,
        entity_id: UUID,
        body: fields,  # type: ignore[valid-type]
        service: EntityService[Any] = Depends(service_dep),
        actor_id: UUID | None = Depends(get_actor_id),
    ) -> Any:
        return unwrap(
            run_update(
                UpdateInput(
                    entity_id=entity_id,
                    data=body.model_dump(exclude_unset=True),
                    scope=path_scope(request, scope),
                    actor_id=actor_id,
                ),
                service,
            )
        )

    @router.delete("/{entity_id}", status_code=204)
    def delete_entity(
        request: Request,
        entity_id: UUID,
        service: EntityService[Any] = Depends(service_dep),
        actor_id: UUID | None = Depends(get_actor_id),
    ) -> Response:
        unwrap(
            run_delete(
                DeleteInput(
                    entity_id=entity_id, scope=path_scope(request, scope), actor_id=actor_id
                ),
                service,
            )
        )
        return Response(status_code=204)


def add_flag_route(
    router: APIRouter,
    path: str,
    *,
    service_dep: Callable[..., EntityService[Any]],
    entity: type[BaseModel],
    flag: str,
    value: bool,
    scope: tuple[str, ...] = (),
) -> None:
    """Register ``PATCH /{entity_id}/<path>`` setting a boolean column."""

    @router.patch(f"/{{entity_id}}/{path}", response_model=entity)
    def set_flag(
        request: Request,
        entity_id: UUID,
        service: EntityService[Any] = Depends(service_dep),
        actor_id: UUID | None = Depends(get_actor_id),
    ) -> Any:
        return unwrap(
            run_set_flag(
                SetFlagInput(
                    entity_id=entity_id,
                    flag=flag,
                    value=value,
                    scope=path_scope(request, scope),
                    actor_id=actor_id,
                ),
                service,
            )
        )
