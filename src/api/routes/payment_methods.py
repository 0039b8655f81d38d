"""Agency payment method routes."""

from uuid import UUID

from fastapi import APIRouter, Depends

from src.api.deps import get_actor_id, get_payment_method_service
from src.api.routes._crud import add_crud_routes, unwrap
from src.components.payment_methods import (
    PaymentMethodService,
    SetPrimaryInput,
    run_set_primary,
)
from src.domain.entities import AgencyPaymentMethod, AgencyPaymentMethodFields

router = APIRouter()


@router.patch("/{method_id}/set-primary", response_model=AgencyPaymentMethod)
def set_primary_payment_method(
    agency_id: UUID,
    method_id: UUID,
    service: PaymentMethodService = Depends(get_payment_method_service),
    actor_id: UUID | None = Depends(get_actor_id),
) -> AgencyPaymentMethod:
    """Make the method the agency's only primary payment method."""
    result = run_set_primary(
        SetPrimaryInput(agency_id=agency_id, method_id=method_id, actor_id=actor_id),
        service,
    )
    return unwrap(result)


add_crud_routes(
    router,
    service_dep=get_payment_method_service,
    fields=AgencyPaymentMethodFields,
    entity=AgencyPaymentMethod,
    scope=("agency_id",),
)
