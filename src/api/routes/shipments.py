"""Shipment routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from src.api.deps import get_actor_id, get_shipment_service
from src.api.routes._crud import add_crud_routes, raise_for_errors
from src.api.schemas import ShipmentStatusRequest
from src.components.crud import run_list
from src.components.shipments import ShipmentService
from src.domain.entities import Shipment, ShipmentFields, ShipmentStatus

router = APIRouter()


@router.get("/tracking/{tracking_number}", response_model=Shipment)
def get_by_tracking_number(
    tracking_number: str,
    service: ShipmentService = Depends(get_shipment_service),
) -> Shipment:
    shipment = service.get_by_tracking_number(tracking_number)
    if shipment is None:
        raise HTTPException(status_code=404, detail=f"Shipment '{tracking_number}' not found")
    return shipment


@router.get("/lending-contract/{lending_contract_id}", response_model=list[Shipment])
def list_by_lending_contract(
    lending_contract_id: UUID,
    service: ShipmentService = Depends(get_shipment_service),
) -> list[Shipment]:
    return run_list(service, lending_contract_id=lending_contract_id).items


@router.get("/product/{product_id}", response_model=list[Shipment])
def list_by_product(
    product_id: UUID,
    service: ShipmentService = Depends(get_shipment_service),
) -> list[Shipment]:
    return run_list(service, product_id=product_id).items


@router.get("/status/{status}", response_model=list[Shipment])
def list_by_status(
    status: ShipmentStatus,
    service: ShipmentService = Depends(get_shipment_service),
) -> list[Shipment]:
    return run_list(service, status=status).items


@router.put("/{shipment_id}/status", response_model=Shipment)
def update_shipment_status(
    shipment_id: UUID,
    body: ShipmentStatusRequest,
    service: ShipmentService = Depends(get_shipment_service),
    actor_id: UUID | None = Depends(get_actor_id),
) -> Shipment:
    """Move the shipment to a new status, stamping shipping and delivery dates."""
    shipment, errors = service.update_status(shipment_id, body.status, actor_id=actor_id)
    if shipment is None:
        raise_for_errors(errors)
    return shipment


add_crud_routes(
    router,
    service_dep=get_shipment_service,
    fields=ShipmentFields,
    entity=Shipment,
)
