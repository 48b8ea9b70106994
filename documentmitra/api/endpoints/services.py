from typing import Any, Dict, List, Optional
from fastapi import APIRouter, Body, Depends, HTTPException, Query
from documentmitra.api import deps
from documentmitra.core.exceptions import BookingFormError
from documentmitra.models.service import (
    BookingConfig, Breadcrumb, RefreshResponse, ServiceNode, ServiceSuggestion,
)
from documentmitra.services.booking_form import apply_action, form_json_schema, parse_action
from documentmitra.services.catalog_service import ServiceCatalog

router = APIRouter()


@router.get("/", response_model=List[ServiceNode])
def read_services(
    service_catalog: ServiceCatalog = Depends(deps.get_catalog),
) -> Any:
    """Retrieve the full service tree."""
    return service_catalog.snapshot.services


@router.get("/featured", response_model=List[ServiceNode])
def read_featured_services(
    service_catalog: ServiceCatalog = Depends(deps.get_catalog),
) -> Any:
    """Retrieve the top-level services promoted on the homepage."""
    return service_catalog.snapshot.featured


@router.get("/search", response_model=List[ServiceSuggestion])
def search_services(
    q: str = Query("", description="Text to look for in service names and descriptions"),
    limit: Optional[int] = Query(None, ge=1, le=50),
    service_catalog: ServiceCatalog = Depends(deps.get_catalog),
) -> Any:
    """Search suggestions across every level of the catalog."""
    return service_catalog.search(q, limit=limit)


@router.post("/refresh", response_model=RefreshResponse)
async def refresh_services(
    service_catalog: ServiceCatalog = Depends(deps.get_catalog),
) -> Any:
    """Reload the catalog after the services table was edited."""
    snapshot = await service_catalog.refresh()
    return RefreshResponse(service_count=len(snapshot.flat), loaded_at=snapshot.loaded_at)


@router.post("/booking-form/apply", response_model=BookingConfig)
def apply_booking_form_action(
    config: Optional[BookingConfig] = Body(None),
    action: Dict[str, Any] = Body(...),
) -> Any:
    """Apply one form-builder action to a booking config and return the result."""
    try:
        return apply_action(config, parse_action(action))
    except BookingFormError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{service_id}", response_model=ServiceNode)
def read_service(
    service: ServiceNode = Depends(deps.get_service_or_404),
) -> Any:
    """Retrieve one service with its sub-services."""
    return service


@router.get("/{service_id}/breadcrumbs", response_model=List[Breadcrumb])
def read_breadcrumbs(
    service_id: int,
    service_catalog: ServiceCatalog = Depends(deps.get_catalog),
) -> Any:
    """Path from the top-level category down to the service."""
    crumbs = service_catalog.get_breadcrumbs(service_id)
    if not crumbs:
        raise HTTPException(status_code=404, detail="Service not found")
    return crumbs


@router.get("/{service_id}/booking-form", response_model=dict)
def read_booking_form(
    service: ServiceNode = Depends(deps.get_bookable_service),
) -> Any:
    """JSON schema of the booking form and the required documents."""
    return form_json_schema(service.booking_config)
