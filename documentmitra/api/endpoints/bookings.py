import logging
from typing import Any
from fastapi import APIRouter, Depends, HTTPException
from documentmitra.api import deps
from documentmitra.models.booking import BookingValidationRequest, BookingValidationResponse
from documentmitra.services.booking_form import validate_submission
from documentmitra.services.catalog_service import ServiceCatalog

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/validate", response_model=BookingValidationResponse)
def validate_booking(
    booking_in: BookingValidationRequest,
    service_catalog: ServiceCatalog = Depends(deps.get_catalog),
) -> Any:
    """Check booking details against the service's configured form before submission."""
    service = service_catalog.get_service(booking_in.service_id)
    if service is None:
        raise HTTPException(status_code=404, detail="Service not found")
    if not service.is_bookable:
        raise HTTPException(status_code=400, detail="This service cannot be booked directly")

    errors = validate_submission(
        service.booking_config, booking_in.user_details, booking_in.documents
    )
    if errors:
        logger.info(f"Booking details for service {service.id} rejected: {sorted(errors)}")
    return BookingValidationResponse(service_id=service.id, valid=not errors, errors=errors)
