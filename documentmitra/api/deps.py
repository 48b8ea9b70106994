from fastapi import Depends, HTTPException, status
from documentmitra.models.service import ServiceNode
from documentmitra.services.catalog_service import ServiceCatalog, catalog


def get_catalog() -> ServiceCatalog:
    """FastAPI dependency returning the shared service catalog."""
    return catalog


def get_service_or_404(
    service_id: int,
    service_catalog: ServiceCatalog = Depends(get_catalog),
) -> ServiceNode:
    service = service_catalog.get_service(service_id)
    if service is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Service not found")
    return service


def get_bookable_service(
    service: ServiceNode = Depends(get_service_or_404),
) -> ServiceNode:
    if not service.is_bookable:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="This service cannot be booked directly",
        )
    return service
