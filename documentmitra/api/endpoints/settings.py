from typing import Any
from fastapi import APIRouter, Depends
from documentmitra.api import deps
from documentmitra.models.settings import AppSettings
from documentmitra.services.catalog_service import ServiceCatalog

router = APIRouter()


@router.get("/", response_model=AppSettings)
def read_settings(
    service_catalog: ServiceCatalog = Depends(deps.get_catalog),
) -> Any:
    """Site settings, with defaults filled in for anything not stored."""
    return service_catalog.snapshot.settings
