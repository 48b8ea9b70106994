"""Shared fixtures for the catalog tests."""
import asyncio
from typing import List

import pytest

from documentmitra.models.service import BookingConfig, ServiceRecord
from documentmitra.services.catalog_service import ServiceCatalog
from documentmitra.services.record_source import StaticRecordSource

PASSPORT_FORM = BookingConfig.model_validate({
    "form_fields": [
        {"id": "full_name", "label": "Full Name", "type": "text", "required": True},
        {"id": "dob", "label": "Date of Birth", "type": "date", "required": True},
        {"id": "mobile", "label": "Mobile Number", "type": "tel", "required": True},
        {"id": "email", "label": "Email", "type": "email", "required": False},
    ],
    "document_requirements": [
        {"id": "poi", "name": "Proof of Identity", "description": "Aadhaar or PAN"},
    ],
})


def make_record(id: int, name: str, parent_id=None, **extra) -> ServiceRecord:
    return ServiceRecord(id=id, name=name, parent_id=parent_id, **extra)


@pytest.fixture
def catalog_records() -> List[ServiceRecord]:
    """A small catalog, in the (display_order, name) order the database returns."""
    return [
        make_record(1, "Passport", is_featured=True, display_order=1,
                    description="Apply for or renew a passport"),
        make_record(2, "Transport", is_featured=True, display_order=2),
        make_record(3, "Voter ID", display_order=3),
        make_record(10, "Fresh Passport", parent_id=1, display_order=1,
                    is_bookable=True, price=1500, booking_config=PASSPORT_FORM),
        make_record(11, "Passport Renewal", parent_id=1, display_order=2,
                    is_bookable=True, price=1500, booking_config=PASSPORT_FORM),
        make_record(20, "Driving License", parent_id=2, display_order=1),
        make_record(21, "Learner License", parent_id=20, display_order=1,
                    is_bookable=True, price=350),
        make_record(30, "New Voter Registration", parent_id=3, display_order=1,
                    is_bookable=True, price=0),
    ]


@pytest.fixture
def service_catalog(catalog_records) -> ServiceCatalog:
    service_catalog = ServiceCatalog(StaticRecordSource(
        catalog_records, settings={"website_name": "Test Portal", "homepage_service_limit": 1},
    ))
    asyncio.run(service_catalog.refresh())
    return service_catalog
