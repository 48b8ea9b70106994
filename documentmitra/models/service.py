from pydantic import BaseModel
from typing import List, Optional
from enum import Enum
from datetime import datetime


# ─── Booking Form Schemas ────────────────────────────────────────────

class FieldType(str, Enum):
    TEXT = "text"
    EMAIL = "email"
    DATE = "date"
    TEL = "tel"
    NUMBER = "number"


class FormField(BaseModel):
    id: str
    label: str
    type: FieldType = FieldType.TEXT
    required: bool = False


class DocumentRequirement(BaseModel):
    id: str
    name: str
    description: str = ""


class BookingConfig(BaseModel):
    form_fields: List[FormField] = []
    document_requirements: List[DocumentRequirement] = []


# ─── Catalog Schemas ─────────────────────────────────────────────────

class ServiceRecord(BaseModel):
    """One row of the services table, as fetched (flat)."""
    id: int
    parent_id: Optional[int] = None
    name: str
    description: Optional[str] = None
    icon_name: Optional[str] = None
    is_bookable: bool = False
    price: Optional[float] = None  # None: not applicable, 0: free
    display_order: int = 0
    is_featured: bool = False
    booking_config: Optional[BookingConfig] = None

    class Config:
        from_attributes = True


class ServiceNode(ServiceRecord):
    """A service with its sub-services attached.

    Read-only by convention: ``frozen`` blocks attribute assignment, and
    callers must not change ``children`` in place either. A new forest is
    built on every catalog refresh.
    """
    children: List["ServiceNode"] = []

    class Config:
        from_attributes = True
        frozen = True


class Breadcrumb(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class ServiceSuggestion(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    is_bookable: bool
    price: Optional[float] = None

    class Config:
        from_attributes = True


class RefreshResponse(BaseModel):
    service_count: int
    loaded_at: Optional[datetime] = None
