from pydantic import BaseModel
from typing import Any, Dict, List


class BookingValidationRequest(BaseModel):
    """User-entered booking details checked against a service's form schema."""
    service_id: int
    user_details: Dict[str, Any] = {}
    documents: List[str] = []  # ids of the document requirements provided


class BookingValidationResponse(BaseModel):
    service_id: int
    valid: bool
    errors: Dict[str, str] = {}
