from pydantic import BaseModel
from typing import Any, Dict, Optional


class AppSettings(BaseModel):
    """Site-wide settings stored under the ``app_settings`` key."""
    homepage_service_limit: int = 8
    website_name: str = "Documentmitra"
    website_description: str = "Your Government Service Assistant"
    logo_url: str = ""
    favicon_url: str = ""
    favicon_text: str = "DM"
    contact_address: str = "123 Gov Services Ln, New Delhi, 110001"
    contact_email: str = "support@documentmitra.gov"
    contact_phone: str = "+91 1800 123 4567"
    social_facebook: str = ""
    social_twitter: str = ""
    social_linkedin: str = ""
    max_document_upload_size_mb: int = 5
    document_retention_days: int = 0
    admin_booking_notification_sound: Optional[str] = ""
    user_notification_sound: Optional[str] = ""

    @classmethod
    def merged(cls, stored: Optional[Dict[str, Any]]) -> "AppSettings":
        """Overlay stored values on the defaults, ignoring unknown keys and nulls."""
        if not stored:
            return cls()
        known = {
            key: value for key, value in stored.items()
            if key in cls.model_fields and value is not None
        }
        return cls(**known)
