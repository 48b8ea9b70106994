"""Seed the database with an initial service catalog and site settings."""
import logging
from typing import Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from documentmitra.db.db_models import Service, Setting
from documentmitra.models.settings import AppSettings

logger = logging.getLogger(__name__)

IDENTITY_FORM = {
    "form_fields": [
        {"id": "full_name", "label": "Full Name", "type": "text", "required": True},
        {"id": "father_name", "label": "Father's Name", "type": "text", "required": True},
        {"id": "dob", "label": "Date of Birth", "type": "date", "required": True},
        {"id": "mobile", "label": "Mobile Number", "type": "tel", "required": True},
        {"id": "email", "label": "Email", "type": "email", "required": False},
    ],
    "document_requirements": [
        {"id": "poi", "name": "Proof of Identity", "description": "Aadhaar, Voter ID or PAN card"},
        {"id": "poa", "name": "Proof of Address", "description": "Utility bill or rental agreement"},
    ],
}

CATALOG = [
    {
        "name": "Passport", "icon_name": "passport", "is_featured": True, "display_order": 1,
        "description": "Apply for a new passport or renew an existing one",
        "children": [
            {"name": "Fresh Passport", "is_bookable": True, "price": 1500, "display_order": 1,
             "booking_config": IDENTITY_FORM},
            {"name": "Passport Renewal", "is_bookable": True, "price": 1500, "display_order": 2,
             "booking_config": IDENTITY_FORM},
        ],
    },
    {
        "name": "PAN Card", "icon_name": "id-card", "is_featured": True, "display_order": 2,
        "description": "Permanent Account Number services",
        "children": [
            {"name": "New PAN Card", "is_bookable": True, "price": 107, "display_order": 1,
             "booking_config": IDENTITY_FORM},
            {"name": "PAN Correction", "is_bookable": True, "price": 107, "display_order": 2,
             "booking_config": IDENTITY_FORM},
        ],
    },
    {
        "name": "Transport", "icon_name": "car", "is_featured": True, "display_order": 3,
        "description": "Driving licence and vehicle registration",
        "children": [
            {
                "name": "Driving License", "display_order": 1,
                "children": [
                    {"name": "Learner License", "is_bookable": True, "price": 350, "display_order": 1,
                     "booking_config": IDENTITY_FORM},
                    {"name": "License Renewal", "is_bookable": True, "price": 400, "display_order": 2,
                     "booking_config": IDENTITY_FORM},
                ],
            },
        ],
    },
    {
        "name": "Voter ID", "icon_name": "vote", "display_order": 4,
        "description": "Enrolment and corrections in the electoral roll",
        "children": [
            {"name": "New Voter Registration", "is_bookable": True, "price": 0, "display_order": 1,
             "booking_config": IDENTITY_FORM},
        ],
    },
]


async def _add_services(db: AsyncSession, entries: List[Dict], parent_id: Optional[int] = None) -> int:
    count = 0
    for entry in entries:
        data = {k: v for k, v in entry.items() if k != "children"}
        service = Service(parent_id=parent_id, **data)
        db.add(service)
        await db.flush()  # assigns service.id for the children
        count += 1
        count += await _add_services(db, entry.get("children", []), service.id)
    return count


async def seed_data(db: AsyncSession):
    """Insert the starter catalog and default settings if the tables are empty."""
    result = await db.execute(select(func.count()).select_from(Service))
    if result.scalar_one() == 0:
        count = await _add_services(db, CATALOG)
        logger.info(f"Seeded {count} services")

    result = await db.execute(select(Setting).where(Setting.key == "app_settings"))
    if result.scalar_one_or_none() is None:
        db.add(Setting(key="app_settings", value=AppSettings().model_dump()))
        logger.info("Seeded default app settings")

    await db.commit()
