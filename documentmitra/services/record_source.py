"""
Where the flat service records come from.

``SqlAlchemyRecordSource`` reads the ``services`` and ``settings`` tables;
``StaticRecordSource`` serves a fixed list (seed previews, tests).
"""

import logging
from typing import Any, Dict, List, Optional, Protocol, Sequence

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from documentmitra.core.exceptions import RecordSourceError
from documentmitra.db.db_models import Service, Setting
from documentmitra.models.service import BookingConfig, ServiceRecord

logger = logging.getLogger(__name__)

APP_SETTINGS_KEY = "app_settings"


class RecordSource(Protocol):
    async def fetch_services(self) -> List[ServiceRecord]:
        ...

    async def fetch_settings(self) -> Optional[Dict[str, Any]]:
        ...


def record_from_row(row: Service) -> ServiceRecord:
    """Convert a ``services`` row, dropping a booking config that does not parse."""
    booking_config = None
    if row.booking_config:
        try:
            booking_config = BookingConfig.model_validate(row.booking_config)
        except ValidationError as e:
            logger.warning(f"Ignoring malformed booking_config on service {row.id}: {e}")
    return ServiceRecord(
        id=row.id,
        parent_id=row.parent_id,
        name=row.name,
        description=row.description,
        icon_name=row.icon_name,
        is_bookable=bool(row.is_bookable),
        price=row.price,
        display_order=row.display_order or 0,
        is_featured=bool(row.is_featured),
        booking_config=booking_config,
    )


class SqlAlchemyRecordSource:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def fetch_services(self) -> List[ServiceRecord]:
        try:
            async with self.session_factory() as db:
                result = await db.execute(
                    select(Service).order_by(Service.display_order, Service.name)
                )
                rows = result.scalars().all()
        except (SQLAlchemyError, OSError) as e:
            raise RecordSourceError(f"Could not load services: {e}") from e
        return [record_from_row(row) for row in rows]

    async def fetch_settings(self) -> Optional[Dict[str, Any]]:
        try:
            async with self.session_factory() as db:
                result = await db.execute(
                    select(Setting).where(Setting.key == APP_SETTINGS_KEY)
                )
                setting = result.scalar_one_or_none()
        except (SQLAlchemyError, OSError) as e:
            raise RecordSourceError(f"Could not load settings: {e}") from e
        if setting is None or not isinstance(setting.value, dict):
            return None
        return setting.value


class StaticRecordSource:
    def __init__(self, records: Sequence[ServiceRecord], settings: Optional[Dict[str, Any]] = None):
        self.records = list(records)
        self.settings = settings

    async def fetch_services(self) -> List[ServiceRecord]:
        return list(self.records)

    async def fetch_settings(self) -> Optional[Dict[str, Any]]:
        return self.settings
