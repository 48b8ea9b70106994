"""
In-memory service catalog shared by the API.

``ServiceCatalog`` holds one immutable ``CatalogSnapshot`` (the service
forest, its flattened index, the featured services and the site
settings). ``refresh()`` fetches everything again and swaps in a new
snapshot in one assignment; readers never see a half-built catalog.
Refreshes run one at a time, so when several are requested the last
one to finish is what readers get.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Sequence

from pydantic import BaseModel, ValidationError

from documentmitra.core.config import settings as app_config
from documentmitra.core.exceptions import RecordSourceError
from documentmitra.db.database import AsyncSessionLocal
from documentmitra.models.service import ServiceNode, ServiceRecord
from documentmitra.models.settings import AppSettings
from documentmitra.services.record_source import RecordSource, SqlAlchemyRecordSource
from documentmitra.services.search_service import search_services
from documentmitra.services.service_tree import build_tree, find_by_id, flatten, get_breadcrumbs

logger = logging.getLogger(__name__)

Listener = Callable[["CatalogSnapshot"], None]


class CatalogSnapshot(BaseModel):
    services: List[ServiceNode] = []
    flat: List[ServiceNode] = []
    featured: List[ServiceNode] = []
    settings: AppSettings = AppSettings()
    loaded_at: Optional[datetime] = None

    class Config:
        frozen = True


def select_featured(records: Sequence[ServiceRecord], limit: int) -> List[ServiceNode]:
    """Top-level featured services in fetch order, without sub-services."""
    featured = [r for r in records if r.is_featured and r.parent_id is None]
    return [ServiceNode(**dict(r), children=[]) for r in featured[:max(limit, 0)]]


def build_snapshot(records: Sequence[ServiceRecord], stored_settings: Optional[Dict[str, Any]]) -> CatalogSnapshot:
    try:
        site_settings = AppSettings.merged(stored_settings)
    except ValidationError as e:
        logger.warning(f"Stored app settings are invalid, using defaults: {e}")
        site_settings = AppSettings()

    forest = build_tree(records)
    return CatalogSnapshot(
        services=forest,
        flat=flatten(forest),
        featured=select_featured(records, site_settings.homepage_service_limit),
        settings=site_settings,
        loaded_at=datetime.now(timezone.utc),
    )


class ServiceCatalog:
    def __init__(self, source: RecordSource):
        self.source = source
        self.loading = True
        self._snapshot = CatalogSnapshot()
        self._lock = asyncio.Lock()
        self._listeners: List[Listener] = []

    @property
    def snapshot(self) -> CatalogSnapshot:
        return self._snapshot

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with every new snapshot. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def refresh(self) -> CatalogSnapshot:
        """Reload services and settings from the record source.

        A failed fetch clears the services rather than keeping stale data;
        the previously loaded site settings are kept.
        """
        async with self._lock:
            try:
                records = await self.source.fetch_services()
                stored_settings = await self.source.fetch_settings()
            except RecordSourceError as e:
                logger.error(f"Error fetching catalog data: {e}")
                snapshot = CatalogSnapshot(settings=self._snapshot.settings)
            else:
                snapshot = build_snapshot(records, stored_settings)
                logger.info(f"Catalog loaded: {len(snapshot.flat)} services, {len(snapshot.services)} top-level")
            self._snapshot = snapshot
            self.loading = False

        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Catalog listener failed")
        return snapshot

    def get_service(self, service_id: int) -> Optional[ServiceNode]:
        return find_by_id(self._snapshot.services, service_id)

    def get_breadcrumbs(self, service_id: int) -> List[ServiceNode]:
        return get_breadcrumbs(self._snapshot.services, service_id)

    def search(self, query: str, limit: Optional[int] = None) -> List[ServiceNode]:
        return search_services(
            self._snapshot.flat,
            query,
            limit=app_config.SEARCH_SUGGESTION_LIMIT if limit is None else limit,
            min_length=app_config.SEARCH_MIN_QUERY_LENGTH,
        )


# Global instance
catalog = ServiceCatalog(SqlAlchemyRecordSource(AsyncSessionLocal))
