"""Tests for the shared catalog snapshot and its refresh cycle."""
import asyncio

from documentmitra.core.exceptions import RecordSourceError
from documentmitra.models.service import ServiceRecord
from documentmitra.services.catalog_service import ServiceCatalog
from documentmitra.services.record_source import StaticRecordSource


class FailingSource:
    async def fetch_services(self):
        raise RecordSourceError("database unavailable")

    async def fetch_settings(self):
        return None


def test_refresh_builds_snapshot(service_catalog):
    snapshot = service_catalog.snapshot
    assert service_catalog.loading is False
    assert [n.name for n in snapshot.services] == ["Passport", "Transport", "Voter ID"]
    assert len(snapshot.flat) == 8
    assert snapshot.loaded_at is not None


def test_settings_merged_over_defaults(service_catalog):
    site = service_catalog.snapshot.settings
    assert site.website_name == "Test Portal"
    assert site.favicon_text == "DM"
    assert site.max_document_upload_size_mb == 5


def test_featured_limited_by_settings(service_catalog):
    featured = service_catalog.snapshot.featured
    assert [n.name for n in featured] == ["Passport"]
    assert featured[0].children == []


def test_invalid_stored_settings_fall_back_to_defaults(catalog_records):
    service_catalog = ServiceCatalog(StaticRecordSource(
        catalog_records, settings={"homepage_service_limit": "many"},
    ))
    snapshot = asyncio.run(service_catalog.refresh())
    assert snapshot.settings.homepage_service_limit == 8
    assert [n.name for n in snapshot.featured] == ["Passport", "Transport"]


def test_lookups(service_catalog):
    assert service_catalog.get_service(20).name == "Driving License"
    assert service_catalog.get_service(999) is None
    assert [n.id for n in service_catalog.get_breadcrumbs(21)] == [2, 20, 21]
    assert [n.name for n in service_catalog.search("licen")] == ["Driving License", "Learner License"]


def test_failed_refresh_clears_services_but_keeps_settings(service_catalog):
    service_catalog.source = FailingSource()
    snapshot = asyncio.run(service_catalog.refresh())
    assert snapshot.services == []
    assert snapshot.flat == []
    assert snapshot.settings.website_name == "Test Portal"
    assert service_catalog.get_service(1) is None


def test_failed_first_refresh_uses_default_settings():
    service_catalog = ServiceCatalog(FailingSource())
    snapshot = asyncio.run(service_catalog.refresh())
    assert snapshot.services == []
    assert snapshot.settings.website_name == "Documentmitra"


def test_refresh_replaces_snapshot_and_notifies(catalog_records):
    source = StaticRecordSource(catalog_records)
    service_catalog = ServiceCatalog(source)
    seen = []
    unsubscribe = service_catalog.subscribe(lambda snap: seen.append(len(snap.flat)))

    asyncio.run(service_catalog.refresh())
    old = service_catalog.snapshot
    source.records = [ServiceRecord(id=1, name="Passport")]
    asyncio.run(service_catalog.refresh())

    assert seen == [8, 1]
    assert len(old.flat) == 8
    assert [n.name for n in service_catalog.snapshot.flat] == ["Passport"]

    unsubscribe()
    asyncio.run(service_catalog.refresh())
    assert seen == [8, 1]


def test_failing_listener_does_not_stop_others(catalog_records):
    service_catalog = ServiceCatalog(StaticRecordSource(catalog_records))
    seen = []

    def broken(snapshot):
        raise RuntimeError("boom")

    service_catalog.subscribe(broken)
    service_catalog.subscribe(lambda snap: seen.append(True))
    asyncio.run(service_catalog.refresh())
    assert seen == [True]


def test_concurrent_refreshes_are_serialized(catalog_records):
    service_catalog = ServiceCatalog(StaticRecordSource(catalog_records))

    async def run_both():
        return await asyncio.gather(service_catalog.refresh(), service_catalog.refresh())

    first, second = asyncio.run(run_both())
    assert service_catalog.snapshot is second
    assert len(first.flat) == len(second.flat) == 8
