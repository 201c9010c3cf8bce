"""
Tests for the monitor store.
"""
from datetime import datetime

import pytest

from uptime_monitor.models import STATUS_HEALTHY, STATUS_UNHEALTHY, STATUS_UNKNOWN
from uptime_monitor.services.store import MonitorNotFound


class TestMonitorStoreCrud:

    @pytest.mark.asyncio
    async def test_create_starts_unknown(self, store, sample_monitor_data):
        monitor = await store.create(**sample_monitor_data)

        assert monitor.id is not None
        assert monitor.status == STATUS_UNKNOWN
        assert monitor.last_check is None
        assert monitor.last_response_code == 0
        assert monitor.last_response_time_ms == 0

    @pytest.mark.asyncio
    async def test_list_all_orders_by_id(self, store):
        first = await store.create(name="b", type="http", url="https://b.example")
        second = await store.create(name="a", type="http", url="https://a.example")

        monitors = await store.list_all()

        assert [m.id for m in monitors] == [first.id, second.id]

    @pytest.mark.asyncio
    async def test_get_missing_raises_not_found(self, store):
        with pytest.raises(MonitorNotFound) as exc_info:
            await store.get(404)
        assert exc_info.value.monitor_id == 404

    @pytest.mark.asyncio
    async def test_delete(self, store, sample_monitor_data):
        monitor = await store.create(**sample_monitor_data)

        assert await store.delete(monitor.id) is True
        assert await store.delete(monitor.id) is False
        assert await store.list_all() == []


class TestUpdateProbeResult:

    @pytest.mark.asyncio
    async def test_writes_probe_fields(self, store, sample_monitor_data):
        monitor = await store.create(**sample_monitor_data)
        checked_at = datetime(2024, 5, 1, 12, 0, 0)

        updated = await store.update_probe_result(
            monitor.id, STATUS_HEALTHY, checked_at, response_code=200, latency_ms=42
        )

        assert updated is True
        stored = await store.get(monitor.id)
        assert stored.status == STATUS_HEALTHY
        assert stored.last_check == checked_at
        assert stored.last_response_code == 200
        assert stored.last_response_time_ms == 42

    @pytest.mark.asyncio
    async def test_does_not_touch_metadata(self, store, sample_monitor_data):
        monitor = await store.create(**sample_monitor_data)
        await store.update_details(monitor.id, name="Renamed")

        await store.update_probe_result(
            monitor.id, STATUS_UNHEALTHY, datetime(2024, 5, 1), response_code=0, latency_ms=0
        )

        stored = await store.get(monitor.id)
        assert stored.name == "Renamed"
        assert stored.url == sample_monitor_data["url"]

    @pytest.mark.asyncio
    async def test_missing_monitor_returns_false_and_creates_nothing(self, store):
        updated = await store.update_probe_result(
            99, STATUS_HEALTHY, datetime(2024, 5, 1), response_code=200, latency_ms=5
        )

        assert updated is False
        assert await store.list_all() == []


class TestUpdateDetails:

    @pytest.mark.asyncio
    async def test_only_supplied_fields_change(self, store, sample_monitor_data):
        monitor = await store.create(**sample_monitor_data)

        updated = await store.update_details(monitor.id, type="api")

        assert updated.type == "api"
        assert updated.name == sample_monitor_data["name"]
        assert updated.url == sample_monitor_data["url"]

    @pytest.mark.asyncio
    async def test_name_change_keeps_probe_result(self, store, sample_monitor_data):
        monitor = await store.create(**sample_monitor_data)
        await store.update_probe_result(
            monitor.id, STATUS_HEALTHY, datetime(2024, 5, 1), response_code=200, latency_ms=12
        )

        updated = await store.update_details(monitor.id, name="New name")

        assert updated.status == STATUS_HEALTHY
        assert updated.last_response_code == 200

    @pytest.mark.asyncio
    async def test_url_change_resets_probe_result(self, store, sample_monitor_data):
        monitor = await store.create(**sample_monitor_data)
        await store.update_probe_result(
            monitor.id, STATUS_HEALTHY, datetime(2024, 5, 1), response_code=200, latency_ms=12
        )

        updated = await store.update_details(monitor.id, url="https://other.example/")

        assert updated.url == "https://other.example/"
        assert updated.status == STATUS_UNKNOWN
        assert updated.last_check is None
        assert updated.last_response_code == 0
        assert updated.last_response_time_ms == 0

    @pytest.mark.asyncio
    async def test_same_url_keeps_probe_result(self, store, sample_monitor_data):
        monitor = await store.create(**sample_monitor_data)
        await store.update_probe_result(
            monitor.id, STATUS_HEALTHY, datetime(2024, 5, 1), response_code=200, latency_ms=12
        )

        updated = await store.update_details(monitor.id, url=sample_monitor_data["url"])

        assert updated.status == STATUS_HEALTHY

    @pytest.mark.asyncio
    async def test_missing_monitor_raises_not_found(self, store):
        with pytest.raises(MonitorNotFound):
            await store.update_details(7, name="x")
