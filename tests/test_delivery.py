# tests/test_delivery.py
"""Tests for delivery receipts, the sweep scheduler and lifecycle management."""

import asyncio
from unittest.mock import MagicMock

import pytest

from infohub.core.delivery import InMemoryDeliveryStore, delivery_key
from infohub.core.lifecycle import LifecycleManager
from infohub.core.sweeper import SWEEP_JOB_ID, SweepScheduler


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestDeliveryKey:
    def test_prefers_event_id(self):
        assert delivery_key("Ev1", "C1", "U1", "1.2") == "Ev1"

    def test_falls_back_to_channel_user_ts(self):
        assert delivery_key("", "C1", "U1", "1.2") == "C1:U1:1.2"
        assert delivery_key(None, "C1", "U1", "1.2") == "C1:U1:1.2"

    def test_empty_when_no_parts(self):
        assert delivery_key("", "", "", "") == ""
        assert delivery_key(None) == ""


class TestInMemoryDeliveryStore:
    """Tests for InMemoryDeliveryStore."""

    def test_first_claim_wins(self):
        store = InMemoryDeliveryStore()

        assert store.claim("Ev1") is True
        assert store.claim("Ev1") is False
        assert store.claim("Ev2") is True

    def test_receipt_expires_after_ttl(self):
        clock = FakeClock()
        store = InMemoryDeliveryStore(ttl=300, clock=clock)
        store.claim("Ev1")

        clock.now += 299
        assert store.get("Ev1") == 1300.0
        assert store.claim("Ev1") is False

        clock.now += 1
        assert store.get("Ev1") is None
        assert store.claim("Ev1") is True

    def test_put_and_custom_ttl(self):
        clock = FakeClock()
        store = InMemoryDeliveryStore(ttl=300, clock=clock)

        store.put("Ev1", ttl=10)

        assert store.get("Ev1") == 1010.0
        assert store.get("missing") is None

    def test_sweep_removes_only_expired(self):
        clock = FakeClock()
        store = InMemoryDeliveryStore(ttl=300, clock=clock)
        store.put("old", ttl=5)
        store.put("new")

        clock.now += 10
        removed = store.sweep()

        assert removed == 1
        assert len(store) == 1
        assert store.get("new") is not None

    def test_instances_do_not_share_receipts(self):
        """Receipts are per process; another instance processes a retry again."""
        first, second = InMemoryDeliveryStore(), InMemoryDeliveryStore()

        assert first.claim("Ev1") is True
        assert second.claim("Ev1") is True


class TestSweepScheduler:
    """Tests for SweepScheduler."""

    def test_run_once_sweeps_store(self):
        store = MagicMock()
        store.sweep.return_value = 3

        assert SweepScheduler(store).run_once() == 3

    def test_run_once_contains_failures(self):
        store = MagicMock()
        store.sweep.side_effect = RuntimeError("boom")

        assert SweepScheduler(store).run_once() == 0

    def test_registers_interval_job(self):
        scheduler = SweepScheduler(InMemoryDeliveryStore(), interval=30)

        job = scheduler._scheduler.get_job(SWEEP_JOB_ID)

        assert job is not None
        assert job.trigger.interval.total_seconds() == 30

    @pytest.mark.asyncio
    async def test_start_and_shutdown(self):
        scheduler = SweepScheduler(InMemoryDeliveryStore(), interval=60)

        scheduler.start()
        assert scheduler.running is True

        scheduler.shutdown()
        assert scheduler.running is False

        await asyncio.sleep(0)
        assert scheduler._scheduler.running is False

    @pytest.mark.asyncio
    async def test_restart_after_shutdown_completes(self):
        scheduler = SweepScheduler(InMemoryDeliveryStore(), interval=60)
        scheduler.start()
        scheduler.shutdown()
        await asyncio.sleep(0)

        scheduler.start()

        assert scheduler.running is True
        assert scheduler._scheduler.running is True
        scheduler.shutdown()
        await asyncio.sleep(0)


class TestLifecycleManager:
    """Tests for LifecycleManager."""

    @pytest.mark.asyncio
    async def test_starts_in_order_and_stops_in_reverse(self):
        calls: list[str] = []
        manager = LifecycleManager()
        for name in ("a", "b"):
            component = MagicMock()
            component.start.side_effect = lambda n=name: calls.append(f"start {n}")
            component.shutdown.side_effect = lambda n=name: calls.append(f"stop {n}")
            manager.register(name, component)

        await manager.startup()
        assert manager.is_started is True
        await manager.shutdown()

        assert calls == ["start a", "start b", "stop b", "stop a"]
        assert manager.is_started is False
        assert manager.component_count == 2

    @pytest.mark.asyncio
    async def test_shutdown_continues_after_error(self):
        manager = LifecycleManager()
        failing, healthy = MagicMock(), MagicMock()
        failing.shutdown.side_effect = RuntimeError("boom")
        manager.register("healthy", healthy)
        manager.register("failing", failing)

        await manager.startup()
        await manager.shutdown()

        healthy.shutdown.assert_called_once()

    @pytest.mark.asyncio
    async def test_shutdown_without_startup_is_noop(self):
        component = MagicMock()
        manager = LifecycleManager()
        manager.register("c", component)

        await manager.shutdown()

        component.shutdown.assert_not_called()

    @pytest.mark.asyncio
    async def test_failed_start_stops_started_components(self):
        started, broken, never = MagicMock(), MagicMock(), MagicMock()
        broken.start.side_effect = RuntimeError("port in use")
        manager = LifecycleManager()
        manager.register("started", started)
        manager.register("broken", broken)
        manager.register("never", never)

        with pytest.raises(RuntimeError, match="port in use"):
            await manager.startup()

        started.shutdown.assert_called_once()
        never.start.assert_not_called()
        assert manager.is_started is False
