"""
Unit tests for CeleryLastSeenDispatcher.
"""
import asyncio
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest
from prometheus_client import REGISTRY

from core.tasks import touch_last_seen_task
from licenses.application.commands.validate_license import ValidateLicenseCommand
from licenses.application.handlers.validate_license_handler import ValidateLicenseHandler
from licenses.infrastructure.celery_last_seen_dispatcher import CeleryLastSeenDispatcher


def publish_failures():
    value = REGISTRY.get_sample_value("last_seen_touch_failures_total", {"stage": "publish"})
    return value or 0.0


@pytest.fixture
def executor():
    """Single worker thread for broker publishes."""
    pool = ThreadPoolExecutor(max_workers=1)
    yield pool
    pool.shutdown(wait=True)


@pytest.fixture
def stalled_broker(monkeypatch):
    """Replace the task publish with one that blocks until released."""
    release = threading.Event()
    published = []

    def apply_async(args=None, **options):
        release.wait(timeout=5)
        published.append((args, options))

    monkeypatch.setattr(touch_last_seen_task, "apply_async", apply_async)
    yield release, published
    release.set()


@pytest.mark.asyncio
class TestCeleryLastSeenDispatcher:
    """Tests for CeleryLastSeenDispatcher."""

    async def test_dispatch_does_not_wait_for_broker(self, executor, stalled_broker, now):
        """Test dispatch returns while the publish is still blocked."""
        release, published = stalled_broker
        dispatcher = CeleryLastSeenDispatcher(executor=executor)

        await asyncio.wait_for(dispatcher.dispatch("acme", now), timeout=1)
        assert published == []

        release.set()
        executor.shutdown(wait=True)
        assert published == [(("acme", now.isoformat()), {"retry": False})]

    async def test_validation_not_delayed_by_broker(
        self, executor, stalled_broker, memory_repository, make_record, clock
    ):
        """Test a valid license is answered while the broker is unresponsive."""
        release, published = stalled_broker
        memory_repository.put(make_record(client_id="acme"))
        handler = ValidateLicenseHandler(
            license_repository=memory_repository,
            last_seen_dispatcher=CeleryLastSeenDispatcher(executor=executor),
            clock=clock,
        )

        result = await asyncio.wait_for(
            handler.handle(ValidateLicenseCommand(client_id="acme")), timeout=1
        )

        assert result.valid is True
        assert published == []
        release.set()

    async def test_publish_failure_is_counted(self, executor, monkeypatch, now):
        """Test a broker error is absorbed and counted."""

        def apply_async(args=None, **options):
            raise ConnectionError("broker unreachable")

        monkeypatch.setattr(touch_last_seen_task, "apply_async", apply_async)
        before = publish_failures()

        await CeleryLastSeenDispatcher(executor=executor).dispatch("acme", now)
        executor.shutdown(wait=True)

        assert publish_failures() == before + 1

    async def test_inline_publishes_before_returning(self, monkeypatch, now):
        """Test eager mode publishes on the calling path."""
        published = []

        def apply_async(args=None, **options):
            published.append(args)

        monkeypatch.setattr(touch_last_seen_task, "apply_async", apply_async)

        await CeleryLastSeenDispatcher(inline=True).dispatch("acme", now)

        assert published == [("acme", now.isoformat())]
