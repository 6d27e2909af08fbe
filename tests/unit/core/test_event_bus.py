"""
Unit tests for the in-memory event bus.
"""
import logging
import uuid

import pytest

from applications.domain.events import ApplicationStatusChanged, ApplicationSubmitted
from core.domain.events import EventHandler
from core.infrastructure.events import InMemoryEventBus


class _Recorder(EventHandler):
    def __init__(self):
        self.events = []

    async def handle(self, event):
        self.events.append(event)


class _Failing(EventHandler):
    async def handle(self, event):
        raise RuntimeError("handler down")


@pytest.mark.asyncio
class TestInMemoryEventBus:
    """Tests for InMemoryEventBus."""

    async def test_dispatch_by_exact_type(self):
        """Test only subscribers of the event's type receive it."""
        bus = InMemoryEventBus()
        submitted, changed = _Recorder(), _Recorder()
        bus.subscribe(ApplicationSubmitted, submitted)
        bus.subscribe(ApplicationStatusChanged, changed)

        await bus.publish(ApplicationSubmitted(application_id=uuid.uuid4(), owner_id=uuid.uuid4()))

        assert len(submitted.events) == 1
        assert changed.events == []

    async def test_subscribe_twice_delivers_once(self):
        """Test repeated subscription is ignored."""
        bus = InMemoryEventBus()
        recorder = _Recorder()
        bus.subscribe(ApplicationSubmitted, recorder)
        bus.subscribe(ApplicationSubmitted, recorder)

        await bus.publish(ApplicationSubmitted(application_id=uuid.uuid4(), owner_id=uuid.uuid4()))

        assert len(recorder.events) == 1

    async def test_failing_handler_is_isolated(self, caplog):
        """Test one failing handler neither raises nor blocks the others."""
        bus = InMemoryEventBus()
        recorder = _Recorder()
        bus.subscribe(ApplicationSubmitted, _Failing())
        bus.subscribe(ApplicationSubmitted, recorder)

        with caplog.at_level(logging.ERROR, logger="core.infrastructure.events"):
            await bus.publish(
                ApplicationSubmitted(application_id=uuid.uuid4(), owner_id=uuid.uuid4())
            )

        assert len(recorder.events) == 1
        assert "handler down" in caplog.text

    def test_event_to_dict(self):
        """Test serialization includes identity and payload."""
        application_id = uuid.uuid4()
        event = ApplicationStatusChanged(
            application_id=application_id, from_status="requested", to_status="in_progress"
        )

        data = event.to_dict()

        assert data["event_type"] == "ApplicationStatusChanged"
        assert data["aggregate_id"] == str(application_id)
        assert data["application_id"] == str(application_id)
        assert data["to_status"] == "in_progress"
