"""Service test fixtures — fake collaborators + FastAPI test client.

Invariants:
    - Every test gets fresh fakes and a fresh FormRegistry
    - Lifespan-scoped services are replaced through app.dependency_overrides
    - FakeSender records every payload; its outcome is configurable per test
    - FakeSink records every tracked event and never fails

Design Decisions:
    - ASGITransport does not run the lifespan: dependencies are overridden instead
"""

import asyncio

import pytest
from httpx import ASGITransport, AsyncClient

from music_school.api.dependencies import (
    get_catalog_service,
    get_event_tracker,
    get_form_registry,
)
from music_school.core.boundary_protocols import SendResult
from music_school.main import app
from music_school.services.catalog_service import CatalogService
from music_school.services.event_tracker import EventTracker
from music_school.services.form_registry import FormRegistry
from music_school.services.submission_controller import SubmissionController


COURSE_RECORDS = [
    {
        "id": 1, "title": "Guitar Basics", "slug": "guitar-basics",
        "description": "Chords and strumming", "price": 99.99,
        "instructor": "John Doe", "isFeatured": True, "image": "/img/guitar.jpg",
    },
    {
        "id": 2, "title": "Piano for Beginners", "slug": "piano-for-beginners",
        "description": "Scales and reading", "price": 109.99,
        "instructor": "Jane Smith", "isFeatured": True, "image": "/img/piano.jpg",
    },
    {
        "id": 3, "title": "Advanced Vocals", "slug": "advanced-vocals",
        "description": "Range and breath", "price": 79.99,
        "instructor": "Emily Johnson", "isFeatured": False, "image": "/img/vocal.jpg",
    },
    {
        "id": 4, "title": "Featured Without Image", "slug": "featured-without-image",
        "description": "Only in the featured widget", "price": 10,
        "instructor": "John Doe", "isFeatured": True, "image": "",
    },
]


class FakeSender:
    """MessageSender fake: records payloads, returns or raises the configured outcome."""

    def __init__(self):
        self.payloads = []
        self.outcome: SendResult | Exception = SendResult(ok=True, status_code=200)
        self.gate: asyncio.Event | None = None

    async def send(self, payload):
        self.payloads.append(payload)
        if self.gate is not None:
            await self.gate.wait()
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome


class FakeSink:
    """AnalyticsSink fake: records events."""

    def __init__(self):
        self.events = []

    async def track(self, event_name, payload=None):
        self.events.append((event_name, payload or {}))
        return True

    def names(self):
        return [name for name, _ in self.events]


@pytest.fixture
def sender():
    return FakeSender()


@pytest.fixture
def sink():
    return FakeSink()


@pytest.fixture
def tracker(sink):
    return EventTracker(sink)


@pytest.fixture
def catalog():
    return CatalogService(COURSE_RECORDS, featured_limit=6)


@pytest.fixture
def controller(sender, tracker):
    ctl = SubmissionController(
        sender, tracker, form_id="test-form", reset_delay_seconds=0.01,
    )
    yield ctl
    ctl.close()


@pytest.fixture
def forms(sender, tracker):
    registry = FormRegistry(
        lambda form_id: SubmissionController(
            sender, tracker, form_id=str(form_id), reset_delay_seconds=0.01,
        ),
    )
    yield registry
    registry.close_all()


@pytest.fixture
async def client(catalog, tracker, forms):
    """FastAPI test client with lifespan services overridden."""
    app.dependency_overrides[get_catalog_service] = lambda: catalog
    app.dependency_overrides[get_event_tracker] = lambda: tracker
    app.dependency_overrides[get_form_registry] = lambda: forms

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    await tracker.drain()
