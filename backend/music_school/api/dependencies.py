"""API Dependencies — resolve lifespan-scoped services from app.state.

Invariants:
    - Services are created once in main.lifespan and stored on app.state
    - A failed dataset load is re-raised on every catalog request (503 full-page error)
"""

from fastapi import Request

from music_school.core.errors import CatalogDataError
from music_school.services.catalog_service import CatalogService
from music_school.services.event_tracker import EventTracker
from music_school.services.form_registry import FormRegistry


def get_catalog_service(request: Request) -> CatalogService:
    catalog = getattr(request.app.state, "catalog", None)
    if catalog is None:
        error = getattr(request.app.state, "catalog_error", None)
        raise error or CatalogDataError("course catalog not loaded")
    return catalog


def get_event_tracker(request: Request) -> EventTracker:
    return request.app.state.tracker


def get_form_registry(request: Request) -> FormRegistry:
    return request.app.state.forms
