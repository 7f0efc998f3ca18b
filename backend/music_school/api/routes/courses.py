"""Course Routes — catalog listing, featured widget, lookups, interaction tracking.

Invariants:
    - Listing runs the full validate → search → instructor → sort pipeline
    - /featured and /instructors are declared before /{slug}
    - Interaction tracking returns 202 without waiting for analytics delivery
"""

import logging

from fastapi import APIRouter, Depends, Query, status

from music_school.api.dependencies import get_catalog_service, get_event_tracker
from music_school.core.domain_types import ALL_INSTRUCTORS, CourseAction
from music_school.schemas.analytics import EventAccepted
from music_school.schemas.course import (
    CatalogResponse,
    CourseInteractionCreate,
    CourseOut,
    FeaturedResponse,
    InstructorsResponse,
)
from music_school.services.catalog_service import CatalogService
from music_school.services.event_tracker import EventTracker

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/courses", tags=["courses"])


@router.get("", response_model=CatalogResponse)
async def list_courses(
    search: str = Query("", max_length=200),
    instructor: str = Query(ALL_INSTRUCTORS, max_length=200),
    sort: str = Query("title", pattern=r"^(title|name|price|instructor)$"),
    catalog: CatalogService = Depends(get_catalog_service),
):
    """Filtered, ordered course list."""
    return CatalogResponse.from_view(catalog.view(search, instructor, sort))


@router.get("/featured", response_model=FeaturedResponse)
async def featured_courses(catalog: CatalogService = Depends(get_catalog_service)):
    return FeaturedResponse(
        courses=[CourseOut.from_course(c) for c in catalog.featured()],
    )


@router.get("/instructors", response_model=InstructorsResponse)
async def instructors(catalog: CatalogService = Depends(get_catalog_service)):
    return InstructorsResponse(instructors=catalog.instructors())


@router.get("/{slug}", response_model=CourseOut)
async def get_course(slug: str, catalog: CatalogService = Depends(get_catalog_service)):
    return CourseOut.from_course(catalog.get(slug))


@router.post(
    "/{course_id}/interactions",
    response_model=EventAccepted,
    status_code=status.HTTP_202_ACCEPTED,
)
async def track_interaction(
    course_id: int,
    body: CourseInteractionCreate,
    catalog: CatalogService = Depends(get_catalog_service),
    tracker: EventTracker = Depends(get_event_tracker),
):
    """Report a view/click/enroll on a course."""
    course = catalog.get_by_id(course_id)
    if body.action == CourseAction.CLICK:
        tracker.track_course_click(course, body.location)
        return EventAccepted(event="course_click")
    tracker.track_course_interaction(course, body.action, body.location)
    return EventAccepted(event="course_interaction")
