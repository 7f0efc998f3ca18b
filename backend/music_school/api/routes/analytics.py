"""Analytics Routes — page views, button clicks, scroll depth (fire-and-forget)."""

from fastapi import APIRouter, Depends, Header, status

from music_school.api.dependencies import get_event_tracker
from music_school.schemas.analytics import (
    ButtonClickCreate,
    EventAccepted,
    PageViewCreate,
    ScrollDepthCreate,
)
from music_school.services.event_tracker import EventTracker

router = APIRouter(prefix="/api/v1/analytics", tags=["analytics"])


@router.post("/page-views", response_model=EventAccepted, status_code=status.HTTP_202_ACCEPTED)
async def page_view(
    body: PageViewCreate,
    user_agent: str | None = Header(None),
    tracker: EventTracker = Depends(get_event_tracker),
):
    tracker.track_page_view(body.page, body.title, body.referrer, user_agent)
    return EventAccepted(event="page_view")


@router.post("/button-clicks", response_model=EventAccepted, status_code=status.HTTP_202_ACCEPTED)
async def button_click(
    body: ButtonClickCreate,
    tracker: EventTracker = Depends(get_event_tracker),
):
    tracker.track_button_click(body.button_name, body.location)
    return EventAccepted(event="button_click")


@router.post("/scroll-depth", response_model=EventAccepted, status_code=status.HTTP_202_ACCEPTED)
async def scroll_depth(
    body: ScrollDepthCreate,
    tracker: EventTracker = Depends(get_event_tracker),
):
    tracker.track_scroll_depth(body.depth)
    return EventAccepted(event="scroll_depth")
