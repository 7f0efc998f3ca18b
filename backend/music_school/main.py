"""Music School API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map MusicSchoolError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Course dataset, clients and form registry created once per lifespan on app.state
    - A dataset load failure does not stop startup: catalog routes answer 503, readiness fails

Design Decisions:
    - Lifespan over @app.on_event
    - Analytics tracker is lifespan-scoped and injected, never a module global
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from music_school.api.error_handlers import register_error_handlers
from music_school.api.routes import analytics, contact, courses, health
from music_school.config import Settings, get_settings
from music_school.core.domain_types import FormId
from music_school.core.errors import CatalogDataError
from music_school.infrastructure.analytics_client import AnalyticsClient
from music_school.infrastructure.course_dataset import load_course_records
from music_school.infrastructure.emailjs_client import EmailJSSender
from music_school.infrastructure.observability import setup_logging
from music_school.services.catalog_service import CatalogService
from music_school.services.event_tracker import EventTracker
from music_school.services.form_registry import FormRegistry
from music_school.services.submission_controller import SubmissionController

logger = logging.getLogger(__name__)


def _load_catalog(app: FastAPI, settings: Settings) -> None:
    try:
        records = load_course_records(settings.courses_data_path)
        app.state.catalog = CatalogService(records, settings.featured_limit)
        app.state.catalog_error = None
    except CatalogDataError as e:
        logger.error(f"Course catalog unavailable: {e.message}", extra={"error_code": e.code})
        app.state.catalog = None
        app.state.catalog_error = e


def _form_factory(settings: Settings, sender: EmailJSSender, tracker: EventTracker):
    def build(form_id: FormId) -> SubmissionController:
        return SubmissionController(
            sender,
            tracker,
            form_id=str(form_id),
            form_name=settings.contact_form_name,
            reset_delay_seconds=settings.success_reset_seconds,
        )
    return build


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    _load_catalog(app, settings)

    sender = EmailJSSender(
        api_url=settings.emailjs_api_url,
        service_id=settings.emailjs_service_id,
        template_id=settings.emailjs_template_id,
        public_key=settings.emailjs_public_key,
        private_key=settings.emailjs_private_key,
        timeout_seconds=settings.message_send_timeout_seconds,
    )
    analytics_client = AnalyticsClient(
        endpoint=settings.analytics_endpoint,
        measurement_id=settings.analytics_measurement_id,
        api_secret=settings.analytics_api_secret,
        enabled=bool(settings.analytics_enabled),
        max_attempts=settings.analytics_max_retries,
        retry_delay_ms=settings.analytics_retry_delay_ms,
        timeout_seconds=settings.analytics_timeout_seconds,
    )
    tracker = EventTracker(analytics_client)
    app.state.tracker = tracker
    app.state.forms = FormRegistry(
        _form_factory(settings, sender, tracker),
        ttl_seconds=settings.contact_form_ttl_seconds,
        max_forms=settings.contact_form_max_instances,
    )
    logger.info("Music School API started")
    yield
    logger.info("Music School API shutting down")
    app.state.forms.close_all()
    await tracker.drain()
    await sender.aclose()
    await analytics_client.aclose()


app = FastAPI(
    title="Music School API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(courses.router)
app.include_router(contact.router)
app.include_router(analytics.router)

register_error_handlers(app)
