"""Course + health routes — HTTP tests over the overridden catalog.

Tests cover:
    - Listing: default title order, search, instructor filter, sort, count/total/filtered
    - Featured, instructors, slug lookup, 404 envelope
    - A wrongly typed dataset record is skipped, not a 500
    - Interaction tracking → 202 and the matching analytics event
    - Dataset failure → 503 envelope; readiness probe
"""

from music_school.api.dependencies import get_catalog_service
from music_school.core.errors import CatalogDataError
from music_school.main import app
from music_school.services.catalog_service import CatalogService


async def test_list_courses_default_order(client):
    resp = await client.get("/api/v1/courses")
    assert resp.status_code == 200
    data = resp.json()
    assert [c["title"] for c in data["courses"]] == [
        "Advanced Vocals", "Guitar Basics", "Piano for Beginners",
    ]
    assert data["count"] == 3
    assert data["total"] == 3
    assert data["filtered"] is False
    assert data["courses"][0]["isFeatured"] is False


async def test_search_matches_instructor_case_insensitively(client):
    resp = await client.get("/api/v1/courses", params={"search": "JANE"})
    data = resp.json()
    assert [c["slug"] for c in data["courses"]] == ["piano-for-beginners"]
    assert data["filtered"] is True
    assert data["total"] == 3


async def test_instructor_filter_and_price_sort(client):
    resp = await client.get(
        "/api/v1/courses", params={"instructor": "John Doe", "sort": "price"},
    )
    assert [c["id"] for c in resp.json()["courses"]] == [1]

    resp = await client.get("/api/v1/courses", params={"sort": "price"})
    assert [c["price"] for c in resp.json()["courses"]] == [79.99, 99.99, 109.99]


async def test_no_match_returns_empty_list(client):
    resp = await client.get("/api/v1/courses", params={"search": "theremin"})
    data = resp.json()
    assert data["courses"] == []
    assert data["count"] == 0


async def test_unknown_sort_rejected(client):
    resp = await client.get("/api/v1/courses", params={"sort": "rating"})
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_featured_and_instructors(client):
    featured = (await client.get("/api/v1/courses/featured")).json()["courses"]
    assert [c["id"] for c in featured] == [1, 2, 4]

    resp = await client.get("/api/v1/courses/instructors")
    assert resp.json() == {"instructors": ["Emily Johnson", "Jane Smith", "John Doe"]}


async def test_course_by_slug(client):
    resp = await client.get("/api/v1/courses/guitar-basics")
    assert resp.status_code == 200
    assert resp.json()["instructor"] == "John Doe"


async def test_unknown_slug_404(client):
    resp = await client.get("/api/v1/courses/drums-101")
    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_course_click_tracked(client, tracker, sink):
    resp = await client.post(
        "/api/v1/courses/4/interactions", json={"action": "click", "location": "featured_courses"},
    )
    assert resp.status_code == 202
    assert resp.json() == {"accepted": True, "event": "course_click"}
    await tracker.drain()
    assert sink.events[0][1]["course_title"] == "Featured Without Image"


async def test_course_enroll_tracked(client, tracker, sink):
    resp = await client.post("/api/v1/courses/2/interactions", json={"action": "enroll"})
    assert resp.json()["event"] == "course_interaction"
    await tracker.drain()
    assert sink.events == [("course_interaction", {
        "course_id": 2,
        "course_title": "Piano for Beginners",
        "action": "enroll",
        "location": "courses_page",
    })]


async def test_interaction_unknown_course_404(client, sink):
    resp = await client.post("/api/v1/courses/99/interactions", json={"action": "view"})
    assert resp.status_code == 404
    assert sink.events == []


async def test_catalog_failure_is_503(client):
    def broken():
        raise CatalogDataError("missing or non-array 'courses'")

    app.dependency_overrides[get_catalog_service] = broken
    resp = await client.get("/api/v1/courses")
    assert resp.status_code == 503
    error = resp.json()["error"]
    assert error["code"] == "CATALOG_DATA_ERROR"
    assert error["message"] == "Unable to load courses. Please try refreshing the page."


async def test_unknown_route_404(client):
    resp = await client.get("/api/v1/lessons")
    assert resp.status_code == 404
    assert resp.json()["error"]["message"] == "The page you are looking for does not exist."


async def test_wrongly_typed_record_does_not_break_listing(client, catalog):
    broken = {**catalog.records[0], "id": "abc", "slug": "broken"}
    service = CatalogService([*catalog.records, broken])
    app.dependency_overrides[get_catalog_service] = lambda: service

    resp = await client.get("/api/v1/courses")
    assert resp.status_code == 200
    assert [c["slug"] for c in resp.json()["courses"]].count("broken") == 0
    assert (await client.get("/api/v1/courses/featured")).status_code == 200
    assert (await client.get("/api/v1/courses/broken")).status_code == 404


# ─── Health ──────────────────────────────────────────────────────

async def test_health(client):
    resp = await client.get("/api/v1/health/")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


async def test_ready_without_catalog(client, monkeypatch):
    monkeypatch.setattr(app.state, "catalog", None, raising=False)
    resp = await client.get("/api/v1/health/ready")
    assert resp.status_code == 503
    assert resp.json()["reason"] == "catalog_unavailable"


async def test_ready_with_catalog(client, catalog, monkeypatch):
    monkeypatch.setattr(app.state, "catalog", catalog, raising=False)
    resp = await client.get("/api/v1/health/ready")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ready", "checks": {"catalog": 3}}
