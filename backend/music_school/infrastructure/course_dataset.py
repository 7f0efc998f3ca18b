"""Course Dataset — loads the static course JSON once at startup.

Invariants:
    - Document must be a JSON object with a top-level "courses" array
    - Shape errors raise CatalogDataError (full-page error state, reload required)
    - Returned records are the raw mappings; per-record validation is the catalog's job
    - Duplicate ids/slugs are logged, not rejected
"""

import json
import logging
from pathlib import Path
from typing import Any

from music_school.core.catalog import duplicate_keys, valid_courses
from music_school.core.errors import CatalogDataError, ErrorContext

logger = logging.getLogger(__name__)


def parse_course_document(document: Any) -> tuple[dict[str, Any], ...]:
    """Check the top-level shape and return the raw course records."""
    if not isinstance(document, dict):
        raise CatalogDataError("document root must be an object")
    courses = document.get("courses")
    if not isinstance(courses, list):
        raise CatalogDataError("missing or non-array 'courses'")

    dups = duplicate_keys(valid_courses(courses))
    if dups["ids"] or dups["slugs"]:
        logger.warning(
            f"Course dataset has duplicate keys: ids={dups['ids']} slugs={dups['slugs']}",
        )
    return tuple(courses)


def load_course_records(path: Path) -> tuple[dict[str, Any], ...]:
    """Read and shape-check the dataset file."""
    try:
        raw = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise CatalogDataError(
            f"cannot read {path}: {e.strerror or e}",
            ErrorContext(debug_info={"path": str(path)}),
        ) from e
    try:
        document = json.loads(raw)
    except json.JSONDecodeError as e:
        raise CatalogDataError(
            f"malformed JSON at line {e.lineno}",
            ErrorContext(debug_info={"path": str(path)}),
        ) from e

    records = parse_course_document(document)
    logger.info(f"Loaded {len(records)} course records from {path}")
    return records
