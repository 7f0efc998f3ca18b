"""Root conftest — shared test configuration."""

import os

# Ensure tests never reach real collaborators
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("ANALYTICS_ENABLED", "false")
os.environ.setdefault("EMAILJS_SERVICE_ID", "")
os.environ.setdefault("LOG_FORMAT", "text")
