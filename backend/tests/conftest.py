"""Root conftest: shared test configuration."""

import os

# Ensure tests never pick up a real token or a developer's API URL
os.environ.setdefault("AUTH_TOKEN", "")
os.environ.setdefault("API_BASE_URL", "http://test/api")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_FORMAT", "text")
