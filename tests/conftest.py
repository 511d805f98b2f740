"""Root conftest — shared test configuration."""

import os

# Ensure tests never talk to a real database or CDN
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SESSION_SECRET", "test-session-secret")
os.environ.setdefault("CDN_UPLOAD_URL", "https://cdn.test/api/upload")
os.environ.setdefault("LOG_FORMAT", "text")
