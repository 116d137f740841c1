"""Root conftest: shared test configuration."""

import os

# Ensure importing sql_gateway.main never picks up a real secret or database
os.environ.setdefault("API_KEY", "test-api-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
