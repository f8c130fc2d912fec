"""Test package. Settings are read at import time, so the test environment is set here first."""

import os

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JWT_SECRET", "test-access-secret")
os.environ.setdefault("REFRESH_TOKEN_SECRET", "test-refresh-secret")
os.environ.setdefault("ADMIN_KEY", "test-admin-key")
os.environ.setdefault("API_KEY", "test-api-key")
