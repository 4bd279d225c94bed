"""
Test settings (extends base).

- In-memory SQLite and a fast password hasher keep the suite quick.
- Ownership log channels stay quiet; tests capture them with `assertLogs`.
"""

from .base import *  # noqa

DEBUG = False
SECRET_KEY = "test-only-secret"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

LOGGING["loggers"]["ownership.changes"]["level"] = "WARNING"  # type: ignore[name-defined]
