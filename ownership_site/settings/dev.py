"""
Developer settings (extends base).

Defaults
--------
- DEBUG defaults True (overridable via env).
- SQLite by default unless `DATABASE_URL` is provided.
- Ownership debug logs (hook wiring, skipped default owners) go to the console.

Security
--------
- Do not use these settings in production.
"""

from .base import *  # noqa

DEBUG = env.bool("DEBUG", True)

LOGGING["loggers"]["ownership"]["level"] = env("OWNERSHIP_DEBUG_LOG_LEVEL", default="DEBUG")  # type: ignore[name-defined]
