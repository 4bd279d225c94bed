"""
Base Django settings for the ownership project.

Layout
------
- Split settings: `base.py` (shared), `dev.py` (developer overrides), `test.py`
  (fast, in-memory test runs).
- `environ` is used to source configuration; a local `.env` is optional.

Ownership
---------
- `OWNERSHIP_OWNER_TYPES` maps short owner type tags to concrete models. It is
  read once by `ownership.apps.OwnershipConfig.ready()`; changing a tag after
  rows were written leaves those rows unresolvable (see `ownership_audit`).
- `OWNERSHIP_CURRENT_ACTOR_PROVIDER` names the zero-argument callable that
  returns the acting user (default: the per-request context variable bound by
  `ownership.middleware.CurrentActorMiddleware`).

API stack
---------
- Django 5.x + DRF + django-filter + drf-spectacular.
- SessionAuthentication with CSRF (kept enabled).

Observability
-------------
- `ownership.logging.ActorFilter` injects the acting owner into every log
  record; owner transitions are logged on the `ownership.changes` channel.
"""

from pathlib import Path
import environ

# ---------------------------------------------------------------------
# Paths & Env
# ---------------------------------------------------------------------
BASE_DIR = Path(__file__).resolve().parent.parent.parent
env = environ.Env(DEBUG=(bool, False))
env_file = BASE_DIR / ".env"
if env_file.exists():
    environ.Env.read_env(str(env_file))

# ---------------------------------------------------------------------
# Core
# ---------------------------------------------------------------------
SECRET_KEY = env("SECRET_KEY", default="dev-insecure-change-me")
DEBUG = env.bool("DEBUG", False)

ALLOWED_HOSTS = env.list("ALLOWED_HOSTS", default=["127.0.0.1", "localhost"])
CSRF_TRUSTED_ORIGINS = env.list(
    "CSRF_TRUSTED_ORIGINS",
    default=["http://127.0.0.1:8000", "http://localhost:8000"],
)

# ---------------------------------------------------------------------
# Applications
# ---------------------------------------------------------------------
INSTALLED_APPS = [
    # Django apps
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",

    # Third-party
    "rest_framework",
    "django_filters",
    "drf_spectacular",

    # Local apps
    "accounts",
    "ownership",
    "workspace",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
    # Current actor for default-owner injection (needs request.user)
    "ownership.middleware.CurrentActorMiddleware",
]

ROOT_URLCONF = "ownership_site.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

# ---------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------
DATABASES = {
    "default": env.db(
        "DATABASE_URL",
        default=f"sqlite:///{BASE_DIR / 'db.sqlite3'}",
    )
}

# ---------------------------------------------------------------------
# Internationalization
# ---------------------------------------------------------------------
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ---------------------------------------------------------------------
# Auth model
# ---------------------------------------------------------------------
AUTH_USER_MODEL = "accounts.User"

# ---------------------------------------------------------------------
# Ownership
# ---------------------------------------------------------------------
OWNERSHIP_OWNER_TYPES = {
    "user": "accounts.User",
    "team": "workspace.Team",
}
OWNERSHIP_CURRENT_ACTOR_PROVIDER = env(
    "OWNERSHIP_CURRENT_ACTOR_PROVIDER",
    default="ownership.actor.get_context_actor",
)

# ---------------------------------------------------------------------
# DRF & API Schema
# ---------------------------------------------------------------------
REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "rest_framework.authentication.SessionAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.IsAuthenticated",
    ],
    "DEFAULT_FILTER_BACKENDS": [
        "django_filters.rest_framework.DjangoFilterBackend",
        "rest_framework.filters.OrderingFilter",
        "rest_framework.filters.SearchFilter",
    ],
    "DEFAULT_PAGINATION_CLASS": "rest_framework.pagination.PageNumberPagination",
    "PAGE_SIZE": env.int("API_PAGE_SIZE", default=25),
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
}

SPECTACULAR_SETTINGS = {
    "TITLE": "Ownership API",
    "DESCRIPTION": "Owner-scoped records with polymorphic owners (users and teams).",
    "VERSION": "0.1.0",
    "OPERATION_ID_DUPLICATE_MODE": "suffix",
    "ENUM_NAME_OVERRIDES": {
        "AssetKindEnum": "workspace.models.AssetKind",
    },
}

# ---------------------------------------------------------------------
# Security defaults
# ---------------------------------------------------------------------
SESSION_COOKIE_SAMESITE = "Lax"
CSRF_COOKIE_SAMESITE = "Lax"
X_FRAME_OPTIONS = "DENY"

# ---------------------------------------------------------------------
# Logging (observability)
# ---------------------------------------------------------------------
# The ActorFilter injects `actor` even for logs outside HTTP contexts.
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "filters": {
        "actor": {"()": "ownership.logging.ActorFilter"},
    },
    "formatters": {
        "structured": {
            "format": "level=%(levelname)s logger=%(name)s actor=%(actor)s message=%(message)s"
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "filters": ["actor"],
            "formatter": "structured",
        },
    },
    "loggers": {
        # One line per owner transition (change, abandon, default injection).
        "ownership.changes": {
            "handlers": ["console"],
            "level": env("OWNERSHIP_LOG_LEVEL", default="INFO"),
            "propagate": False,
        },
        "ownership": {
            "handlers": ["console"],
            "level": env("OWNERSHIP_DEBUG_LOG_LEVEL", default="WARNING"),
            "propagate": False,
        },
    },
}
