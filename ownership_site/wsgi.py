"""WSGI entry point for the ownership project."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "ownership_site.settings.dev")

application = get_wsgi_application()
