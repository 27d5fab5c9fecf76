"""WSGI config for the statsportal project."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "statsportal.settings")

application = get_wsgi_application()
