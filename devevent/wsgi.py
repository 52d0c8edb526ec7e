"""WSGI config for the devevent project."""

import os

from django.core.wsgi import get_wsgi_application


os.environ.setdefault("DJANGO_SETTINGS_MODULE", "devevent.settings")

application = get_wsgi_application()
