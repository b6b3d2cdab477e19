"""WSGI entry point: socket.io matchmaking in front of the Django API."""

import os

import socketio
from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "coinvault.settings")

django_app = get_wsgi_application()

# Import after Django is configured; the matchmaker reads settings at import.
from matchmaking.server import sio  # noqa: E402

application = socketio.WSGIApp(sio, django_app)
