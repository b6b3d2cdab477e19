"""gunicorn settings: one process, threads for the socket.io long-poll/websocket clients.

The matchmaking queue lives in process memory, so the service must run a single worker.
"""

import os

bind = f"0.0.0.0:{os.getenv('PORT', '3000')}"
workers = 1
threads = int(os.getenv("GUNICORN_THREADS", "100"))
wsgi_app = "coinvault.wsgi:application"
