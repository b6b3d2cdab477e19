"""Process-wide socket.io server and the matchmaker bound to it.

coinvault.wsgi wraps the Django app with this server; run a single worker so
every client shares one queue.
"""

import socketio
from django.conf import settings

from core.adapters.chain_adapter import ChainAdapter
from .lottery import Matchmaker
from .queue import PlayerQueue

sio = socketio.Server(async_mode="threading", cors_allowed_origins="*")

matchmaker = Matchmaker(
	sio,
	PlayerQueue(capacity=settings.LOTTERY_QUEUE_SIZE),
	chain_factory=ChainAdapter,
	reset_delay=settings.LOTTERY_RESET_SECONDS,
)
matchmaker.register()
