"""In-memory player queue for the lottery.

Owned by one Matchmaker for the lifetime of the process; nothing is persisted.
"""

import threading
from dataclasses import asdict, dataclass


@dataclass
class QueuedPlayer:
	id: str # socket.io sid
	name: str
	wallet: str


class PlayerQueue:
	"""
	Ordered list of connected players plus a flag marking a round in flight.
	"""

	def __init__(self, capacity: int = 2):
		if capacity < 1:
			raise ValueError("capacity must be >= 1")
		self.capacity = capacity
		self._players: list[QueuedPlayer] = []
		self._round_running = False
		self._lock = threading.Lock()

	def __len__(self):
		with self._lock:
			return len(self._players)

	@property
	def round_running(self) -> bool:
		return self._round_running

	def join(self, player: QueuedPlayer) -> None:
		with self._lock:
			self._players.append(player)

	def leave(self, sid: str) -> bool:
		with self._lock:
			before = len(self._players)
			self._players = [p for p in self._players if p.id != sid]
			return len(self._players) != before

	def snapshot(self) -> list[dict]:
		with self._lock:
			return [asdict(p) for p in self._players]

	def begin_round(self) -> bool:
		"""
		Claim the single round slot; False if the queue is not full or a round is already running.
		"""
		with self._lock:
			if self._round_running or len(self._players) < self.capacity:
				return False
			self._round_running = True
			return True

	def clear(self) -> None:
		with self._lock:
			self._players = []
			self._round_running = False
