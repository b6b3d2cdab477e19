"""Lottery round driver: queue events in, spin + on-chain payout out.

Events (socket.io):
- joinQueue {name, wallet}  → player appended, updatePlayers broadcast
- disconnect                → player removed, updatePlayers broadcast
- startSpin <index>         → broadcast when the queue fills and a winner is drawn
"""

import logging
import random

from web3 import Web3

from .queue import PlayerQueue, QueuedPlayer

logger = logging.getLogger(__name__)


class Matchmaker:
	"""
	Wires a PlayerQueue to a socket.io server and runs one payout round per full queue.

	chain_factory is called once per round and must return an object exposing
	get_balance() and payout_winner(wallet, amount) (core.adapters.chain_adapter.ChainAdapter).
	"""

	def __init__(self, sio, queue: PlayerQueue, chain_factory, reset_delay: float = 10, rng: random.Random | None = None):
		self.sio = sio
		self.queue = queue
		self.chain_factory = chain_factory
		self.reset_delay = reset_delay
		self.rng = rng or random.SystemRandom()

	def register(self):
		self.sio.on("joinQueue", self.on_join)
		self.sio.on("disconnect", self.on_disconnect)

	def broadcast_players(self):
		self.sio.emit("updatePlayers", self.queue.snapshot())

	def on_join(self, sid, data):
		data = data if isinstance(data, dict) else {}
		wallet = data.get("wallet") or ""
		if not Web3.is_address(wallet):
			logger.warning("joinQueue from %s rejected: bad wallet %r", sid, wallet)
			return
		self.queue.join(QueuedPlayer(id=sid, name=str(data.get("name") or "player"), wallet=wallet))
		logger.info("Queue join: %s (%s), %d waiting", sid, wallet, len(self.queue))
		self.broadcast_players()

		if self.queue.begin_round():
			self.sio.start_background_task(self.run_round)

	def on_disconnect(self, sid, reason=None):
		if self.queue.leave(sid):
			logger.info("Queue leave: %s", sid)
			self.broadcast_players()

	def run_round(self):
		"""
		Draw a winner, pay out the whole contract balance, then reset the queue after reset_delay.
		"""
		players = self.queue.snapshot()
		try:
			if players:
				win_idx = self.rng.randrange(len(players))
				winner = players[win_idx]
				logger.info("Lottery winner: index %d, %s", win_idx, winner["wallet"])
				self.sio.emit("startSpin", win_idx)
				self.pay(winner["wallet"])
		finally:
			self.sio.sleep(self.reset_delay)
			self.queue.clear()
			self.broadcast_players()

	def pay(self, wallet: str):
		try:
			chain = self.chain_factory()
			balance = chain.get_balance()
			if balance > 0:
				tx_hash = chain.payout_winner(wallet, balance)
				logger.info("Lottery paid %s wei to %s (%s)", balance, wallet, tx_hash)
			else:
				logger.info("Lottery pot is empty; nothing paid to %s", wallet)
		except Exception:
			logger.exception("Lottery payout to %s failed", wallet)
