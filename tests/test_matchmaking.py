import pytest

from matchmaking.lottery import Matchmaker
from matchmaking.queue import PlayerQueue, QueuedPlayer

from .helpers import OTHER_PLAYER, PLAYER


class FakeSio:
	def __init__(self):
		self.handlers = {}
		self.emitted = []
		self.slept = []

	def on(self, event, handler):
		self.handlers[event] = handler

	def emit(self, event, data=None):
		self.emitted.append((event, data))

	def start_background_task(self, target, *args):
		target(*args)

	def sleep(self, seconds):
		self.slept.append(seconds)


class FakeChain:
	def __init__(self, balance=0, error=None):
		self.balance = balance
		self.error = error
		self.payouts = []

	def get_balance(self):
		if self.error:
			raise self.error
		return self.balance

	def payout_winner(self, wallet, amount):
		self.payouts.append((wallet, amount))
		return "0xabc"


class FixedRng:
	def __init__(self, index):
		self.index = index

	def randrange(self, n):
		return self.index


def make(chain, capacity=2, index=1):
	sio = FakeSio()
	mm = Matchmaker(sio, PlayerQueue(capacity), chain_factory=lambda: chain, reset_delay=10, rng=FixedRng(index))
	mm.register()
	return sio, mm


def events(sio, name):
	return [data for event, data in sio.emitted if event == name]


def test_register_binds_events():
	sio, _ = make(FakeChain())
	assert set(sio.handlers) == {"joinQueue", "disconnect"}


def test_join_broadcasts_players():
	sio, mm = make(FakeChain(), capacity=3)
	sio.handlers["joinQueue"]("sid-1", {"name": "ann", "wallet": PLAYER})

	assert events(sio, "updatePlayers") == [[{"id": "sid-1", "name": "ann", "wallet": PLAYER}]]
	assert not events(sio, "startSpin")


def test_full_queue_pays_winner_and_resets():
	chain = FakeChain(balance=5 * 10 ** 17)
	sio, mm = make(chain, index=1)
	sio.handlers["joinQueue"]("sid-1", {"name": "ann", "wallet": PLAYER})
	sio.handlers["joinQueue"]("sid-2", {"name": "bob", "wallet": OTHER_PLAYER})

	assert events(sio, "startSpin") == [1]
	assert chain.payouts == [(OTHER_PLAYER, 5 * 10 ** 17)]
	assert sio.slept == [10]
	assert events(sio, "updatePlayers")[-1] == []
	assert len(mm.queue) == 0
	assert not mm.queue.round_running


def test_empty_pot_skips_payout():
	chain = FakeChain(balance=0)
	sio, _ = make(chain)
	sio.handlers["joinQueue"]("sid-1", {"name": "ann", "wallet": PLAYER})
	sio.handlers["joinQueue"]("sid-2", {"name": "bob", "wallet": OTHER_PLAYER})

	assert events(sio, "startSpin") == [1]
	assert chain.payouts == []


def test_chain_error_still_resets_queue():
	sio, mm = make(FakeChain(error=RuntimeError("rpc down")))
	sio.handlers["joinQueue"]("sid-1", {"name": "ann", "wallet": PLAYER})
	sio.handlers["joinQueue"]("sid-2", {"name": "bob", "wallet": OTHER_PLAYER})

	assert events(sio, "updatePlayers")[-1] == []
	assert len(mm.queue) == 0


def test_disconnect_removes_player():
	sio, mm = make(FakeChain(), capacity=3)
	sio.handlers["joinQueue"]("sid-1", {"name": "ann", "wallet": PLAYER})
	sio.handlers["joinQueue"]("sid-2", {"name": "bob", "wallet": OTHER_PLAYER})
	sio.handlers["disconnect"]("sid-1")

	assert [p["id"] for p in events(sio, "updatePlayers")[-1]] == ["sid-2"]


def test_disconnect_of_unknown_sid_is_quiet():
	sio, _ = make(FakeChain())
	sio.handlers["disconnect"]("nobody", "client disconnect")
	assert sio.emitted == []


def test_bad_wallet_is_not_queued():
	sio, mm = make(FakeChain())
	sio.handlers["joinQueue"]("sid-1", {"name": "ann", "wallet": "nope"})
	assert len(mm.queue) == 0
	assert sio.emitted == []


def test_queue_runs_one_round_at_a_time():
	queue = PlayerQueue(capacity=2)
	queue.join(QueuedPlayer("a", "ann", PLAYER))
	assert not queue.begin_round()
	queue.join(QueuedPlayer("b", "bob", OTHER_PLAYER))
	assert queue.begin_round()
	queue.join(QueuedPlayer("c", "cy", PLAYER))
	assert not queue.begin_round()
	queue.clear()
	assert len(queue) == 0 and not queue.round_running


def test_queue_capacity_must_be_positive():
	with pytest.raises(ValueError):
		PlayerQueue(capacity=0)
