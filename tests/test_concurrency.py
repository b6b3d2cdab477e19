import threading

import pytest
from django.db import connection

from core import services
from core.adapters.signer_adapter import SignerAdapter
from core.exceptions import InsufficientBalance, StoreTransactionFailure
from core.models import Account, LedgerEntry, LedgerEntryKind

from .helpers import PLAYER, SIGNER_KEY


class BarrierSigner(SignerAdapter):
	"""Holds each request after its balance check until every request has reached signing."""

	def __init__(self, barrier):
		super().__init__(SIGNER_KEY)
		self.barrier = barrier

	def sign_digest(self, digest):
		self.barrier.wait(timeout=10)
		return super().sign_digest(digest)


@pytest.mark.django_db(transaction=True)
def test_parallel_withdrawals_settle_at_most_the_balance():
	Account.objects.create(wallet=PLAYER, coin=100)
	signer = BarrierSigner(threading.Barrier(2))
	results = {}

	def run(name, amount):
		try:
			results[name] = services.withdraw(PLAYER, amount, signer=signer)
		except (InsufficientBalance, StoreTransactionFailure) as e:
			results[name] = e
		finally:
			connection.close()

	threads = [threading.Thread(target=run, args=("a", 60)), threading.Thread(target=run, args=("b", 70))]
	for t in threads:
		t.start()
	for t in threads:
		t.join(timeout=30)

	winners = {name: r for name, r in results.items() if isinstance(r, services.AuthorizationPacket)}
	assert len(results) == 2
	assert len(winners) == 1

	name, packet = next(iter(winners.items()))
	spent = 60 if name == "a" else 70
	assert packet.newBalance == 100 - spent
	assert Account.objects.get(wallet=PLAYER).coin == 100 - spent
	assert LedgerEntry.objects.filter(kind=LedgerEntryKind.WITHDRAW).count() == 1
