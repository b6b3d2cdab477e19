"""Business orchestration for the coin vault.

This module coordinates: login (new-account grant) → save → withdraw.
Coin mutations run inside transaction.atomic and every one writes a LedgerEntry.

Withdraw ordering: the claim is signed first, outside any transaction, then a
single conditional decrement (coin = coin - amount WHERE coin >= amount) decides
whether the claim is released. A losing request leaves no mutation and its
signature is never returned.
"""
import logging
import threading
import time
from dataclasses import asdict, dataclass

from django.conf import settings
from django.db import DatabaseError, transaction
from django.db.models import F
from django.utils import timezone

from .adapters.signer_adapter import SignerAdapter
from .constants import coins_to_base_units, normalize_address, parse_coin_amount
from .exceptions import AccountNotFound, InsufficientBalance, SettlementError, SigningFailure, StoreTransactionFailure
from .models import Account, LedgerEntry, LedgerEntryKind

logger = logging.getLogger(__name__)


class NonceSource:
	"""
	Millisecond clock that never repeats a value within the process.
	"""

	def __init__(self, clock=time.time):
		self._clock = clock
		self._last = 0
		self._lock = threading.Lock()

	def next(self) -> int:
		with self._lock:
			now_ms = int(self._clock() * 1000)
			self._last = max(now_ms, self._last + 1)
			return self._last


nonce_source = NonceSource()


@dataclass
class ClaimData:
	user: str
	amount: str # base units as a decimal string
	nonce: int
	signature: str
	vaultAddress: str


@dataclass
class AuthorizationPacket:
	claimData: ClaimData
	newBalance: int

	def as_dict(self) -> dict:
		return asdict(self)


@transaction.atomic
def login(address: str) -> dict:
	"""
	Return balance/high score for a wallet, creating it with the new-account grant if unseen.
	"""
	wallet = normalize_address(address)
	now = timezone.now()
	account, created = Account.objects.get_or_create(
		wallet=wallet,
		defaults={"coin": settings.NEW_ACCOUNT_GRANT, "high_score": 0, "last_login": now},
	)
	if created:
		LedgerEntry.objects.create(
			account=account,
			kind=LedgerEntryKind.LOGIN_GRANT,
			delta=account.coin,
			balance_after=account.coin,
		)
		logger.info("New user created: %s | given %s coins", wallet, account.coin)
	else:
		Account.objects.filter(wallet=wallet).update(last_login=now)
		logger.info("Login: %s | balance %s", wallet, account.coin)

	return {"balance": account.coin or 0, "high_score": account.high_score or 0}


@transaction.atomic
def save(wallet: str, coin=None, high_score=None) -> Account:
	"""
	Overwrite whichever of coin / high_score was sent; fields not sent stay as they are.

	No anti-cheat: the client is trusted to report its own balance.
	"""
	wallet = normalize_address(wallet)
	fields = {"last_update": timezone.now()}
	if coin is not None:
		fields["coin"] = parse_coin_amount(coin, field="coin", allow_zero=True)
	if high_score is not None:
		fields["high_score"] = parse_coin_amount(high_score, field="highScore", allow_zero=True)

	account, created = Account.objects.select_for_update().get_or_create(wallet=wallet, defaults=fields)
	if not created:
		for name, value in fields.items():
			setattr(account, name, value)
		account.save(update_fields=list(fields))

	if "coin" in fields:
		LedgerEntry.objects.create(
			account=account,
			kind=LedgerEntryKind.SAVE,
			delta=fields["coin"],
			balance_after=fields["coin"],
		)
	logger.info("Saved: %s | coin %s | highScore %s", wallet, coin, high_score)
	return account


def withdraw(wallet: str, amount, *, signer: SignerAdapter | None = None) -> AuthorizationPacket:
	"""
	Convert `amount` off-chain coins into a signed claim on the vault contract.

	Raises ValidationError for bad input, AccountNotFound, InsufficientBalance,
	SigningFailure or StoreTransactionFailure. On any error the balance is unchanged.
	"""
	key = normalize_address(wallet)
	amount = parse_coin_amount(amount)
	vault_address = settings.VAULT_ADDRESS
	if not vault_address:
		raise SigningFailure("CONTRACT_ADDRESS (vault) is not configured")

	try:
		current = Account.objects.filter(wallet=key).values_list("coin", flat=True).first()
	except DatabaseError as e:
		raise StoreTransactionFailure(str(e)) from e
	if current is None:
		raise AccountNotFound()
	if current < amount:
		raise InsufficientBalance(f"Insufficient coin balance: have {current}, need {amount}")

	amount_on_chain = coins_to_base_units(amount, settings.SELL_RATE)
	nonce = nonce_source.next()

	signer = signer or SignerAdapter()
	try:
		digest = signer.claim_digest(wallet.strip(), amount_on_chain, nonce, vault_address)
	except (ValueError, TypeError) as e:
		raise SigningFailure(f"cannot encode claim: {e}") from e
	signature = signer.sign_digest(digest)

	try:
		new_balance = _debit(key, amount, nonce)
	except SettlementError:
		raise
	except DatabaseError as e:
		raise StoreTransactionFailure(str(e)) from e

	logger.info("Withdraw authorized: %s | %s coins -> %s wei | nonce %s", key, amount, amount_on_chain, nonce)
	return AuthorizationPacket(
		claimData=ClaimData(
			user=wallet.strip(),
			amount=str(amount_on_chain),
			nonce=nonce,
			signature=signature,
			vaultAddress=vault_address,
		),
		newBalance=new_balance,
	)


@transaction.atomic
def _debit(wallet: str, amount: int, nonce: int) -> int:
	"""
	Relative decrement guarded by coin >= amount; one UPDATE, so concurrent debits serialize.
	"""
	updated = Account.objects.filter(wallet=wallet, coin__gte=amount).update(
		coin=F("coin") - amount,
		last_update=timezone.now(),
	)
	if not updated:
		account = Account.objects.filter(wallet=wallet).first()
		if account is None:
			raise AccountNotFound()
		raise InsufficientBalance(f"Insufficient coin balance: have {account.coin}, need {amount}")

	account = Account.objects.get(wallet=wallet)
	LedgerEntry.objects.create(
		account=account,
		kind=LedgerEntryKind.WITHDRAW,
		delta=-amount,
		balance_after=account.coin,
		nonce=nonce,
	)
	return account.coin
