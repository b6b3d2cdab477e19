"""Unit conversion helpers shared across the service.


- CHAIN_DECIMALS is the 18-decimal fixed point of the native currency.
- coins_to_base_units converts whole off-chain coins into on-chain base units.
- normalize_address gives the wallet key used by the ledger store.
"""

from django.core.exceptions import ValidationError
from web3 import Web3

CHAIN_DECIMALS = 18
TEN_POW = 10 ** CHAIN_DECIMALS
# Largest value a PositiveBigIntegerField column holds
MAX_COIN = 2 ** 63 - 1


def coins_to_base_units(amount_coins: int, sell_rate: int) -> int:
	"""
	Convert whole coins to base units at `sell_rate` coins per native unit, rounding down.

	Python ints are unbounded, so amount * 10**18 never overflows; floats are refused.
	"""
	for name, value in (("amount", amount_coins), ("sell_rate", sell_rate)):
		if isinstance(value, bool) or not isinstance(value, int):
			raise TypeError(f"{name} must be an int, got {type(value).__name__}")
	if sell_rate <= 0:
		raise ValueError("sell_rate must be > 0")
	if amount_coins < 0:
		raise ValueError("amount must be >= 0")
	return amount_coins * TEN_POW // sell_rate


def normalize_address(address) -> str:
	"""
	Lowercase a 0x-prefixed 20-byte hex address; the lowercase form is the account key.
	"""
	if not isinstance(address, str) or not address.strip():
		raise ValidationError("wallet address required")
	address = address.strip()
	if not Web3.is_address(address):
		raise ValidationError(f"invalid wallet address: {address}")
	return address.lower()


def parse_coin_amount(value, *, field: str = "amount", allow_zero: bool = False) -> int:
	"""
	Accept JSON ints or digit strings; reject bools, floats with fractions, negatives and values past MAX_COIN.
	"""
	if isinstance(value, bool):
		raise ValidationError(f"{field} must be an integer")
	if isinstance(value, float):
		if not value.is_integer():
			raise ValidationError(f"{field} must be a whole number")
		value = int(value)
	elif isinstance(value, str):
		if not value.strip().isdigit():
			raise ValidationError(f"{field} must be an integer")
		value = int(value.strip())
	elif not isinstance(value, int):
		raise ValidationError(f"{field} must be an integer")

	if value < 0 or (value == 0 and not allow_zero):
		raise ValidationError(f"{field} must be {'>= 0' if allow_zero else '> 0'}")
	if value > MAX_COIN:
		raise ValidationError(f"{field} must be <= {MAX_COIN}")
	return value
