"""Settlement error taxonomy.

Request validation uses django.core.exceptions.ValidationError (HTTP 400);
everything raised while settling a withdrawal derives from SettlementError and
carries the HTTP status the API answers with.
"""


class SettlementError(Exception):
	"""Withdrawal could not be settled"""
	status_code = 500

	def __init__(self, message: str = ""):
		super().__init__(message or self.__class__.__doc__.strip())
		self.message = message or self.__class__.__doc__.strip()


class AccountNotFound(SettlementError):
	"""User not found"""
	status_code = 404


class InsufficientBalance(SettlementError):
	"""Insufficient coin balance"""
	status_code = 409


class SigningFailure(SettlementError):
	"""Could not sign the withdrawal claim"""


class StoreTransactionFailure(SettlementError):
	"""Ledger store transaction failed"""


class PayoutFailure(Exception):
	"""Lottery payout transaction did not confirm"""
