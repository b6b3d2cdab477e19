"""Database models for the coin vault.


Tables:
- Account: one row per wallet (lowercased address), holding the off-chain coin balance
- LedgerEntryKind
- LedgerEntry: append-only attribution of every coin mutation to one logical operation

Withdrawal claims (signatures) are handed to the client and never stored here.
"""

from django.db import models


class Account(models.Model):
	"""
	Per-wallet balance record. Created on first login, never deleted.
	"""
	wallet = models.CharField(primary_key=True, max_length=42) # lowercase 0x address
	coin = models.PositiveBigIntegerField(default=0)
	high_score = models.PositiveBigIntegerField(default=0)
	last_login = models.DateTimeField(null=True, blank=True)
	last_update = models.DateTimeField(null=True, blank=True)
	created_at = models.DateTimeField(auto_now_add=True)

	def __str__(self):
		return f"{self.wallet} ({self.coin} coin)"


class LedgerEntryKind(models.TextChoices):
	LOGIN_GRANT = "login_grant", "Login grant"
	SAVE = "save", "Save"
	WITHDRAW = "withdraw", "Withdraw"


class LedgerEntry(models.Model):
	"""
	One row per coin mutation.

	delta is the signed change for grants and withdrawals; for saves it is the
	new absolute value sent by the client (saves overwrite, they do not add).
	"""
	id = models.BigAutoField(primary_key=True)
	account = models.ForeignKey(Account, on_delete=models.PROTECT, related_name="ledger_entries")
	kind = models.CharField(max_length=16, choices=LedgerEntryKind.choices)
	delta = models.BigIntegerField()
	balance_after = models.PositiveBigIntegerField()
	nonce = models.BigIntegerField(null=True, blank=True) # withdraw only
	created_at = models.DateTimeField(auto_now_add=True)

	class Meta:
		indexes = [
			models.Index(fields=["account", "created_at"], name="ledger_account_created_idx"),
		]
