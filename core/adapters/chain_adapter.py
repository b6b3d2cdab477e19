"""Adapter over the lottery payout contract.

Reads the contract's balance and submits payoutWinner transactions signed by the
operator key, waiting for the receipt before returning.
"""

import logging

from django.conf import settings
from eth_account import Account
from web3 import Web3

from core.exceptions import PayoutFailure

logger = logging.getLogger(__name__)

# Minimal ABI for the lottery pot
LOTTERY_ABI = [
	{
		"type": "function",
		"name": "payoutWinner",
		"stateMutability": "nonpayable",
		"inputs": [
			{"name": "_winner", "type": "address"},
			{"name": "_amount", "type": "uint256"},
		],
		"outputs": [],
	},
	{
		"type": "function",
		"name": "getBalance",
		"stateMutability": "view",
		"inputs": [],
		"outputs": [{"name": "", "type": "uint256"}],
	},
]


class ChainAdapter:
	"""
	getBalance / payoutWinner calls against LOTTERY_CONTRACT_ADDRESS.
	"""

	def __init__(self, rpc_url: str | None = None, contract_address: str | None = None,
				 private_key: str | None = None, tx_timeout: int | None = None, w3: Web3 | None = None):
		key = private_key or settings.LOTTERY_PRIVATE_KEY
		if not key:
			raise ValueError("PRIVATE_KEY (or SIGNER_PRIVATE_KEY fallback) is required for payouts")

		self.w3 = w3 or Web3(Web3.HTTPProvider(rpc_url or settings.RPC_URL))
		self.account = Account.from_key(key)
		self.tx_timeout = tx_timeout or settings.LOTTERY_TX_TIMEOUT
		self.contract = self.w3.eth.contract(
			address=Web3.to_checksum_address(contract_address or settings.LOTTERY_CONTRACT_ADDRESS),
			abi=LOTTERY_ABI,
		)

	def get_balance(self) -> int:
		return int(self.contract.functions.getBalance().call())

	def payout_winner(self, wallet: str, amount_wei: int) -> str:
		"""Submit payoutWinner and wait for it to confirm. Returns tx hash hex string."""
		tx = self.contract.functions.payoutWinner(Web3.to_checksum_address(wallet), int(amount_wei)).build_transaction(
			{
				"from": self.account.address,
				"nonce": self.w3.eth.get_transaction_count(self.account.address),
				"chainId": self.w3.eth.chain_id,
			}
		)
		signed = self.account.sign_transaction(tx)
		tx_hash = self.w3.eth.send_raw_transaction(signed.raw_transaction)
		logger.info("payoutWinner submitted: %s -> %s wei (%s)", wallet, amount_wei, Web3.to_hex(tx_hash))

		receipt = self.w3.eth.wait_for_transaction_receipt(tx_hash, timeout=self.tx_timeout)
		if receipt.get("status") != 1:
			raise PayoutFailure(f"payoutWinner tx failed: {Web3.to_hex(tx_hash)}")
		return Web3.to_hex(tx_hash)
