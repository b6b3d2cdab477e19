"""Adapter over the claim signing key.

Signs withdrawal claims the way the vault contract checks them:
keccak256(abi.encodePacked(address user, uint256 amount, uint256 nonce, address vault)),
then an EIP-191 personal-message signature over those 32 bytes.
Signing is local (eth-account), so no network call happens here.
"""

from django.conf import settings
from eth_account import Account
from eth_account.messages import encode_defunct
from web3 import Web3

from core.exceptions import SigningFailure

CLAIM_TYPES = ["address", "uint256", "uint256", "address"]


class SignerAdapter:
	"""
	Holds the signing key; exposes digest construction, signing and recovery.
	"""

	def __init__(self, private_key: str | None = None):
		key = private_key or settings.SIGNER_PRIVATE_KEY
		if not key:
			raise SigningFailure("SIGNER_PRIVATE_KEY is not configured")
		try:
			self.account = Account.from_key(key)
		except Exception as e:
			raise SigningFailure(f"invalid signer key: {e}") from e

	@staticmethod
	def claim_digest(user: str, amount_on_chain: int, nonce: int, vault_address: str) -> bytes:
		"""
		Packed hash of the claim fields, in the order the contract recomputes them.
		"""
		return bytes(Web3.solidity_keccak(
			CLAIM_TYPES,
			[Web3.to_checksum_address(user), amount_on_chain, nonce, Web3.to_checksum_address(vault_address)],
		))

	def sign_digest(self, digest: bytes) -> str:
		try:
			signed = self.account.sign_message(encode_defunct(primitive=digest))
		except Exception as e:
			raise SigningFailure(f"signing failed: {e}") from e
		return Web3.to_hex(signed.signature)

	@staticmethod
	def recover(digest: bytes, signature: str) -> str:
		return Account.recover_message(encode_defunct(primitive=digest), signature=signature)
