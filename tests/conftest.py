import pytest

from .helpers import PLAYER, SIGNER_KEY, VAULT


@pytest.fixture(autouse=True)
def vault_settings(settings):
	settings.SIGNER_PRIVATE_KEY = SIGNER_KEY
	settings.VAULT_ADDRESS = VAULT
	settings.SELL_RATE = 1100
	settings.NEW_ACCOUNT_GRANT = 20
	return settings


@pytest.fixture
def funded_account(db):
	from core.models import Account
	return Account.objects.create(wallet=PLAYER, coin=5000, high_score=42)
