"""Django settings for the coin vault backend.


The service runs three flows:
- Login / save: per-wallet coin balance and high score (core.Account)
- Withdraw: decrement the off-chain balance and hand back a signed on-chain claim
- Matchmaking: a socket.io queue that pays the lottery contract balance to a random player


Wallet ownership proofs and rate limiting are intentionally out of scope.
"""

import os
from pathlib import Path


BASE_DIR = Path(__file__).resolve().parent.parent
SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "dev-only-insecure-key")
DEBUG = os.getenv("DEBUG", "1") in ("1", "true", "True", "yes")
ALLOWED_HOSTS = os.getenv("ALLOWED_HOSTS", "*").split(",")
CSRF_TRUSTED_ORIGINS = os.getenv("CSRF_TRUSTED_ORIGINS", "").split(",") if os.getenv("CSRF_TRUSTED_ORIGINS") else []


def env_int(name, default):
    try:
        value = int(os.getenv(name, default))
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default

#######################
# Chain + signer (set in env)
RPC_URL = os.getenv("RPC_URL", "https://worldchain-mainnet.g.alchemy.com/public")
SIGNER_PRIVATE_KEY = os.getenv("SIGNER_PRIVATE_KEY", "")

# Vault contract that verifies withdrawal claims
VAULT_ADDRESS = os.getenv("CONTRACT_ADDRESS", "")

# Coins per 1 unit of native currency
SELL_RATE = env_int("SELL_RATE_COIN_PER_WLD", 1100)

# Coins handed to a wallet on its first login
NEW_ACCOUNT_GRANT = 20

# Lottery payout contract (matchmaking)
LOTTERY_CONTRACT_ADDRESS = os.getenv("LOTTERY_CONTRACT_ADDRESS", "0xE2d2e88CadDeE4508152972CA8183b654311b144")
LOTTERY_PRIVATE_KEY = os.getenv("PRIVATE_KEY", "") or SIGNER_PRIVATE_KEY
LOTTERY_QUEUE_SIZE = env_int("LOTTERY_QUEUE_SIZE", 2)
LOTTERY_RESET_SECONDS = env_int("LOTTERY_RESET_SECONDS", 10)
LOTTERY_TX_TIMEOUT = 180
#######################


INSTALLED_APPS = [
	"corsheaders",
	# local apps
	"core",
	"api",
]


MIDDLEWARE = [
	"corsheaders.middleware.CorsMiddleware",
	"django.middleware.security.SecurityMiddleware",
	"django.middleware.common.CommonMiddleware",
]

# Game client is served from arbitrary origins
CORS_ALLOW_ALL_ORIGINS = True


ROOT_URLCONF = "coinvault.urls"
WSGI_APPLICATION = "coinvault.wsgi.application"


DB_ENGINE = os.getenv("DB_ENGINE", "sqlite")
if DB_ENGINE == "postgres":
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.postgresql",
            "NAME": os.getenv("POSTGRES_DB", "coinvault"),
            "USER": os.getenv("POSTGRES_USER", "coinvault"),
            "PASSWORD": os.getenv("POSTGRES_PASSWORD", "coinvault"),
            "HOST": os.getenv("POSTGRES_HOST", "localhost"),
            "PORT": os.getenv("POSTGRES_PORT", "5432"),
        }
    }
else:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "db.sqlite3",
        }
    }


LOGGING = {
	"version": 1,
	"disable_existing_loggers": False,
	"formatters": {
		"plain": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
	},
	"handlers": {
		"console": {"class": "logging.StreamHandler", "formatter": "plain"},
	},
	"root": {
		"handlers": ["console"],
		"level": os.getenv("LOG_LEVEL", "INFO"),
	},
}


LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = False
USE_TZ = True


DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"
