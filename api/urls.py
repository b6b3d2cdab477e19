"""Public API surface.

- /health: liveness
- /login: fetch or create the wallet's account (new wallets get the grant)
- /save: persist coin + high score reported by the game client
- /withdraw: debit coins and return a signed vault claim
"""

from django.urls import path
from .views_ops import health, withdraw
from .views_session import login, save


urlpatterns = [
	path("health", health),
	path("login", login),
	path("save", save),
	path("withdraw", withdraw),
]
