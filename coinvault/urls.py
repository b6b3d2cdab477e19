"""URL routing for the coin vault.


The /api/ namespace exposes login, save and withdraw; socket.io traffic never
reaches Django (it is answered by the WSGI wrapper in coinvault.wsgi).
"""

from django.urls import path, include


urlpatterns = [
	path("api/", include("api.urls")),
]
