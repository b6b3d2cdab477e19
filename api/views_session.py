"""Session endpoints: login bootstrap and game-state save."""

import logging

from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from core import services
from .views_ops import error_response, json_body, validation_message

logger = logging.getLogger(__name__)


@csrf_exempt
@require_POST
def login(request):
	"""
	POST: {"address": "0x..."} → stored balance/high score (new wallets get the grant)
	"""
	try:
		body = json_body(request)
		address = body.get("address")
		if not address:
			return error_response("No address", 400)
		result = services.login(address)
	except ValidationError as e:
		logger.warning("Login rejected: %s", validation_message(e))
		return error_response(validation_message(e), 400)
	except DatabaseError as e:
		logger.exception("Login error")
		return error_response(str(e), 500)

	return JsonResponse({"success": True, "balance": result["balance"], "highScore": result["high_score"]})


@csrf_exempt
@require_POST
def save(request):
	"""
	POST: {"wallet": "0x...", "coin": 120, "highScore": 900}; omitted fields are left untouched
	"""
	try:
		body = json_body(request)
		wallet = body.get("wallet")
		if not wallet:
			return error_response("No wallet", 400)
		services.save(wallet, coin=body.get("coin"), high_score=body.get("highScore"))
	except ValidationError as e:
		logger.warning("Save rejected: %s", validation_message(e))
		return error_response(validation_message(e), 400)
	except DatabaseError as e:
		logger.exception("Save error")
		return error_response(str(e), 500)

	return JsonResponse({"success": True})
