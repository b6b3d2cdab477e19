"""Operational endpoints that move coins off the ledger (withdraw) plus health."""

import json
import logging

from django.core.exceptions import ValidationError
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from core import services
from core.exceptions import SettlementError

logger = logging.getLogger(__name__)


# --- Helpers -----------------------------------------------------------------

def json_body(request) -> dict:
	"""
	Parse a JSON object body; anything else is a ValidationError (HTTP 400).
	"""
	try:
		body = json.loads(request.body or b"{}")
	except (ValueError, UnicodeDecodeError):
		raise ValidationError("Invalid JSON")
	if not isinstance(body, dict):
		raise ValidationError("JSON body must be an object")
	return body


def error_response(message: str, status: int) -> JsonResponse:
	return JsonResponse({"success": False, "message": message}, status=status)


def validation_message(e: ValidationError) -> str:
	return "; ".join(e.messages)


# --- Endpoints ---------------------------------------------------------------

def health(request):
	return JsonResponse({"ok": True})


@csrf_exempt
@require_POST
def withdraw(request):
	"""
	POST: Debit `amount` coins from `wallet` and return the signed vault claim.

	Body: {"wallet": "0x...", "amount": 1100, "message": ..., "signature": ...}
	(message/signature are accepted for client compatibility and not checked)
	"""
	logger.info("---- WITHDRAW REQUEST ----")
	try:
		body = json_body(request)
		wallet = body.get("wallet")
		amount = body.get("amount")
		if not wallet or amount in (None, "", 0):
			return error_response("Missing Data", 400)

		packet = services.withdraw(wallet, amount)

	except ValidationError as e:
		logger.warning("Withdraw rejected: %s", validation_message(e))
		return error_response(validation_message(e), 400)
	except SettlementError as e:
		if e.status_code >= 500:
			logger.exception("Withdraw error: %s", e.message)
		else:
			logger.warning("Withdraw refused: %s", e.message)
		return error_response(e.message, e.status_code)

	return JsonResponse({"success": True, **packet.as_dict()})
