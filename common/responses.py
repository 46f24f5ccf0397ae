import json
import logging

from django.http import JsonResponse

from common.errors import InfrastructureError, LifecycleError, ValidationError

logger = logging.getLogger(__name__)


def error_response(error: LifecycleError) -> JsonResponse:
    """Translate a lifecycle error into the JSON error body used by every view."""
    if isinstance(error, InfrastructureError):
        logger.error("infrastructure failure: %s", error.cause or error.message, exc_info=error.cause)
    return JsonResponse({"success": False, "error": error.message}, status=error.status_code)


def parse_json_body(request) -> dict:
    """Decode a JSON object body; anything else is a ValidationError."""
    if not request.body:
        return {}
    try:
        data = json.loads(request.body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise ValidationError("Invalid JSON")
    if not isinstance(data, dict):
        raise ValidationError("Invalid JSON")
    return data
