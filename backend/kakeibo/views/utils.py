import json

from django.http import JsonResponse

NOT_FOUND_MESSAGE = "Record not found!"


class InvalidPayload(ValueError):
    """Request body could not be used as a JSON object."""


def parse_json_body(request) -> dict:
    try:
        payload = json.loads(request.body or b"")
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidPayload(str(exc)) from exc
    if not isinstance(payload, dict):
        raise InvalidPayload("request body must be a JSON object")
    return payload


def json_data(data, status=200):
    return JsonResponse({"data": data}, status=status, json_dumps_params={"ensure_ascii": False})


def json_error(message, status=400):
    return JsonResponse({"error": message}, status=status, json_dumps_params={"ensure_ascii": False})
