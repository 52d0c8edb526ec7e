"""Helpers shared by the JSON API views: request payload parsing and error responses."""

import json
from http import HTTPStatus
from typing import Any

from django.http import HttpRequest, JsonResponse, QueryDict

from events.exceptions import (
    DevEventError,
    DuplicateBooking,
    NotFound,
    ReferentialIntegrityViolation,
    SlugConflict,
    StorageUnavailable,
    ValidationFailed,
)


# Most specific classes first: lookups walk this list in order
ERROR_STATUS: list[tuple[type[DevEventError], HTTPStatus, str]] = [
    (ValidationFailed, HTTPStatus.BAD_REQUEST, "Validation failed"),
    (NotFound, HTTPStatus.NOT_FOUND, "Not found"),
    (ReferentialIntegrityViolation, HTTPStatus.NOT_FOUND, "Event not found"),
    (DuplicateBooking, HTTPStatus.CONFLICT, "Already booked"),
    (SlugConflict, HTTPStatus.CONFLICT, "Slug conflict"),
    (StorageUnavailable, HTTPStatus.SERVICE_UNAVAILABLE, "Storage unavailable"),
]


def _querydict_to_dict(data: QueryDict) -> dict[str, Any]:
    """Flatten a QueryDict, keeping lists only for keys sent more than once."""
    flat: dict[str, Any] = {}
    for key in data:
        values = data.getlist(key)
        flat[key] = values if len(values) > 1 else values[0]
    return flat


def read_payload(request: HttpRequest) -> dict[str, Any]:
    """
    Return the submitted fields of a request as a plain dict.

    JSON bodies must be objects. Form bodies are read from ``request.POST`` for POST requests and
    parsed from the raw body for other methods, which Django does not parse itself.
    """
    if request.content_type == "application/json":
        try:
            payload = json.loads(request.body or b"{}")
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ValidationFailed({"body": ["Request body is not valid JSON"]}) from e
        if not isinstance(payload, dict):
            raise ValidationFailed({"body": ["Request body must be a JSON object"]})
        return payload

    if request.method == "POST":
        return _querydict_to_dict(request.POST)
    return _querydict_to_dict(QueryDict(request.body))


def error_response(error: DevEventError) -> JsonResponse:
    """Map a domain error onto a JSON response with the matching status code."""
    status, message = HTTPStatus.BAD_REQUEST, "Request failed"
    for error_class, error_status, error_message in ERROR_STATUS:
        if isinstance(error, error_class):
            status, message = error_status, error_message
            break

    body: dict[str, Any] = {"message": message, "error": str(error)}
    if isinstance(error, ValidationFailed):
        body["errors"] = error.errors
    return JsonResponse(body, status=status)
