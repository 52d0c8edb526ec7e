"""
JSON API views for events.

The views translate HTTP requests into calls to :mod:`events.services` and map domain errors onto
status codes with :func:`devevent.utils.http.error_response`.
"""

from http import HTTPStatus

import structlog
from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods

from bookings.services import count_bookings
from devevent.utils.http import error_response, read_payload
from events import services
from events.exceptions import DevEventError
from events.images import discard_event_image, store_event_image


logger = structlog.get_logger(__name__)


@csrf_exempt
@require_http_methods(["GET", "POST"])
def event_collection(request: HttpRequest) -> JsonResponse:
    """List events (GET) or create a new event from a multipart form with a poster (POST)."""
    if request.method == "POST":
        return create_event(request)

    try:
        events = services.list_events()
    except DevEventError as e:
        logger.warning("Failed to fetch events", error=str(e))
        return error_response(e)
    return JsonResponse(
        {
            "message": "Events fetched successfully",
            "events": [event.to_dict() for event in events],
        },
    )


def create_event(request: HttpRequest) -> JsonResponse:
    """
    Create an event from the submitted fields and the uploaded ``image`` file.

    The poster is stored first because its URL is a required field. If the event is then rejected,
    the stored poster is discarded again.
    """
    try:
        payload = read_payload(request)
        stored = store_event_image(request.FILES.get("image"))
    except DevEventError as e:
        return error_response(e)

    try:
        event = services.create_event({**payload, "image": stored.url})
    except DevEventError as e:
        discard_event_image(stored.name)
        logger.info("Event creation rejected", error=str(e))
        return error_response(e)

    return JsonResponse(
        {"message": "Event created successfully", "event": event.to_dict()},
        status=HTTPStatus.CREATED,
    )


@csrf_exempt
@require_http_methods(["GET", "PATCH"])
def event_detail(request: HttpRequest, slug: str) -> JsonResponse:
    """
    Return a single event by slug (GET) or apply a partial update to it (PATCH).

    The response also carries the number of bookings made for the event so far.
    """
    try:
        event = services.get_event_by_slug(slug)
        if request.method == "PATCH":
            event = services.update_event(event.pk, read_payload(request))
            message = "Event updated successfully"
        else:
            message = "Event fetched successfully"
        bookings = count_bookings(event.pk)
    except DevEventError as e:
        return error_response(e)
    return JsonResponse({"message": message, "event": event.to_dict(), "bookings": bookings})


@require_GET
def similar_events(request: HttpRequest, slug: str) -> JsonResponse:  # noqa: ARG001
    """Return the events sharing at least one tag with the event identified by ``slug``."""
    try:
        events = services.list_similar_events_by_slug(slug)
    except DevEventError as e:
        return error_response(e)
    return JsonResponse({"events": [event.to_dict() for event in events]})
