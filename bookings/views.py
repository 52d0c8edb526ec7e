"""JSON API view for booking an event."""

from http import HTTPStatus

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from bookings import services
from devevent.utils.http import error_response, read_payload
from events.exceptions import DevEventError


@csrf_exempt
@require_POST
def booking_collection(request: HttpRequest) -> JsonResponse:
    """Create a booking from ``event_id`` and ``email`` (form or JSON body)."""
    try:
        payload = read_payload(request)
        booking = services.create_booking(payload.get("event_id"), payload.get("email"))
    except DevEventError as e:
        return error_response(e)
    return JsonResponse(
        {"message": "Booking created successfully", "booking": booking.to_dict()},
        status=HTTPStatus.CREATED,
    )
