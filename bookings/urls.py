"""URL configuration for the bookings API."""

from django.urls import path

from .views import booking_collection


urlpatterns = [
    path("", booking_collection, name="booking_collection"),
]
