"""URL configuration for the events API."""

from django.urls import path

from .views import event_collection, event_detail, similar_events


urlpatterns = [
    path("", event_collection, name="event_collection"),
    path("<str:slug>/", event_detail, name="event_detail"),
    path("<str:slug>/similar/", similar_events, name="similar_events"),
]
