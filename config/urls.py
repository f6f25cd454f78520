"""URL configuration for the room booking service.

Every API route is versioned under ``/api/v1/``; the OpenAPI schema is
served by drf-spectacular.
"""
from django.urls import path, include  # type: ignore
from drf_spectacular.views import SpectacularAPIView  # type: ignore

urlpatterns = [
    path('api/v1/rooms/', include('apps.rooms.urls')),
    path('api/v1/bookings/', include('apps.bookings.urls')),
    path('api/v1/schema/', SpectacularAPIView.as_view(), name='schema'),
]
