"""URL routing for bookings (``/api/v1/bookings/``)."""

from __future__ import annotations

from rest_framework.routers import SimpleRouter  # type: ignore

from .views import BookingViewSet

router = SimpleRouter()
router.register(r"", BookingViewSet, basename="booking")

urlpatterns = router.urls
