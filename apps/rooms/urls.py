"""URL routing for rooms (``/api/v1/rooms/``)."""

from __future__ import annotations

from rest_framework.routers import SimpleRouter  # type: ignore

from .views import RoomViewSet

router = SimpleRouter()
router.register(r"", RoomViewSet, basename="room")

urlpatterns = router.urls
