"""Room persistence models."""

from __future__ import annotations

import uuid

from django.db import models  # type: ignore
from django.db.models.functions import Lower  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Room(models.Model):
    """Bookable room. Mutated only through ``apps.rooms.domain.entities.Room``."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100)
    location = models.CharField(max_length=200, null=True, blank=True)
    capacity = models.PositiveIntegerField()
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField()
    updated_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        verbose_name = _("Room")
        verbose_name_plural = _("Rooms")
        ordering = ["name"]
        constraints = [
            models.UniqueConstraint(Lower("name"), name="room_name_ci_unique"),
            models.CheckConstraint(
                condition=models.Q(capacity__gt=0),
                name="room_capacity_positive",
            ),
        ]
        indexes = [
            models.Index(fields=["is_active"], name="rooms_room_is_acti_6c9d2e_idx"),
        ]

    def __str__(self) -> str:
        return self.name
