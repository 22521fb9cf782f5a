"""
Database models for the rooms app.

A `Room` is one live Q&A session.  Audiences reach it through its
human-readable slug (`/room/<slug>`); leaders steer it from the control
panel and the projector shows it on the big screen.
"""
import re

from django.conf import settings
from django.db import models

_NON_WORD = re.compile(r"[^\w ]+", re.ASCII)
_SPACES = re.compile(r" +")


def slugify_room_name(name: str) -> str:
    """
    Build the room slug the way the create-room screen always has:
    lower-case, trim, drop anything but ASCII word characters and spaces,
    then turn each run of spaces into a single hyphen.

    >>> slugify_room_name("  Friday Night Q&A! ")
    'friday-night-qa'
    """
    slug = (name or "").lower().strip()
    slug = _NON_WORD.sub("", slug)
    return _SPACES.sub("-", slug)


class Room(models.Model):
    """
    A named Q&A session.

    Fields:
        name: Title shown to the audience and on the projector.
        slug: Unique code derived from the name; used in every public URL.
        created_by: Leader who opened the room (optional).
        created_at: Creation timestamp.
    """

    name = models.CharField(max_length=200, help_text="Room title.")
    slug = models.SlugField(max_length=220, unique=True, help_text="Public room code.")
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="rooms_created",
        help_text="Leader who created the room.",
    )
    created_at = models.DateTimeField(auto_now_add=True, help_text="Creation timestamp.")

    class Meta:
        ordering = ["-created_at"]
        verbose_name = "Room"
        verbose_name_plural = "Rooms"

    def save(self, *args, **kwargs):
        if not self.slug and self.name:
            self.slug = slugify_room_name(self.name)
        super().save(*args, **kwargs)

    @property
    def join_url(self) -> str:
        return f"{settings.ASKTC_PUBLIC_URL}/room/{self.slug}"

    def __str__(self) -> str:
        return f"{self.name} ({self.slug})"
