"""
Signal handlers for the rooms app.

Room inserts, renames and deletes are announced on the leader dashboard
feed; a delete is also pushed to the room's own feed so open audience and
projector screens learn that the session is gone.
"""
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from realtime.services import (
    ACTION_DELETE,
    ACTION_INSERT,
    ACTION_UPDATE,
    DASHBOARD_GROUP,
    build_change,
    dispatch_change,
    room_group,
)

from .models import Room


@receiver(post_save, sender=Room, dispatch_uid="rooms_room_saved")
def on_room_saved(sender, instance: Room, created: bool, **kwargs) -> None:
    payload = build_change(
        "rooms",
        ACTION_INSERT if created else ACTION_UPDATE,
        record_id=instance.pk,
        room_id=instance.pk,
        slug=instance.slug,
    )
    dispatch_change([DASHBOARD_GROUP], payload)


@receiver(post_delete, sender=Room, dispatch_uid="rooms_room_deleted")
def on_room_deleted(sender, instance: Room, **kwargs) -> None:
    payload = build_change("rooms", ACTION_DELETE, record_id=instance.pk, room_id=instance.pk, slug=instance.slug)
    dispatch_change([DASHBOARD_GROUP, room_group(instance.pk)], payload)
