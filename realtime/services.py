# realtime/services.py
"""
Change-feed plumbing shared by the model signal handlers.

Every write produces one small payload::

    {"type": "table.changed", "table": "questions", "action": "UPDATE",
     "room_id": 3, "record_id": 42, "status": "answered",
     "previous_status": "pending"}

Payloads go out after the surrounding transaction commits, either through
a Celery worker or inline, depending on ``ASKTC_REALTIME_DISPATCH``.
"""
import logging
from typing import Iterable, Optional

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.conf import settings
from django.db import transaction

logger = logging.getLogger(__name__)

CHANGE_EVENT = "table.changed"

ACTION_INSERT = "INSERT"
ACTION_UPDATE = "UPDATE"
ACTION_DELETE = "DELETE"

DASHBOARD_GROUP = "leader_dashboard"


def room_group(room_id: int) -> str:
    return f"room_{room_id}_changes"


def build_change(table: str, action: str, *, record_id, room_id: Optional[int] = None, **extra) -> dict:
    payload = {
        "type": CHANGE_EVENT,
        "table": table,
        "action": action,
        "room_id": room_id,
        "record_id": record_id,
    }
    payload.update({k: v for k, v in extra.items() if v is not None})
    return payload


def publish_change(groups: Iterable[str], payload: dict) -> None:
    """Send a change payload to each group on the channel layer (sync)."""
    channel_layer = get_channel_layer()
    if channel_layer is None:
        logger.warning("No channel layer configured; dropping %s", payload.get("table"))
        return
    for group in groups:
        async_to_sync(channel_layer.group_send)(group, {"type": CHANGE_EVENT, "payload": payload})


def _send_now(groups: list, payload: dict) -> None:
    mode = getattr(settings, "ASKTC_REALTIME_DISPATCH", "celery")
    try:
        if mode == "inline":
            publish_change(groups, payload)
        else:
            from .tasks import broadcast_change_task

            broadcast_change_task.delay(groups, payload)
    except Exception:
        # the triggering write has already committed; log and move on
        logger.exception("Failed to dispatch %s %s change", payload.get("table"), payload.get("action"))


def dispatch_change(groups: Iterable[str], payload: dict) -> None:
    """Queue a change payload for delivery once the current transaction commits."""
    groups = [g for g in groups if g]
    if not groups:
        return
    transaction.on_commit(lambda: _send_now(groups, payload))
