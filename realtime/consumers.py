"""
WebSocket consumers for the change feeds.

Overview
--------
1) RoomFeedConsumer  (ws://.../ws/rooms/<slug>/)
   - Open to everyone: audience phones and the projector screen are anonymous.
   - Joins the room's group and relays every "table.changed" event.

2) LeaderFeedConsumer (ws://.../ws/leader/)
   - Leaders only (session cookie or JWT, see common.channels_jwt_auth).
   - Relays room and question changes from every room for the dashboard.

Message Formats
---------------
<<< server -> clients: {"type": "table.changed", "table": "questions", "action": "UPDATE",
                        "room_id": 1, "record_id": 42, "status": "answered", "previous_status": "pending"}
>>> client -> server: {"type": "ping"}
<<< server -> client: {"type": "pong"}

Clients are expected to re-fetch on any change event; payloads carry ids
and statuses only, never row contents.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from channels.db import database_sync_to_async
from channels.generic.websocket import AsyncJsonWebsocketConsumer

from rooms.models import Room
from users.models import is_leader

from .services import DASHBOARD_GROUP, room_group

log = logging.getLogger("channels")


@database_sync_to_async
def _get_room_id(slug: str) -> Optional[int]:
    return Room.objects.filter(slug=slug).values_list("id", flat=True).first()


@database_sync_to_async
def _user_is_leader(user) -> bool:
    return is_leader(user)


class BaseFeedConsumer(AsyncJsonWebsocketConsumer):
    """
    Base consumer providing:
      - group add/discard helpers
      - ping/pong and JSON error frames
      - relay of "table.changed" group events
    """

    group_name: Optional[str] = None

    async def join(self, group_name: str) -> None:
        self.group_name = group_name
        await self.channel_layer.group_add(self.group_name, self.channel_name)
        await self.accept()
        await self.send_json({"type": "subscribed", "group": self.group_name})

    async def disconnect(self, code: int) -> None:
        if self.group_name:
            await self.channel_layer.group_discard(self.group_name, self.channel_name)

    async def send_error(self, detail: str, code: str = "bad_request") -> None:
        await self.send_json({"type": "error", "error": code, "detail": detail})

    # override to prevent JSONDecodeError on empty/invalid frames
    async def receive(self, text_data=None, bytes_data=None):
        if not text_data:
            return  # ignore empty frame
        try:
            content = json.loads(text_data)
        except ValueError:
            await self.send_error("Invalid JSON", code="invalid_json")
            return
        await self.receive_json(content)

    async def receive_json(self, content: Any, **kwargs: Any) -> None:
        if isinstance(content, dict) and content.get("type") == "ping":
            await self.send_json({"type": "pong"})

    async def table_changed(self, event: Dict[str, Any]) -> None:
        """
        Handler for group broadcast events of type 'table.changed'.
        """
        await self.send_json(event.get("payload", {}))


class RoomFeedConsumer(BaseFeedConsumer):
    async def connect(self) -> None:
        slug = self.scope["url_route"]["kwargs"]["slug"]
        log.debug("WS room feed path=%s", self.scope.get("path"))

        room_id = await _get_room_id(slug)
        if room_id is None:
            await self.close(code=4404)  # Not Found
            return

        self.room_id = room_id
        await self.join(room_group(room_id))


class LeaderFeedConsumer(BaseFeedConsumer):
    async def connect(self) -> None:
        user = self.scope.get("user")
        log.debug("WS leader feed user_id=%s", getattr(user, "id", None))
        if not user or not user.is_authenticated:
            await self.close(code=4401)  # Unauthorized
            return
        if not await _user_is_leader(user):
            await self.close(code=4403)  # Forbidden
            return

        await self.join(DASHBOARD_GROUP)
