"""
REST endpoints for rooms (the leader dashboard's session list).

- GET    /api/rooms/              leader: newest first, with question_count, ?search=
- POST   /api/rooms/              leader: {"name": "..."} -> slug derived from the name
- GET    /api/rooms/{slug}/       anyone: resolve a room code
- DELETE /api/rooms/{slug}/       leader: drops the room and everything in it
"""
import logging

from django.db import IntegrityError, transaction
from django.db.models import Count
from rest_framework import mixins, viewsets
from rest_framework.filters import SearchFilter
from rest_framework.permissions import AllowAny

from common.exceptions import Conflict
from users.permissions import IsLeader

from .models import Room
from .serializers import PublicRoomSerializer, RoomSerializer

logger = logging.getLogger(__name__)


class RoomViewSet(
    mixins.ListModelMixin,
    mixins.CreateModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = RoomSerializer
    lookup_field = "slug"
    queryset = Room.objects.all()

    # 🔎 ?search= over name and slug
    filter_backends = [SearchFilter]
    search_fields = ["name", "slug"]

    def get_permissions(self):
        if self.action == "retrieve":
            return [AllowAny()]
        return [IsLeader()]

    def get_serializer_class(self):
        if self.action == "retrieve":
            return PublicRoomSerializer
        return RoomSerializer

    def get_queryset(self):
        qs = Room.objects.annotate(question_count=Count("questions"))
        return qs.order_by("-created_at", "-id")

    def perform_create(self, serializer):
        try:
            with transaction.atomic():
                room = serializer.save(created_by=self.request.user)
        except IntegrityError:
            raise Conflict("That name is already taken")
        logger.info("Room %s created by user %s", room.slug, self.request.user.pk)

    def perform_destroy(self, instance):
        logger.info("Room %s deleted by user %s", instance.slug, self.request.user.pk)
        instance.delete()
