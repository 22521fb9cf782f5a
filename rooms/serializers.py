# rooms/serializers.py
from rest_framework import serializers

from .models import Room, slugify_room_name


class RoomSerializer(serializers.ModelSerializer):
    question_count = serializers.IntegerField(read_only=True, required=False)
    join_url = serializers.CharField(read_only=True)

    class Meta:
        model = Room
        fields = ["id", "name", "slug", "join_url", "question_count", "created_by", "created_at"]
        read_only_fields = ["id", "slug", "join_url", "question_count", "created_by", "created_at"]
        extra_kwargs = {
            "name": {"error_messages": {"blank": "Please enter a room name"}},
        }

    def validate_name(self, value: str) -> str:
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Please enter a room name")
        if not slugify_room_name(value):
            raise serializers.ValidationError("Room name needs at least one letter or digit.")
        return value


class RoomMiniSerializer(serializers.ModelSerializer):
    class Meta:
        model = Room
        fields = ["id", "name", "slug"]


class PublicRoomSerializer(serializers.ModelSerializer):
    """What anonymous clients see when resolving a room code."""

    class Meta:
        model = Room
        fields = ["id", "name", "slug", "created_at"]
        read_only_fields = fields
