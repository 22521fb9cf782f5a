# qna/serializers.py
from rest_framework import serializers

from users.models import display_name_for

from .models import Answer, Question


class AnswerSerializer(serializers.ModelSerializer):
    leader_name = serializers.SerializerMethodField(read_only=True)

    class Meta:
        model = Answer
        fields = ["id", "body", "leader", "leader_name", "created_at", "updated_at"]
        read_only_fields = fields

    def get_leader_name(self, obj):
        return display_name_for(obj.leader) if obj.leader_id else ""


class QuestionSerializer(serializers.ModelSerializer):
    """
    Read shape used by every list: the question, its upvote count and, when
    present, its answer.  ``guest_token`` is never serialized.
    """
    room_slug = serializers.CharField(source="room.slug", read_only=True)
    room_name = serializers.CharField(source="room.name", read_only=True)
    upvote_count = serializers.SerializerMethodField()
    answer = serializers.SerializerMethodField()

    class Meta:
        model = Question
        fields = [
            "id",
            "room",
            "room_slug",
            "room_name",
            "user",
            "guest_name",
            "guest_emoji",
            "content",
            "status",
            "is_priority",
            "picked_by",
            "upvote_count",
            "answer",
            "answered_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_upvote_count(self, obj) -> int:
        count = getattr(obj, "upvote_count", None)
        if count is None:
            count = obj.upvotes.count()
        return count

    def get_answer(self, obj):
        try:
            answer = obj.answer
        except Answer.DoesNotExist:
            return None
        return AnswerSerializer(answer).data


class AskQuestionSerializer(serializers.Serializer):
    room = serializers.SlugField(max_length=220, help_text="Room slug.")
    content = serializers.CharField(max_length=1000)
    guest_name = serializers.CharField(max_length=80)
    guest_token = serializers.CharField(max_length=64, required=False, allow_blank=True, default="")


class AnswerInputSerializer(serializers.Serializer):
    body = serializers.CharField(max_length=5000)


class ClaimSerializer(serializers.Serializer):
    leader_name = serializers.CharField(
        max_length=120,
        error_messages={
            "required": "Enter your name to claim this question.",
            "blank": "Enter your name to claim this question.",
        },
    )


class PrioritySerializer(serializers.Serializer):
    is_priority = serializers.BooleanField()


class GuestTokenSerializer(serializers.Serializer):
    guest_token = serializers.CharField(max_length=64)
