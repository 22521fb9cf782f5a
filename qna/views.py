"""
Q&A REST endpoints.

Audience (no login needed):
- POST /api/questions/                      ask: {"room": slug, "content", "guest_name", "guest_token"?}
- POST /api/questions/{id}/upvote/          boost once per user / guest token
- GET  /api/questions/archive/?search=      answered questions from every room
- GET  /api/rooms/{slug}/feed/              room view: answered list + ranked pending queue
- GET  /api/rooms/{slug}/projector/         featured question, queue, join link

Leaders:
- GET  /api/questions/?room=&status=
- POST /api/questions/{id}/answer/          {"body": "..."}
- POST /api/questions/{id}/hide/
- POST /api/questions/{id}/toggle-visibility/
- POST /api/questions/{id}/claim/           {"leader_name": "..."}
- POST /api/questions/{id}/priority/        {"is_priority": true}
- GET  /api/questions/backlog/
- GET  /api/rooms/{slug}/control/           every question, split visible/hidden, plus metrics

Signed-in users:
- POST /api/questions/adopt/                {"guest_token": "..."} take over questions asked as a guest
"""
from django.conf import settings
from django.shortcuts import get_object_or_404
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.filters import SearchFilter
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from common.exceptions import Conflict
from rooms.models import Room
from rooms.serializers import RoomMiniSerializer
from users.models import is_leader
from users.permissions import IsLeader

from . import services
from .filters import QuestionFilter
from .models import Question
from .serializers import (
    AnswerInputSerializer,
    AskQuestionSerializer,
    ClaimSerializer,
    GuestTokenSerializer,
    PrioritySerializer,
    QuestionSerializer,
)

GUEST_TOKEN_HEADER = "HTTP_X_GUEST_TOKEN"


def _guest_token(request) -> str:
    token = request.META.get(GUEST_TOKEN_HEADER) or ""
    if not token and hasattr(request.data, "get"):
        token = request.data.get("guest_token") or ""
    return str(token).strip()[:64]


class QuestionViewSet(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = QuestionSerializer
    queryset = Question.objects.all()  # required by DRF, but we override get_queryset()

    # ?room=<slug>&status=&is_priority= and ?search= over content / guest name
    filter_backends = [DjangoFilterBackend, SearchFilter]
    filterset_class = QuestionFilter
    search_fields = ["content", "guest_name"]

    public_actions = {"create", "retrieve", "upvote", "archive"}

    def get_permissions(self):
        if self.action in self.public_actions:
            return [AllowAny()]
        if self.action == "adopt":
            return [IsAuthenticated()]
        return [IsLeader()]

    def get_queryset(self):
        qs = services.with_answers(services.with_upvote_counts(Question.objects.all()))
        if self.action in {"retrieve", "upvote"} and not is_leader(self.request.user):
            qs = qs.exclude(status=Question.STATUS_HIDDEN)
        return qs.order_by("-created_at", "-id")

    def create(self, request, *args, **kwargs):
        ser = AskQuestionSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data

        room = Room.objects.filter(slug=data["room"]).first()
        if room is None:
            raise NotFound("Room not found.")

        question = services.submit_question(
            room,
            content=data["content"],
            guest_name=data["guest_name"],
            user=request.user,
            guest_token=data.get("guest_token") or _guest_token(request),
        )
        return Response(QuestionSerializer(question).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["post"])
    def upvote(self, request, pk=None):
        """
        Boost a question once. Voters are identified by account, or by the
        X-Guest-Token header / guest_token field for anonymous browsers.
        """
        question = self.get_object()
        voter_key = services.voter_key_for(request.user, _guest_token(request))
        if voter_key is None:
            raise ValidationError({"guest_token": "Sign in or send a guest token to upvote."})

        try:
            upvote_count = services.upvote_question(question, voter_key)
        except services.AlreadyUpvoted:
            raise Conflict("Question already boosted.")
        except services.QuestionNotVisible:
            raise NotFound("Question not found.")

        return Response(
            {"question_id": question.id, "upvoted": True, "upvote_count": upvote_count},
            status=status.HTTP_200_OK,
        )

    @action(detail=True, methods=["post"])
    def answer(self, request, pk=None):
        question = self.get_object()
        ser = AnswerInputSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        services.answer_question(question, request.user, ser.validated_data["body"])
        return Response(self._fresh(question.pk))

    @action(detail=True, methods=["post"])
    def hide(self, request, pk=None):
        question = services.hide_question(self.get_object())
        return Response(self._fresh(question.pk))

    @action(detail=True, methods=["post"], url_path="toggle-visibility")
    def toggle_visibility(self, request, pk=None):
        question = services.toggle_visibility(self.get_object())
        return Response(self._fresh(question.pk))

    @action(detail=True, methods=["post"])
    def claim(self, request, pk=None):
        question = self.get_object()
        ser = ClaimSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        services.claim_question(question, ser.validated_data["leader_name"])
        return Response(self._fresh(question.pk))

    @action(detail=True, methods=["post"])
    def priority(self, request, pk=None):
        question = self.get_object()
        ser = PrioritySerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        services.set_priority(question, ser.validated_data["is_priority"])
        return Response(self._fresh(question.pk))

    @action(detail=False, methods=["get"])
    def backlog(self, request):
        page = self.paginate_queryset(self.filter_queryset(services.backlog()))
        return self.get_paginated_response(QuestionSerializer(page, many=True).data)

    @action(detail=False, methods=["get"])
    def archive(self, request):
        page = self.paginate_queryset(self.filter_queryset(services.answered_archive()))
        return self.get_paginated_response(QuestionSerializer(page, many=True).data)

    @action(detail=False, methods=["post"])
    def adopt(self, request):
        ser = GuestTokenSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        adopted = services.adopt_guest_questions(request.user, ser.validated_data["guest_token"])
        return Response({"adopted": adopted})

    def _fresh(self, pk):
        qs = services.with_answers(services.with_upvote_counts(Question.objects.filter(pk=pk)))
        return QuestionSerializer(qs.get()).data


class RoomFeedView(APIView):
    """
    GET /api/rooms/<slug>/feed/
    What the audience sees: answered questions newest first (with answers
    and upvote counts) and the pending queue ranked by upvotes.
    """
    permission_classes = [AllowAny]

    def get(self, request, slug: str):
        room = get_object_or_404(Room, slug=slug)
        answered = services.with_answers(
            services.with_upvote_counts(room.questions.filter(status=Question.STATUS_ANSWERED))
        ).order_by("-created_at", "-id")
        pending = services.ranked_pending(room)
        return Response({
            "room": RoomMiniSerializer(room).data,
            "answered": QuestionSerializer(answered, many=True).data,
            "pending": QuestionSerializer(pending, many=True).data,
        })


class RoomControlView(APIView):
    """
    GET /api/rooms/<slug>/control/
    Leader control panel: every question newest first, split into visible
    and hidden, with live metrics and the audience join link.
    """
    permission_classes = [IsLeader]

    def get(self, request, slug: str):
        room = get_object_or_404(Room, slug=slug)
        questions = list(
            services.with_answers(services.with_upvote_counts(room.questions.all())).order_by("-created_at", "-id")
        )
        visible = [q for q in questions if not q.is_hidden]
        hidden = [q for q in questions if q.is_hidden]
        return Response({
            "room": RoomMiniSerializer(room).data,
            "join_url": room.join_url,
            "metrics": services.room_metrics(room),
            "questions": QuestionSerializer(visible, many=True).data,
            "hidden": QuestionSerializer(hidden, many=True).data,
        })


class ProjectorView(APIView):
    """
    GET /api/rooms/<slug>/projector/
    Big-screen payload: the featured (most recently answered) question, the
    top of the pending queue and the join link for the QR code.
    """
    permission_classes = [AllowAny]

    def get(self, request, slug: str):
        room = get_object_or_404(Room, slug=slug)
        featured = services.featured_question(room)
        metrics = services.room_metrics(room)
        queue = services.ranked_pending(room, limit=settings.ASKTC_PROJECTOR_QUEUE_SIZE)
        return Response({
            "room": RoomMiniSerializer(room).data,
            "join_url": room.join_url,
            "featured": QuestionSerializer(featured).data if featured else None,
            "pending": QuestionSerializer(queue, many=True).data,
            "pending_count": metrics["pending"],
            "answered_count": metrics["answered"],
        })
