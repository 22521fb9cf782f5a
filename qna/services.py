"""
Q&A domain operations.

Views stay thin: they validate input, call into here, and serialize the
result.  Everything that changes a question's lifecycle goes through these
functions so status, timestamps and answers stay consistent.

Lifecycle::

    pending --answer/claim--> answered
    pending/answered --hide--> hidden --toggle--> answered (if it had an answer
                                                           or was claimed)
                                                  pending  (otherwise)
"""
import logging
from typing import Optional

from django.db import IntegrityError, transaction
from django.db.models import Count, F, Q, QuerySet
from django.utils import timezone

from rooms.models import Room
from users.models import DEFAULT_EMOJI

from .models import Answer, Question, Upvote

logger = logging.getLogger(__name__)


class QnAError(Exception):
    """Base class for rule violations raised by this module."""


class AlreadyUpvoted(QnAError):
    pass


class QuestionNotVisible(QnAError):
    pass


# -----------------------------
# Query helpers
# -----------------------------

def with_upvote_counts(qs: QuerySet) -> QuerySet:
    return qs.annotate(upvote_count=Count("upvotes", distinct=True))


def with_answers(qs: QuerySet) -> QuerySet:
    return qs.select_related("room", "answer", "answer__leader", "answer__leader__profile")


def ranked_pending(room: Room, limit: Optional[int] = None) -> list:
    """
    The room's pending queue: most upvoted first, then oldest first, then
    lowest id, so equal vote counts keep their arrival order.
    """
    qs = with_upvote_counts(room.questions.filter(status=Question.STATUS_PENDING).select_related("room"))
    qs = qs.order_by("-upvote_count", "created_at", "id")
    if limit is not None:
        qs = qs[:limit]
    return list(qs)


def featured_question(room: Room) -> Optional[Question]:
    """The answered question with the most recent answered_at (highest id wins ties)."""
    qs = with_answers(with_upvote_counts(room.questions.filter(status=Question.STATUS_ANSWERED)))
    return qs.order_by(F("answered_at").desc(nulls_last=True), "-id").first()


def resolution_rate(answered: int, total: int) -> int:
    """answered/total as a whole percentage, rounded half up; 0 for an empty room."""
    if total <= 0:
        return 0
    return (200 * answered + total) // (2 * total)


def room_metrics(room: Room) -> dict:
    counts = room.questions.aggregate(
        total=Count("id"),
        answered=Count("id", filter=Q(status=Question.STATUS_ANSWERED)),
        hidden=Count("id", filter=Q(status=Question.STATUS_HIDDEN)),
        pending=Count("id", filter=Q(status=Question.STATUS_PENDING)),
    )
    counts["resolution_rate"] = resolution_rate(counts["answered"], counts["total"])
    return counts


def backlog() -> QuerySet:
    """Pending questions from every room, newest first."""
    qs = Question.objects.filter(status=Question.STATUS_PENDING).select_related("room")
    return with_upvote_counts(qs).order_by("-created_at", "-id")


def answered_archive() -> QuerySet:
    """Answered questions from every room, newest first."""
    qs = with_answers(with_upvote_counts(Question.objects.filter(status=Question.STATUS_ANSWERED)))
    return qs.order_by("-created_at", "-id")


# -----------------------------
# Audience operations
# -----------------------------

def voter_key_for(user=None, guest_token: str = "") -> Optional[str]:
    if user is not None and user.is_authenticated:
        return f"user:{user.pk}"
    guest_token = (guest_token or "").strip()
    if guest_token:
        return f"guest:{guest_token}"
    return None


def submit_question(room: Room, *, content: str, guest_name: str, user=None, guest_token: str = "") -> Question:
    owner = user if user is not None and user.is_authenticated else None
    emoji = DEFAULT_EMOJI
    if owner is not None:
        profile = getattr(owner, "profile", None)
        if profile is not None and profile.emoji_key:
            emoji = profile.emoji_key

    question = Question.objects.create(
        room=room,
        user=owner,
        guest_name=guest_name.strip(),
        guest_emoji=emoji,
        guest_token=(guest_token or "").strip(),
        content=content.strip(),
        status=Question.STATUS_PENDING,
    )
    logger.debug("Question %s asked in room %s", question.pk, room.slug)
    return question


def upvote_question(question: Question, voter_key: str) -> int:
    """Record one boost and return the new count; a repeat voter raises AlreadyUpvoted."""
    if question.is_hidden:
        raise QuestionNotVisible(question.pk)
    try:
        with transaction.atomic():
            Upvote.objects.create(question=question, voter_key=voter_key)
    except IntegrityError:
        raise AlreadyUpvoted(question.pk)
    return question.upvotes.count()


def adopt_guest_questions(user, guest_token: str) -> int:
    """Attach ownerless questions asked from this browser to the account."""
    guest_token = (guest_token or "").strip()
    if not guest_token:
        return 0
    adopted = 0
    # per-row save: every adoption emits a change event
    with transaction.atomic():
        for question in Question.objects.select_for_update().filter(guest_token=guest_token, user__isnull=True):
            question.user = user
            question.save(update_fields=["user", "updated_at"])
            adopted += 1
    logger.info("User %s adopted %d guest question(s)", user.pk, adopted)
    return adopted


# -----------------------------
# Leader operations
# -----------------------------

@transaction.atomic
def answer_question(question: Question, leader, body: str) -> Answer:
    """Create or replace the question's answer and mark it answered."""
    answer, _ = Answer.objects.update_or_create(
        question=question,
        defaults={"leader": leader, "body": body.strip()},
    )
    question.status = Question.STATUS_ANSWERED
    question.answered_at = timezone.now()
    question.save(update_fields=["status", "answered_at", "updated_at"])
    return answer


def hide_question(question: Question) -> Question:
    question.status = Question.STATUS_HIDDEN
    question.save(update_fields=["status", "updated_at"])
    return question


def _restored_status(question: Question) -> str:
    has_answer = Answer.objects.filter(question_id=question.pk).exists()
    if has_answer or question.picked_by:
        return Question.STATUS_ANSWERED
    return Question.STATUS_PENDING


def toggle_visibility(question: Question) -> Question:
    if question.is_hidden:
        question.status = _restored_status(question)
    else:
        question.status = Question.STATUS_HIDDEN
    question.save(update_fields=["status", "updated_at"])
    return question


def claim_question(question: Question, leader_name: str) -> Question:
    """Backlog claim: a leader takes the question off-stage and it counts as answered."""
    question.picked_by = leader_name.strip()
    question.status = Question.STATUS_ANSWERED
    question.answered_at = timezone.now()
    question.save(update_fields=["picked_by", "status", "answered_at", "updated_at"])
    return question


def set_priority(question: Question, is_priority: bool) -> Question:
    question.is_priority = is_priority
    question.save(update_fields=["is_priority", "updated_at"])
    return question
