"""
Database models for the qna app.

We persist:
- Question: an audience question inside a room, with its triage status.
- Answer: the leader's reply; at most one per question.
- Upvote: one boost per voter per question.

Indexes + ordering are chosen for the most common queries: a room's
questions by status, newest first, and per-question upvote counts.
"""

from django.conf import settings
from django.db import models

from users.models import DEFAULT_EMOJI


class Question(models.Model):
    """
    A question posted to a room.

    Fields:
        room: FK to the room it was asked in.
        user: FK to the signed-in author (optional; guests have none).
        guest_name / guest_emoji: what the audience sees next to the question.
        guest_token: opaque browser id used to hand guest questions over
            to an account later, and to de-duplicate guest upvotes.
        content: The question text.
        status: pending -> answered, or hidden by a leader.
        is_priority: leader flag for urgent questions.
        picked_by: name of the leader who claimed it from the backlog.
        answered_at: when it last moved to answered.
        created_at/updated_at: audit timestamps.
    """

    STATUS_PENDING = "pending"
    STATUS_ANSWERED = "answered"
    STATUS_HIDDEN = "hidden"
    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_ANSWERED, "Answered"),
        (STATUS_HIDDEN, "Hidden"),
    ]

    room = models.ForeignKey(
        "rooms.Room",
        on_delete=models.CASCADE,
        related_name="questions",
        help_text="Room this question belongs to.",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="questions",
        help_text="Signed-in user who asked, if any.",
    )
    guest_name = models.CharField(max_length=80, help_text="Name shown with the question.")
    guest_emoji = models.CharField(max_length=16, default=DEFAULT_EMOJI)
    guest_token = models.CharField(max_length=64, blank=True, default="", db_index=True)
    content = models.TextField(help_text="Question text.")
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_PENDING)
    is_priority = models.BooleanField(default=False)
    picked_by = models.CharField(max_length=120, blank=True, default="")
    answered_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True, help_text="Creation timestamp.")
    updated_at = models.DateTimeField(auto_now=True, help_text="Last update timestamp.")

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["room", "-created_at"], name="qna_room_created_idx"),
            models.Index(fields=["room", "status"], name="qna_room_status_idx"),
            models.Index(fields=["status", "-created_at"], name="qna_status_created_idx"),
        ]
        verbose_name = "Question"
        verbose_name_plural = "Questions"

    @property
    def is_hidden(self) -> bool:
        return self.status == self.STATUS_HIDDEN

    def __str__(self) -> str:
        return f"[{self.room_id}] {self.status}: {self.content[:50]}"


class Answer(models.Model):
    question = models.OneToOneField(
        Question,
        on_delete=models.CASCADE,
        related_name="answer",
    )
    leader = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="answers",
    )
    body = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"Answer<{self.question_id}>: {self.body[:50]}"


class Upvote(models.Model):
    """
    One boost of a question.  ``voter_key`` is ``user:<id>`` for accounts
    and ``guest:<token>`` for anonymous browsers.
    """

    question = models.ForeignKey(Question, on_delete=models.CASCADE, related_name="upvotes")
    voter_key = models.CharField(max_length=80)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["question", "voter_key"], name="unique_upvote_per_voter"),
        ]

    def __str__(self) -> str:
        return f"Upvote<{self.question_id}:{self.voter_key}>"
