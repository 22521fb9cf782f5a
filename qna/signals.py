"""
Signal handlers for the qna app.

Covers:
  - question insert / update / delete -> room feed + leader dashboard
  - answer and upvote writes          -> room feed
A question's previous status rides along so screens can react to the
pending -> answered transition (the projector spotlights it).
"""
import logging

from django.db.models.signals import post_delete, post_save, pre_delete, pre_save
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

from .models import Answer, Question, Upvote

logger = logging.getLogger(__name__)


def _room_id_for_question(question_id):
    return Question.objects.filter(pk=question_id).values_list("room_id", flat=True).first()


# Track the status the row had before this save
@receiver(pre_save, sender=Question, dispatch_uid="qna_question_track_prev_status")
def _track_previous_status(sender, instance: Question, **kwargs):
    instance._previous_status = None
    if instance.pk:
        instance._previous_status = (
            sender.objects.filter(pk=instance.pk).values_list("status", flat=True).first()
        )


@receiver(post_save, sender=Question, dispatch_uid="qna_question_saved")
def on_question_saved(sender, instance: Question, created: bool, **kwargs) -> None:
    previous = getattr(instance, "_previous_status", None)
    payload = build_change(
        "questions",
        ACTION_INSERT if created else ACTION_UPDATE,
        record_id=instance.pk,
        room_id=instance.room_id,
        status=instance.status,
        previous_status=previous if previous != instance.status else None,
    )
    dispatch_change([room_group(instance.room_id), DASHBOARD_GROUP], payload)


@receiver(post_delete, sender=Question, dispatch_uid="qna_question_deleted")
def on_question_deleted(sender, instance: Question, **kwargs) -> None:
    payload = build_change("questions", ACTION_DELETE, record_id=instance.pk, room_id=instance.room_id)
    dispatch_change([room_group(instance.room_id), DASHBOARD_GROUP], payload)


# Answers and upvotes only know their question; resolve the room before
# a cascade removes the question row.
@receiver(pre_delete, sender=Answer, dispatch_uid="qna_answer_pre_delete")
@receiver(pre_delete, sender=Upvote, dispatch_uid="qna_upvote_pre_delete")
def _remember_room(sender, instance, **kwargs):
    instance._room_id = _room_id_for_question(instance.question_id)


def _child_saved(table: str, instance, created: bool) -> None:
    room_id = _room_id_for_question(instance.question_id)
    if room_id is None:
        return
    payload = build_change(
        table,
        ACTION_INSERT if created else ACTION_UPDATE,
        record_id=instance.pk,
        room_id=room_id,
        question_id=instance.question_id,
    )
    dispatch_change([room_group(room_id)], payload)


def _child_deleted(table: str, instance) -> None:
    room_id = getattr(instance, "_room_id", None)
    if room_id is None:
        logger.debug("No room for deleted %s %s", table, instance.pk)
        return
    payload = build_change(table, ACTION_DELETE, record_id=instance.pk, room_id=room_id, question_id=instance.question_id)
    dispatch_change([room_group(room_id)], payload)


@receiver(post_save, sender=Answer, dispatch_uid="qna_answer_saved")
def on_answer_saved(sender, instance: Answer, created: bool, **kwargs) -> None:
    _child_saved("answers", instance, created)


@receiver(post_delete, sender=Answer, dispatch_uid="qna_answer_deleted")
def on_answer_deleted(sender, instance: Answer, **kwargs) -> None:
    _child_deleted("answers", instance)


@receiver(post_save, sender=Upvote, dispatch_uid="qna_upvote_saved")
def on_upvote_saved(sender, instance: Upvote, created: bool, **kwargs) -> None:
    _child_saved("upvotes", instance, created)


@receiver(post_delete, sender=Upvote, dispatch_uid="qna_upvote_deleted")
def on_upvote_deleted(sender, instance: Upvote, **kwargs) -> None:
    _child_deleted("upvotes", instance)
