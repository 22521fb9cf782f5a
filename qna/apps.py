"""
App configuration for the qna app.

Signal receivers that publish change events are wired up on ready().
"""

from django.apps import AppConfig


class QnaConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "qna"
    verbose_name = "Q&A (questions, answers, upvotes)"

    def ready(self):
        from . import signals  # noqa
