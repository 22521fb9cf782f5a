"""
django-filter FilterSet definitions for the qna app.

``room`` takes a room slug; ``status`` one of pending / answered / hidden.
Free-text search (``?search=``) is handled by DRF's SearchFilter on the view.
"""
from django_filters import rest_framework as filters

from .models import Question


class QuestionFilter(filters.FilterSet):
    room = filters.CharFilter(field_name="room__slug")
    status = filters.ChoiceFilter(choices=Question.STATUS_CHOICES)

    class Meta:
        model = Question
        fields = ["room", "status", "is_priority"]
