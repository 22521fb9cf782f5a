"""
Admin registration for the qna app.

Registers Question, Answer and Upvote for moderation and review.
"""

from django.contrib import admin

from .models import Answer, Question, Upvote


class AnswerInline(admin.StackedInline):
    model = Answer
    extra = 0
    readonly_fields = ("created_at", "updated_at")


@admin.register(Question)
class QuestionAdmin(admin.ModelAdmin):
    list_display = ("id", "room", "guest_name", "status", "is_priority", "short_question", "picked_by", "created_at")
    list_filter = ("status", "is_priority", "room")
    search_fields = ("content", "guest_name", "room__name", "room__slug")
    readonly_fields = ("created_at", "updated_at", "answered_at")
    date_hierarchy = "created_at"
    inlines = [AnswerInline]

    @admin.display(description="question")
    def short_question(self, obj: Question) -> str:
        return (obj.content or "")[:80]


@admin.register(Answer)
class AnswerAdmin(admin.ModelAdmin):
    list_display = ("id", "question", "leader", "created_at")
    search_fields = ("body", "question__content")
    readonly_fields = ("created_at", "updated_at")


@admin.register(Upvote)
class UpvoteAdmin(admin.ModelAdmin):
    list_display = ("id", "question", "voter_key", "created_at")
    search_fields = ("voter_key",)
