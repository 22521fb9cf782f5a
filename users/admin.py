from django.contrib import admin

from .models import Profile


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "display_name", "role", "emoji_key", "created_at")
    list_filter = ("role",)
    search_fields = ("display_name", "user__username", "user__email")
    readonly_fields = ("created_at",)
