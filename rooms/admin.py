from django.contrib import admin

from .models import Room


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "slug", "created_by", "created_at")
    search_fields = ("name", "slug")
    readonly_fields = ("created_at",)
    date_hierarchy = "created_at"
