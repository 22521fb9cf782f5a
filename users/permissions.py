from rest_framework.permissions import BasePermission

from .models import is_leader


class IsLeader(BasePermission):
    """Leaders (LEADER / OVERSEER profiles) and staff only."""

    message = "Leader access required."

    def has_permission(self, request, view):
        return is_leader(getattr(request, "user", None))
