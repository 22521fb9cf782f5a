"""
Models for the users app.

A `Profile` extends the built-in `auth.User` with the display data shown
next to questions (name and emoji) and the role that decides who may act
as a leader.  A `OneToOneField` links each profile to its user; profiles
are created automatically via signals when a new user is saved.
"""
from django.conf import settings
from django.db import models

# Emojis offered on the signup screen; the first one doubles as the guest default.
EMOJI_CHOICES = ["👤", "🚀", "💡", "🛡️", "🔑", "🎯", "💎", "🌈", "⚡", "🔥"]
DEFAULT_EMOJI = EMOJI_CHOICES[0]


class Profile(models.Model):
    """Extension of Django's built-in User model."""

    ROLE_YOUTH = "YOUTH"
    ROLE_LEADER = "LEADER"
    ROLE_OVERSEER = "OVERSEER"
    ROLE_CHOICES = [
        (ROLE_YOUTH, "Youth"),
        (ROLE_LEADER, "Leader"),
        (ROLE_OVERSEER, "Overseer"),
    ]
    LEADER_ROLES = {ROLE_LEADER, ROLE_OVERSEER}

    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="profile")
    display_name = models.CharField(max_length=150, blank=True)
    role = models.CharField(max_length=16, choices=ROLE_CHOICES, default=ROLE_YOUTH)
    emoji_key = models.CharField(max_length=16, default=DEFAULT_EMOJI)
    avatar_url = models.URLField(blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=["role"], name="profile_role_idx"),
        ]

    @property
    def is_leader(self) -> bool:
        return self.role in self.LEADER_ROLES

    def __str__(self) -> str:
        return f"Profile<{self.user.username}:{self.role}>"


def is_leader(user) -> bool:
    """True for staff and for users whose profile carries a leader role."""
    if not user or not user.is_authenticated:
        return False
    if user.is_staff or user.is_superuser:
        return True
    profile = getattr(user, "profile", None)
    return bool(profile and profile.is_leader)


def display_name_for(user) -> str:
    """Best-effort printable name for a user."""
    if user is None:
        return ""
    profile = getattr(user, "profile", None)
    if profile is not None and profile.display_name:
        return profile.display_name
    full = user.get_full_name()
    if full:
        return full
    if user.email:
        return user.email.split("@")[0]
    return user.username or f"User {user.pk}"
