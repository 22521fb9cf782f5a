"""
Signals for the users app.

Automatically create a `Profile` instance whenever a `User` is created.
"""
from django.conf import settings
from django.contrib.auth import get_user_model
from django.db.models.signals import post_save
from django.dispatch import receiver

from .models import Profile

User = get_user_model()


@receiver(post_save, sender=User, dispatch_uid="users_ensure_profile")
def ensure_profile(sender, instance, created, **kwargs):
    """Ensure exactly one Profile exists for every User."""
    if not created:
        return
    Profile.objects.get_or_create(
        user=instance,
        defaults={
            "display_name": instance.get_full_name(),
            "role": getattr(settings, "ASKTC_SIGNUP_ROLE", Profile.ROLE_YOUTH),
        },
    )
