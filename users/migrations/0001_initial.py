"""
Initial migration for the users app.

Defines the `Profile` model that carries display name, emoji and role for
every account.
"""
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Profile",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("display_name", models.CharField(blank=True, max_length=150)),
                (
                    "role",
                    models.CharField(
                        choices=[("YOUTH", "Youth"), ("LEADER", "Leader"), ("OVERSEER", "Overseer")],
                        default="YOUTH",
                        max_length=16,
                    ),
                ),
                ("emoji_key", models.CharField(default="👤", max_length=16)),
                ("avatar_url", models.URLField(blank=True, default="")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "user",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="profile",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "indexes": [models.Index(fields=["role"], name="profile_role_idx")],
            },
        ),
    ]
