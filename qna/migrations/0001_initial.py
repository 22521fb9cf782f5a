from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("rooms", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Question",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("guest_name", models.CharField(help_text="Name shown with the question.", max_length=80)),
                ("guest_emoji", models.CharField(default="👤", max_length=16)),
                ("guest_token", models.CharField(blank=True, db_index=True, default="", max_length=64)),
                ("content", models.TextField(help_text="Question text.")),
                (
                    "status",
                    models.CharField(
                        choices=[("pending", "Pending"), ("answered", "Answered"), ("hidden", "Hidden")],
                        default="pending",
                        max_length=16,
                    ),
                ),
                ("is_priority", models.BooleanField(default=False)),
                ("picked_by", models.CharField(blank=True, default="", max_length=120)),
                ("answered_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True, help_text="Creation timestamp.")),
                ("updated_at", models.DateTimeField(auto_now=True, help_text="Last update timestamp.")),
                (
                    "room",
                    models.ForeignKey(
                        help_text="Room this question belongs to.",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="questions",
                        to="rooms.room",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        blank=True,
                        help_text="Signed-in user who asked, if any.",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="questions",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Question",
                "verbose_name_plural": "Questions",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["room", "-created_at"], name="qna_room_created_idx"),
                    models.Index(fields=["room", "status"], name="qna_room_status_idx"),
                    models.Index(fields=["status", "-created_at"], name="qna_status_created_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Answer",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("body", models.TextField()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "leader",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="answers",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "question",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="answer",
                        to="qna.question",
                    ),
                ),
            ],
        ),
        migrations.CreateModel(
            name="Upvote",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("voter_key", models.CharField(max_length=80)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "question",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="upvotes",
                        to="qna.question",
                    ),
                ),
            ],
            options={
                "constraints": [
                    models.UniqueConstraint(fields=("question", "voter_key"), name="unique_upvote_per_voter"),
                ],
            },
        ),
    ]
