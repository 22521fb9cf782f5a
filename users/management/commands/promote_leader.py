from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

from users.models import Profile

User = get_user_model()


class Command(BaseCommand):
    help = "Set the role of an existing account (defaults to LEADER)."

    def add_arguments(self, parser):
        parser.add_argument("email")
        parser.add_argument(
            "--role",
            default=Profile.ROLE_LEADER,
            choices=[choice for choice, _ in Profile.ROLE_CHOICES],
        )

    def handle(self, *args, **options):
        email = options["email"].strip()
        try:
            user = User.objects.get(email__iexact=email)
        except User.DoesNotExist:
            raise CommandError(f"No account with email {email}")

        profile, _ = Profile.objects.get_or_create(user=user)
        profile.role = options["role"]
        profile.save(update_fields=["role"])
        self.stdout.write(self.style.SUCCESS(f"{user.email} is now {profile.role}"))
