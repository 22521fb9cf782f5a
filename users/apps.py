from django.apps import AppConfig


class UsersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "users"
    verbose_name = "Users & profiles"

    def ready(self):
        # import signals so receivers register
        from . import signals  # noqa
