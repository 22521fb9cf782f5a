from django.apps import AppConfig


class RoomsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "rooms"
    verbose_name = "Rooms"

    def ready(self):
        # import signals so receivers register
        from . import signals  # noqa
