from django.apps import AppConfig


class RealtimeConfig(AppConfig):
    """Configuration for the realtime app.

    The realtime app turns row changes on rooms, questions, answers and
    upvotes into "table changed" notifications delivered over WebSockets.
    Clients react by re-fetching the screen they are showing.
    """

    default_auto_field = "django.db.models.BigAutoField"
    name = "realtime"
