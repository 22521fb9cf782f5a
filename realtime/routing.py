from django.urls import path

from .consumers import LeaderFeedConsumer, RoomFeedConsumer

# Websocket paths for the change feeds; included in the project router
websocket_urlpatterns = [
    path("ws/rooms/<slug:slug>/", RoomFeedConsumer.as_asgi(), name="room-feed"),
    path("ws/leader/", LeaderFeedConsumer.as_asgi(), name="leader-feed"),
]
