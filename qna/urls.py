from django.urls import path
from rest_framework.routers import DefaultRouter

from .views import ProjectorView, QuestionViewSet, RoomControlView, RoomFeedView

router = DefaultRouter()
router.register(r"questions", QuestionViewSet, basename="question")

urlpatterns = [
    path("rooms/<slug:slug>/feed/", RoomFeedView.as_view(), name="room-feed"),
    path("rooms/<slug:slug>/control/", RoomControlView.as_view(), name="room-control"),
    path("rooms/<slug:slug>/projector/", ProjectorView.as_view(), name="room-projector"),
]

urlpatterns += router.urls
