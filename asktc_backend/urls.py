"""
URL configuration for the asktc live Q&A backend.
All API endpoints are registered under the `/api/` prefix.
Authentication endpoints are nested under `/api/auth/`.
"""

from django.contrib import admin
from django.urls import include, path
from django.views.generic import RedirectView
from drf_spectacular.views import (
    SpectacularAPIView, SpectacularSwaggerView, SpectacularRedocView
)

from asktc_backend import views

urlpatterns = [
    path("", views.index, name="index"),
    path("admin/", admin.site.urls),

    path("api/", RedirectView.as_view(pattern_name="swagger-ui", permanent=False)),

    #  Swagger/Redoc
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    path("api/redoc/", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),

    # Auth endpoints
    path("api/auth/", include("users.urls")),
    path("api/", include("rooms.urls")),
    path("api/", include("qna.urls")),

    # Pages
    path("leader-login/", views.leader_login, name="leader-login"),
    path("leader/", views.leader_dashboard, name="leader-dashboard"),
    path("leader/backlog/", views.leader_backlog, name="leader-backlog"),
    path("leader/room/<slug:slug>/", views.leader_room, name="leader-room"),
    path("room/<slug:slug>/", views.audience_room, name="room"),
    path("projector/<slug:slug>/", views.projector, name="projector"),
]
