"""
Page routes.

The browser UI is a client-side app; Django only serves the shell page and
hands it enough bootstrap data (page name, room slug, API base, socket URL)
to start.  Leader pages sit behind LeaderRouteGuardMiddleware.
"""
from django.conf import settings
from django.contrib.auth import login as django_login
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.csrf import ensure_csrf_cookie
from django.views.decorators.http import require_http_methods

from rooms.models import Room
from users.serializers import authenticate_email

SHELL_TEMPLATE = "asktc/shell.html"


def index(request):
    # Logged in? straight to the leader dashboard
    if request.user.is_authenticated:
        return redirect(settings.LEADER_HOME_URL)
    return redirect(settings.FRONTEND_URL)


def _socket_url(request, slug=None):
    scheme = "wss" if request.is_secure() else "ws"
    path = f"/ws/rooms/{slug}/" if slug else "/ws/leader/"
    return f"{scheme}://{request.get_host()}{path}"


def _render_shell(request, page, slug=None, status=200, **extra):
    bootstrap = {
        "page": page,
        "slug": slug,
        "api_base": "/api/",
        "ws_url": _socket_url(request, slug),
        "login_url": settings.LEADER_LOGIN_URL,
        **extra,
    }
    return render(request, SHELL_TEMPLATE, {"page": page, "bootstrap": bootstrap}, status=status)


@ensure_csrf_cookie
def leader_dashboard(request):
    return _render_shell(request, "leader-dashboard")


@ensure_csrf_cookie
def leader_backlog(request):
    return _render_shell(request, "leader-backlog")


@ensure_csrf_cookie
def leader_room(request, slug):
    room = get_object_or_404(Room, slug=slug)
    return _render_shell(request, "leader-room", slug=room.slug, room_name=room.name, join_url=room.join_url)


def audience_room(request, slug):
    room = get_object_or_404(Room, slug=slug)
    return _render_shell(request, "room", slug=room.slug, room_name=room.name)


def projector(request, slug):
    room = get_object_or_404(Room, slug=slug)
    return _render_shell(request, "projector", slug=room.slug, room_name=room.name, join_url=room.join_url)


@ensure_csrf_cookie
@require_http_methods(["GET", "POST"])
def leader_login(request):
    if request.method == "GET":
        return _render_shell(request, "leader-login")

    user = authenticate_email(request.POST.get("email", ""), request.POST.get("password", ""))
    if user is None:
        return _render_shell(request, "leader-login", status=400, error="Invalid credentials")

    django_login(request, user, backend="django.contrib.auth.backends.ModelBackend")
    request.session.cycle_key()
    return redirect(settings.LEADER_HOME_URL)
