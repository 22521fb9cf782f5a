# users/middleware.py
from django.conf import settings
from django.shortcuts import redirect

# Prefixes that are never page routes and therefore never redirected.
UNGUARDED_PREFIXES = ("/api/", "/static/", "/media/", "/admin/")


class LeaderRouteGuardMiddleware:
    """
    Cookie-session gate for the leader pages.

    - On the login page with a live session: go to the dashboard.
    - On any other /leader... page without a session: go to the login page.
    """

    def __init__(self, get_response):
        self.get_response = get_response
        self.login_url = getattr(settings, "LEADER_LOGIN_URL", "/leader-login/")
        self.home_url = getattr(settings, "LEADER_HOME_URL", "/leader/")

    def __call__(self, request):
        path = request.path
        if path.startswith(UNGUARDED_PREFIXES):
            return self.get_response(request)

        is_login_page = path.rstrip("/") == self.login_url.rstrip("/")
        is_leader_route = path.startswith("/leader")
        authenticated = request.user.is_authenticated

        if is_login_page and authenticated:
            return redirect(self.home_url)

        if is_leader_route and not is_login_page and not authenticated:
            return redirect(self.login_url)

        return self.get_response(request)
