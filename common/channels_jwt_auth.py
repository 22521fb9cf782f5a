"""
JWT authentication middleware for Django Channels.

The stack first resolves the Django session (cookie) user, then looks for a
SimpleJWT access token in the WebSocket's `Authorization: Bearer <token>`
header or in a `token` query parameter.  A valid token replaces
`scope['user']`; a missing or invalid one leaves the session result alone,
which for audience and projector clients is `AnonymousUser`.
"""

import logging
import urllib.parse
from typing import Callable

from channels.auth import AuthMiddlewareStack
from channels.middleware import BaseMiddleware
from channels.db import database_sync_to_async
from django.contrib.auth import get_user_model
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import AccessToken

log = logging.getLogger(__name__)

User = get_user_model()


@database_sync_to_async
def get_user_from_token(token):
    """Validate an access token and return its active user, or None."""
    try:
        payload = AccessToken(token)
    except (InvalidToken, TokenError) as exc:
        log.debug("WS token rejected: %s", exc)
        return None

    user_id = payload.get(api_settings.USER_ID_CLAIM)
    if not user_id:
        return None
    try:
        user = User.objects.get(**{api_settings.USER_ID_FIELD: user_id})
    except User.DoesNotExist:
        return None
    return user if user.is_active else None


def _token_from_scope(scope):
    headers = dict(scope.get("headers", []))
    auth_header = headers.get(b"authorization", b"").decode()
    if auth_header.lower().startswith("bearer "):
        return auth_header.split(" ", 1)[1].strip()

    # Browsers cannot set headers on WebSocket upgrades; fall back to ?token=
    qs = scope.get("query_string", b"").decode()
    params = urllib.parse.parse_qs(qs)
    return params.get("token", [None])[0]


class _JWTMiddleware(BaseMiddleware):
    """Low-level middleware to handle JWT tokens in a WebSocket scope."""

    async def __call__(self, scope, receive, send):
        scope = dict(scope)
        token = _token_from_scope(scope)
        if token:
            user = await get_user_from_token(token)
            if user:
                scope["user"] = user
        return await super().__call__(scope, receive, send)


def JWTAuthMiddlewareStack(inner: Callable):
    """Entry point for the middleware stack used by Channels routing."""
    return AuthMiddlewareStack(_JWTMiddleware(inner))
