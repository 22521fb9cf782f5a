"""
Project-level Channels routing configuration.

This module collects the URL routes for all WebSocket connections.  The
ASGI entry point wraps them with the session + JWT authentication stack.
"""
from realtime.routing import websocket_urlpatterns as realtime_ws

websocket_urlpatterns = [
    *realtime_ws,
]
