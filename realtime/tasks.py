"""
Celery tasks for the realtime app.

Fan-out runs in a worker so request threads never wait on Redis.
"""
from celery import shared_task

from .services import publish_change


@shared_task(ignore_result=True)
def broadcast_change_task(groups: list, payload: dict) -> str:
    """Deliver one change payload to every listed channel-layer group."""
    publish_change(groups, payload)
    return f"{payload.get('table')} {payload.get('action')} -> {len(groups)} group(s)"
