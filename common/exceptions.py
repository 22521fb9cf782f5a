from rest_framework import status
from rest_framework.exceptions import APIException


class Conflict(APIException):
    """409 for writes that collide with an existing row (slug taken, repeat upvote)."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = "Resource already exists."
    default_code = "conflict"
