"""
Common test fixtures for the asktc API tests.

Provides users (audience member and leader), clients authenticated with a
JWT access token, and room / question factories shared by every app's
test suite.
"""
import pytest
from django.contrib.auth.models import User
from rest_framework.test import APIClient

from qna.models import Question
from rooms.models import Room
from users.models import Profile

PASSWORD = "pass12345!"


def _jwt_client(email):
    client = APIClient()
    resp = client.post("/api/auth/token/", {"email": email, "password": PASSWORD}, format="json")
    assert resp.status_code == 200, resp.content
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {resp.json()['access']}")
    return client


@pytest.fixture
def api_client():
    """An anonymous DRF client."""
    return APIClient()


@pytest.fixture
def user(db):
    """A regular audience account (YOUTH profile)."""
    return User.objects.create_user(username="u1@example.com", email="u1@example.com", password=PASSWORD)


@pytest.fixture
def leader(db):
    """An account whose profile carries the LEADER role."""
    account = User.objects.create_user(
        username="leader@example.com", email="leader@example.com", password=PASSWORD, first_name="Lea"
    )
    Profile.objects.filter(user=account).update(role=Profile.ROLE_LEADER, display_name="Pastor Lea")
    account.refresh_from_db()
    return account


@pytest.fixture
def auth_client(db, user):
    """API client authenticated as the regular user with a JWT token."""
    return _jwt_client(user.email)


@pytest.fixture
def leader_client(db, leader):
    """API client authenticated as the leader with a JWT token."""
    return _jwt_client(leader.email)


@pytest.fixture
def room(db, leader):
    return Room.objects.create(name="Friday Night Youth", created_by=leader)


@pytest.fixture
def make_question(db, room):
    """Factory: make_question(content=..., status=..., room=...)."""

    def _make(content="What is grace?", guest_name="Sam", status=Question.STATUS_PENDING, **kwargs):
        kwargs.setdefault("room", room)
        return Question.objects.create(content=content, guest_name=guest_name, status=status, **kwargs)

    return _make
