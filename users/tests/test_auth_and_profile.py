"""
Tests for signup, login and profile management in the users app.

Covers email/password signup, JWT and session login, the `/api/auth/me/`
endpoint, leader promotion and the leader page route guard.
"""
import pytest
from django.contrib.auth.models import User
from django.core.management import CommandError, call_command

from users.models import Profile, is_leader

PASSWORD = "pass12345!"


@pytest.mark.django_db
def test_signup_and_login(api_client):
    """A new account gets a YOUTH profile and can obtain a JWT pair."""
    payload = {"email": "Alice@Example.com", "password": "s3cure-Passw0rd", "full_name": "Alice A", "emoji_key": "🚀"}
    resp = api_client.post("/api/auth/signup/", payload, format="json")
    assert resp.status_code == 201
    body = resp.json()
    assert body["email"] == "alice@example.com"
    assert body["profile"]["display_name"] == "Alice A"
    assert body["profile"]["emoji_key"] == "🚀"
    assert body["profile"]["role"] == Profile.ROLE_YOUTH
    assert body["access"] and body["refresh"]

    login = api_client.post(
        "/api/auth/token/", {"email": "alice@example.com", "password": "s3cure-Passw0rd"}, format="json"
    )
    assert login.status_code == 200
    assert "access" in login.json()


@pytest.mark.django_db
def test_signup_rejects_duplicate_email(api_client, user):
    resp = api_client.post("/api/auth/signup/", {"email": "U1@example.com", "password": "s3cure-Passw0rd"}, format="json")
    assert resp.status_code == 400
    assert "email" in resp.json()


@pytest.mark.django_db
def test_signup_rejects_weak_password(api_client):
    resp = api_client.post("/api/auth/signup/", {"email": "bob@example.com", "password": "123"}, format="json")
    assert resp.status_code == 400


@pytest.mark.django_db
def test_token_rejects_bad_password(api_client, user):
    resp = api_client.post("/api/auth/token/", {"email": user.email, "password": "nope"}, format="json")
    assert resp.status_code == 401


@pytest.mark.django_db
def test_me_endpoint(auth_client):
    """GET returns the account; PATCH updates the profile but never the role."""
    resp = auth_client.get("/api/auth/me/")
    assert resp.status_code == 200
    assert resp.json()["email"] == "u1@example.com"

    update = auth_client.patch("/api/auth/me/", {"display_name": "Sam", "role": "LEADER"}, format="json")
    assert update.status_code == 200
    assert update.json()["profile"]["display_name"] == "Sam"
    assert update.json()["profile"]["role"] == Profile.ROLE_YOUTH


@pytest.mark.django_db
def test_me_requires_auth(api_client):
    assert api_client.get("/api/auth/me/").status_code == 401


@pytest.mark.django_db
def test_session_login_and_logout(client, user):
    resp = client.post(
        "/api/auth/session/login/", {"email": user.email, "password": PASSWORD}, content_type="application/json"
    )
    assert resp.status_code == 200
    assert resp.json()["user"]["email"] == user.email

    me = client.get("/api/auth/session/me/")
    assert me.status_code == 200

    out = client.post("/api/auth/session/logout/")
    assert out.status_code == 200
    assert client.get("/api/auth/session/me/").status_code in (401, 403)


@pytest.mark.django_db
def test_session_login_invalid_credentials(client, user):
    resp = client.post(
        "/api/auth/session/login/", {"email": user.email, "password": "wrong"}, content_type="application/json"
    )
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid credentials"}


@pytest.mark.django_db
def test_promote_leader_command(user):
    assert not is_leader(user)
    call_command("promote_leader", user.email)
    user.refresh_from_db()
    assert user.profile.role == Profile.ROLE_LEADER
    assert is_leader(user)

    call_command("promote_leader", user.email, "--role", "OVERSEER")
    user.refresh_from_db()
    assert user.profile.role == Profile.ROLE_OVERSEER


@pytest.mark.django_db
def test_promote_leader_unknown_email():
    with pytest.raises(CommandError):
        call_command("promote_leader", "ghost@example.com")


@pytest.mark.django_db
def test_staff_counts_as_leader():
    staff = User.objects.create_user(username="staff", email="staff@example.com", password=PASSWORD, is_staff=True)
    assert is_leader(staff)


# Route guard

@pytest.mark.django_db
def test_leader_pages_redirect_anonymous_to_login(client):
    for path in ("/leader/", "/leader/backlog/", "/leader/room/anything/"):
        resp = client.get(path)
        assert resp.status_code == 302
        assert resp["Location"] == "/leader-login/"


@pytest.mark.django_db
def test_login_page_redirects_when_signed_in(client, leader):
    client.force_login(leader)
    resp = client.get("/leader-login/")
    assert resp.status_code == 302
    assert resp["Location"] == "/leader/"


@pytest.mark.django_db
def test_login_page_renders_for_anonymous(client):
    resp = client.get("/leader-login/")
    assert resp.status_code == 200
    assert b"asktc-bootstrap" in resp.content


@pytest.mark.django_db
def test_login_form_post(client, leader):
    resp = client.post("/leader-login/", {"email": leader.email, "password": PASSWORD})
    assert resp.status_code == 302
    assert resp["Location"] == "/leader/"
    assert client.get("/leader/").status_code == 200


@pytest.mark.django_db
def test_login_form_post_bad_credentials(client, leader):
    resp = client.post("/leader-login/", {"email": leader.email, "password": "wrong"})
    assert resp.status_code == 400
    assert b"Invalid credentials" in resp.content


@pytest.mark.django_db
def test_api_and_public_pages_are_not_guarded(client, room):
    assert client.get(f"/room/{room.slug}/").status_code == 200
    assert client.get(f"/projector/{room.slug}/").status_code == 200
    assert client.get(f"/api/rooms/{room.slug}/").status_code == 200


@pytest.mark.django_db
def test_index_redirects(client, leader, settings):
    settings.FRONTEND_URL = "https://app.asktc.test/"
    assert client.get("/")["Location"] == "https://app.asktc.test/"
    client.force_login(leader)
    assert client.get("/")["Location"] == "/leader/"


@pytest.mark.django_db
def test_signup_rejects_unknown_emoji(api_client):
    resp = api_client.post(
        "/api/auth/signup/", {"email": "eve@example.com", "password": "s3cure-Passw0rd", "emoji_key": "🐍"}, format="json"
    )
    assert resp.status_code == 400
    assert "emoji_key" in resp.json()


@pytest.mark.django_db
def test_signup_rejects_overlong_email(api_client):
    email = "a" * 140 + "@example.com"
    resp = api_client.post("/api/auth/signup/", {"email": email, "password": "s3cure-Passw0rd"}, format="json")
    assert resp.status_code == 400
    assert "email" in resp.json()


@pytest.mark.django_db
def test_unknown_email_and_wrong_password_look_the_same(api_client, user):
    unknown = api_client.post("/api/auth/token/", {"email": "ghost@example.com", "password": PASSWORD}, format="json")
    wrong = api_client.post("/api/auth/token/", {"email": user.email, "password": "nope"}, format="json")
    assert unknown.status_code == wrong.status_code == 401
    assert unknown.json() == wrong.json()


@pytest.mark.django_db
def test_logout_blacklists_refresh_token(api_client, user):
    tokens = api_client.post("/api/auth/token/", {"email": user.email, "password": PASSWORD}, format="json").json()
    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")

    resp = api_client.post("/api/auth/logout/", {"refresh": tokens["refresh"]}, format="json")
    assert resp.status_code == 205

    api_client.credentials()
    refresh = api_client.post("/api/auth/token/refresh/", {"refresh": tokens["refresh"]}, format="json")
    assert refresh.status_code == 401


@pytest.mark.django_db
def test_logout_requires_refresh_token(auth_client):
    assert auth_client.post("/api/auth/logout/", {}, format="json").status_code == 400


@pytest.mark.django_db
def test_session_csrf_sets_cookie(client):
    resp = client.get("/api/auth/session/csrf/")
    assert resp.status_code == 200
    assert "csrftoken" in resp.cookies
