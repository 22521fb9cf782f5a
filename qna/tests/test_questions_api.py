"""
API tests for the Q&A flow: asking, boosting, answering and the room,
control and projector views.
"""
import pytest

from qna.models import Question, Upvote
from qna import services


@pytest.mark.django_db
def test_guest_asks_question(api_client, room):
    payload = {"room": room.slug, "content": "  Why pray? ", "guest_name": "Sam", "guest_token": "tok-1"}
    resp = api_client.post("/api/questions/", payload, format="json")
    assert resp.status_code == 201
    data = resp.json()
    assert data["content"] == "Why pray?"
    assert data["status"] == Question.STATUS_PENDING
    assert data["room_slug"] == room.slug
    assert data["upvote_count"] == 0
    assert data["answer"] is None
    assert "guest_token" not in data
    assert Question.objects.get().guest_token == "tok-1"


@pytest.mark.django_db
def test_signed_in_question_uses_profile_emoji(auth_client, user, room):
    user.profile.emoji_key = "🔥"
    user.profile.save()
    resp = auth_client.post(
        "/api/questions/", {"room": room.slug, "content": "Hi", "guest_name": "Sam"}, format="json"
    )
    assert resp.status_code == 201
    assert resp.json()["guest_emoji"] == "🔥"
    assert resp.json()["user"] == user.id


@pytest.mark.django_db
def test_ask_requires_content_and_known_room(api_client, room):
    assert api_client.post(
        "/api/questions/", {"room": room.slug, "content": "", "guest_name": "Sam"}, format="json"
    ).status_code == 400
    assert api_client.post(
        "/api/questions/", {"room": room.slug, "content": "x" * 1001, "guest_name": "Sam"}, format="json"
    ).status_code == 400
    assert api_client.post(
        "/api/questions/", {"room": "nowhere", "content": "Hi", "guest_name": "Sam"}, format="json"
    ).status_code == 404


@pytest.mark.django_db
def test_guest_upvote_once(api_client, make_question):
    question = make_question()
    url = f"/api/questions/{question.id}/upvote/"

    first = api_client.post(url, HTTP_X_GUEST_TOKEN="browser-1")
    assert first.status_code == 200
    assert first.json() == {"question_id": question.id, "upvoted": True, "upvote_count": 1}

    again = api_client.post(url, HTTP_X_GUEST_TOKEN="browser-1")
    assert again.status_code == 409

    other = api_client.post(url, {"guest_token": "browser-2"}, format="json")
    assert other.json()["upvote_count"] == 2


@pytest.mark.django_db
def test_user_upvote_keyed_by_account(auth_client, user, make_question):
    question = make_question()
    assert auth_client.post(f"/api/questions/{question.id}/upvote/").status_code == 200
    assert Upvote.objects.get().voter_key == f"user:{user.id}"
    assert auth_client.post(f"/api/questions/{question.id}/upvote/").status_code == 409


@pytest.mark.django_db
def test_upvote_needs_an_identity(api_client, make_question):
    question = make_question()
    assert api_client.post(f"/api/questions/{question.id}/upvote/").status_code == 400


@pytest.mark.django_db
def test_hidden_question_not_upvotable(api_client, make_question):
    question = make_question(status=Question.STATUS_HIDDEN)
    resp = api_client.post(f"/api/questions/{question.id}/upvote/", HTTP_X_GUEST_TOKEN="browser-1")
    assert resp.status_code == 404
    assert api_client.get(f"/api/questions/{question.id}/").status_code == 404


@pytest.mark.django_db
def test_leader_answers_question(leader_client, make_question):
    question = make_question()
    resp = leader_client.post(f"/api/questions/{question.id}/answer/", {"body": "Because He listens."}, format="json")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == Question.STATUS_ANSWERED
    assert data["answer"]["body"] == "Because He listens."
    assert data["answer"]["leader_name"] == "Pastor Lea"
    assert data["answered_at"]


@pytest.mark.django_db
def test_audience_cannot_moderate(auth_client, api_client, make_question):
    question = make_question()
    for action in ("answer", "hide", "toggle-visibility", "claim"):
        assert auth_client.post(f"/api/questions/{question.id}/{action}/", {"body": "x"}, format="json").status_code == 403
        assert api_client.post(f"/api/questions/{question.id}/{action}/").status_code == 401
    assert auth_client.get("/api/questions/backlog/").status_code == 403


@pytest.mark.django_db
def test_hide_and_toggle(leader_client, make_question):
    question = make_question()
    hidden = leader_client.post(f"/api/questions/{question.id}/hide/")
    assert hidden.json()["status"] == Question.STATUS_HIDDEN
    restored = leader_client.post(f"/api/questions/{question.id}/toggle-visibility/")
    assert restored.json()["status"] == Question.STATUS_PENDING
    again = leader_client.post(f"/api/questions/{question.id}/toggle-visibility/")
    assert again.json()["status"] == Question.STATUS_HIDDEN


@pytest.mark.django_db
def test_claim_requires_leader_name(leader_client, make_question):
    question = make_question()
    resp = leader_client.post(f"/api/questions/{question.id}/claim/", {"leader_name": ""}, format="json")
    assert resp.status_code == 400
    assert resp.json()["leader_name"] == ["Enter your name to claim this question."]

    ok = leader_client.post(f"/api/questions/{question.id}/claim/", {"leader_name": "Pastor Dan"}, format="json")
    assert ok.status_code == 200
    assert ok.json()["picked_by"] == "Pastor Dan"
    assert ok.json()["status"] == Question.STATUS_ANSWERED


@pytest.mark.django_db
def test_priority_flag(leader_client, make_question):
    question = make_question()
    resp = leader_client.post(f"/api/questions/{question.id}/priority/", {"is_priority": True}, format="json")
    assert resp.json()["is_priority"] is True


@pytest.mark.django_db
def test_backlog_lists_pending_from_every_room(leader_client, make_question):
    pending = make_question()
    make_question(status=Question.STATUS_ANSWERED)
    resp = leader_client.get("/api/questions/backlog/")
    assert resp.status_code == 200
    assert [q["id"] for q in resp.json()["results"]] == [pending.id]


@pytest.mark.django_db
def test_archive_search_is_public(api_client, make_question):
    hit = make_question(content="What about baptism?", status=Question.STATUS_ANSWERED)
    make_question(content="Unrelated", status=Question.STATUS_ANSWERED)
    make_question(content="Baptism pending")
    resp = api_client.get("/api/questions/archive/", {"search": "baptism"})
    assert resp.status_code == 200
    assert [q["id"] for q in resp.json()["results"]] == [hit.id]


@pytest.mark.django_db
def test_leader_list_filters(leader_client, room, make_question):
    make_question()
    hidden = make_question(status=Question.STATUS_HIDDEN)
    resp = leader_client.get("/api/questions/", {"room": room.slug, "status": "hidden"})
    assert [q["id"] for q in resp.json()["results"]] == [hidden.id]


@pytest.mark.django_db
def test_adopt_guest_questions(auth_client, user, make_question):
    question = make_question(guest_token="browser-1")
    resp = auth_client.post("/api/questions/adopt/", {"guest_token": "browser-1"}, format="json")
    assert resp.json() == {"adopted": 1}
    question.refresh_from_db()
    assert question.user_id == user.id


@pytest.mark.django_db
def test_room_feed(api_client, leader, room, make_question):
    low = make_question(content="low")
    high = make_question(content="high")
    Upvote.objects.create(question=high, voter_key="guest:a")
    done = make_question(content="done")
    services.answer_question(done, leader, "Answered.")
    make_question(content="hidden", status=Question.STATUS_HIDDEN)

    resp = api_client.get(f"/api/rooms/{room.slug}/feed/")
    assert resp.status_code == 200
    data = resp.json()
    assert data["room"]["slug"] == room.slug
    assert [q["id"] for q in data["answered"]] == [done.id]
    assert data["answered"][0]["answer"]["body"] == "Answered."
    assert [q["id"] for q in data["pending"]] == [high.id, low.id]


@pytest.mark.django_db
def test_room_control(leader_client, auth_client, room, make_question):
    make_question(status=Question.STATUS_ANSWERED)
    make_question()
    hidden = make_question(status=Question.STATUS_HIDDEN)

    resp = leader_client.get(f"/api/rooms/{room.slug}/control/")
    assert resp.status_code == 200
    data = resp.json()
    assert data["join_url"] == f"https://asktc.test/room/{room.slug}"
    assert len(data["questions"]) == 2
    assert [q["id"] for q in data["hidden"]] == [hidden.id]
    assert data["metrics"]["resolution_rate"] == 33

    assert auth_client.get(f"/api/rooms/{room.slug}/control/").status_code == 403


@pytest.mark.django_db
def test_projector(api_client, leader, room, make_question):
    for i in range(5):
        make_question(content=f"q{i}")
    featured = make_question(content="spotlight")
    services.answer_question(featured, leader, "Here it is.")

    resp = api_client.get(f"/api/rooms/{room.slug}/projector/")
    assert resp.status_code == 200
    data = resp.json()
    assert data["featured"]["id"] == featured.id
    assert len(data["pending"]) == 3  # ASKTC_PROJECTOR_QUEUE_SIZE in test settings
    assert data["pending_count"] == 5
    assert data["answered_count"] == 1
    assert data["join_url"].endswith(f"/room/{room.slug}")


@pytest.mark.django_db
def test_projector_unknown_room(api_client):
    assert api_client.get("/api/rooms/nowhere/projector/").status_code == 404


@pytest.mark.django_db
def test_adopt_requires_sign_in(api_client, make_question):
    make_question(guest_token="browser-1")
    resp = api_client.post("/api/questions/adopt/", {"guest_token": "browser-1"}, format="json")
    assert resp.status_code == 401
    assert Question.objects.get().user is None


@pytest.mark.django_db
def test_archive_search_matches_guest_name(api_client, make_question):
    hit = make_question(content="Why?", guest_name="Priya", status=Question.STATUS_ANSWERED)
    make_question(content="How?", guest_name="Sam", status=Question.STATUS_ANSWERED)
    resp = api_client.get("/api/questions/archive/", {"search": "PRIYA"})
    assert [q["id"] for q in resp.json()["results"]] == [hit.id]


@pytest.mark.django_db
def test_leader_list_rejects_unknown_status(leader_client, make_question):
    make_question()
    assert leader_client.get("/api/questions/", {"status": "visible"}).status_code == 400
