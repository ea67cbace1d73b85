import json

import pytest

from errors import AuthenticationError
from fake_story_api import BASE_URL, TOKEN
from models import Credentials, StoryInput
from story_client import ApiSession, StoryClient, open_session


def test_every_request_carries_bearer_token(fake_api, story_client):
    story_client.list_all()
    story_client.delete("missing")
    assert fake_api.auth_headers[-2:] == [f"Bearer {TOKEN}", f"Bearer {TOKEN}"]


def test_send_returns_status_and_raw_body(api_session):
    response = api_session.send("GET", "/Story/All")
    assert response.status_code == 200
    assert response.text == "[]"


def test_story_input_payload_shape():
    story = StoryInput(title="Test Story 123", description="x")
    assert story.to_payload() == {"title": "Test Story 123", "description": "x", "url": ""}


def test_story_client_routes(fake_api, story_client):
    created = story_client.create(StoryInput("t", "d"))
    story_id = json.loads(created.text)["storyId"]
    story_client.edit(story_id, {"title": "t2", "description": "d2", "url": ""})
    story_client.delete(story_id)

    assert fake_api.calls[-3:] == [
        ("POST", "/Story/Create"),
        ("PUT", f"/Story/Edit/{story_id}"),
        ("DELETE", f"/Story/Delete/{story_id}"),
    ]


def test_open_session_closes_everything_once(fake_api, session_factory, credentials):
    with open_session(BASE_URL, credentials, session_factory) as session:
        assert not session.closed
    assert session.closed
    # login session + authenticated session
    assert fake_api.closed_sessions == 2
    session.close()
    assert fake_api.closed_sessions == 2


def test_open_session_closes_on_error(fake_api, session_factory, credentials):
    with pytest.raises(RuntimeError, match="inside"):
        with open_session(BASE_URL, credentials, session_factory) as session:
            raise RuntimeError("inside")
    assert session.closed


def test_open_session_authentication_failure(fake_api, session_factory):
    with pytest.raises(AuthenticationError):
        with open_session(BASE_URL, Credentials("nobody", "nope"), session_factory):
            pytest.fail("body must not run without a token")
    assert fake_api.closed_sessions == 1


def test_closed_session_refuses_to_send(session_factory):
    session = ApiSession(BASE_URL, TOKEN, http=session_factory())
    session.close()
    with pytest.raises(RuntimeError, match="closed"):
        StoryClient(session).list_all()
