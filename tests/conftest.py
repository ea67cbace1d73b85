"""
Shared pytest fixtures: a fake Story API and sessions wired to it.
"""
import pytest
import requests

from fake_story_api import BASE_URL, PASSWORD, USERNAME, FakeStoryAPI
from models import Credentials, RunState
from story_client import StoryClient, open_session


@pytest.fixture
def fake_api() -> FakeStoryAPI:
    return FakeStoryAPI()


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(username=USERNAME, password=PASSWORD)


@pytest.fixture
def session_factory(fake_api):
    """Builds plain `requests.Session`s that talk to the fake API."""
    def factory() -> requests.Session:
        session = requests.Session()
        session.mount("https://", fake_api)
        return session
    return factory


@pytest.fixture
def api_session(session_factory, credentials):
    with open_session(BASE_URL, credentials, session_factory) as session:
        yield session


@pytest.fixture
def story_client(api_session) -> StoryClient:
    return StoryClient(api_session)


@pytest.fixture
def state() -> RunState:
    return RunState()
