"""
story_client.py – Authenticated transport and Story API calls.

`ApiSession` attaches the bearer token to every request and does nothing
else: no retries, no caching, no body inspection. `StoryClient` maps the
Story endpoints onto it.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Callable, Iterator

import requests

from auth_client import authenticate
from models import ApiResponse, Credentials, StoryInput

logger = logging.getLogger("story-spoiler")


class ApiSession:
    """A `requests.Session` bound to one base URL and one bearer token."""

    def __init__(
        self,
        base_url: str,
        token: str,
        http: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.token = token
        self._session = http or requests.Session()
        self._session.headers["Authorization"] = f"Bearer {token}"
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def send(
        self, method: str, path: str, body: dict[str, Any] | None = None
    ) -> ApiResponse:
        """Issue one request; transport errors propagate as RequestException."""
        if self._closed:
            raise RuntimeError("ApiSession is closed")

        url = f"{self.base_url}/{path.lstrip('/')}"
        logger.debug("%s %s %s", method, url, body if body is not None else "")
        resp = self._session.request(method, url, json=body)
        logger.debug("→ %s %s", resp.status_code, resp.text[:500])
        return ApiResponse(status_code=resp.status_code, text=resp.text)

    def close(self) -> None:
        if self._closed:
            return
        self._session.close()
        self._closed = True
        logger.debug("Session to %s closed", self.base_url)

    def __enter__(self) -> ApiSession:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


@contextmanager
def open_session(
    base_url: str,
    credentials: Credentials,
    session_factory: Callable[[], requests.Session] = requests.Session,
) -> Iterator[ApiSession]:
    """Log in on a bare session, then yield an authenticated one.

    The authenticated session is closed exactly once on exit, whatever
    happened inside the block. AuthenticationError propagates before
    anything is yielded.
    """
    login_http = session_factory()
    try:
        token = authenticate(credentials, base_url, http=login_http)
    finally:
        login_http.close()

    with ApiSession(base_url, token, http=session_factory()) as session:
        yield session


# ── Story endpoints ─────────────────────────────────────────────────────

def _body(story: StoryInput | dict[str, Any]) -> dict[str, Any]:
    return story.to_payload() if isinstance(story, StoryInput) else dict(story)


class StoryClient:
    """Story API operations over an authenticated session."""

    def __init__(self, session: ApiSession) -> None:
        self._session = session

    def create(self, story: StoryInput | dict[str, Any]) -> ApiResponse:
        return self._session.send("POST", "/Story/Create", _body(story))

    def edit(self, story_id: str, story: StoryInput | dict[str, Any]) -> ApiResponse:
        return self._session.send("PUT", f"/Story/Edit/{story_id}", _body(story))

    def list_all(self) -> ApiResponse:
        return self._session.send("GET", "/Story/All")

    def delete(self, story_id: str) -> ApiResponse:
        return self._session.send("DELETE", f"/Story/Delete/{story_id}")
