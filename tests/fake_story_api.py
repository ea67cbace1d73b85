"""
In-memory Story API mounted as a `requests` transport adapter.
"""

from __future__ import annotations

import io
import json
import uuid
from typing import Any
from urllib.parse import urlsplit

import requests
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict

BASE_URL = "https://stories.test/api"
USERNAME = "petya1"
PASSWORD = "petyapetya1"
TOKEN = "TOKEN123"


class FakeStoryAPI(BaseAdapter):
    """Behaves like the Story Spoiler API for the documented operations."""

    def __init__(self) -> None:
        super().__init__()
        self.stories: dict[str, dict[str, Any]] = {}
        self.calls: list[tuple[str, str]] = []
        self.auth_headers: list[str | None] = []
        self.closed_sessions = 0
        # knobs
        self.login_response: tuple[int, Any] | None = None
        self.plain_text_errors = False
        self.fail_paths: set[str] = set()
        self.overrides: dict[tuple[str, str], tuple[int, Any]] = {}

    def send(self, request, **kwargs):
        path = urlsplit(request.url).path
        if path.startswith("/api"):
            path = path[len("/api"):]
        self.calls.append((request.method, path))
        self.auth_headers.append(request.headers.get("Authorization"))

        for prefix in self.fail_paths:
            if path.startswith(prefix):
                raise requests.ConnectionError(f"connection refused: {path}")

        body = json.loads(request.body) if request.body else None
        status, payload = self._dispatch(request.method, path, body, request.headers)
        return _build_response(request, status, payload)

    def close(self) -> None:
        self.closed_sessions += 1

    # ── routing ─────────────────────────────────────────────────────────

    def _dispatch(self, method, path, body, headers):
        if path == "/User/Authentication" and method == "POST":
            return self._login(body or {})

        if headers.get("Authorization") != f"Bearer {TOKEN}":
            return 401, ""

        for (method_, prefix), reply in self.overrides.items():
            if method == method_ and path.startswith(prefix):
                return reply

        if path == "/Story/Create" and method == "POST":
            return self._create(body or {})
        if path.startswith("/Story/Edit/") and method == "PUT":
            return self._edit(path.rsplit("/", 1)[-1], body or {})
        if path == "/Story/All" and method == "GET":
            return 200, list(self.stories.values())
        if path.startswith("/Story/Delete/") and method == "DELETE":
            return self._delete(path.rsplit("/", 1)[-1])
        return 404, ""

    def _login(self, body):
        if self.login_response is not None:
            return self.login_response
        if body.get("userName") == USERNAME and body.get("password") == PASSWORD:
            return 200, {"username": USERNAME, "accessToken": TOKEN}
        return 401, {"msg": "Invalid username or password!"}

    def _create(self, body):
        errors = {}
        for field in ("title", "description"):
            if not body.get(field):
                errors[field.capitalize()] = [f"The {field.capitalize()} field is required."]
        if errors:
            return 400, {"title": "One or more validation errors occurred.", "errors": errors}

        story_id = str(uuid.uuid4())
        self.stories[story_id] = {"id": story_id, **body}
        return 201, {"storyId": story_id, "msg": "Successfully created!"}

    def _edit(self, story_id, body):
        if story_id not in self.stories:
            if self.plain_text_errors:
                return 404, "No spoilers..."
            return 404, {"msg": "No spoilers..."}
        self.stories[story_id].update(body)
        return 200, {"msg": "Successfully edited"}

    def _delete(self, story_id):
        if story_id not in self.stories:
            return 400, {"msg": "Unable to delete this story spoiler!"}
        del self.stories[story_id]
        return 200, {"msg": "Deleted successfully!"}


def _build_response(request, status: int, payload: Any) -> requests.Response:
    if isinstance(payload, (dict, list)):
        content = json.dumps(payload).encode("utf-8")
        content_type = "application/json; charset=utf-8"
    else:
        content = str(payload).encode("utf-8")
        content_type = "text/plain; charset=utf-8"

    resp = requests.Response()
    resp.status_code = status
    resp.headers = CaseInsensitiveDict({"Content-Type": content_type})
    resp.raw = io.BytesIO(content)
    resp.encoding = "utf-8"
    resp.url = request.url
    resp.request = request
    return resp
