"""
validator.py – Status and body expectations for Story API responses.

Bodies are parsed leniently: field names match case-insensitively, missing
fields only weaken the check, and when the body is not JSON (some error
paths answer in plain text) message checks fall back to the raw text.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from errors import ExpectationError, ParseError
from models import ApiResponse, ParsedApiResult

logger = logging.getLogger("story-spoiler")

_EXCERPT_LIMIT = 300


def _excerpt(text: str, limit: int = _EXCERPT_LIMIT) -> str:
    text = text.strip()
    if not text:
        return "<empty>"
    return text if len(text) <= limit else f"{text[:limit]}…"


def _lookup(data: dict[str, Any], name: str) -> Any:
    """Case-insensitive key lookup (`msg`, `Msg`, `MSG` …)."""
    wanted = name.lower()
    for key, value in data.items():
        if isinstance(key, str) and key.lower() == wanted:
            return value
    return None


# ── Parsing ─────────────────────────────────────────────────────────────

def parse_json(text: str) -> Any:
    """Decode a response body, raising ParseError for empty or invalid JSON."""
    if not text or not text.strip():
        raise ParseError("response body is empty")
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ParseError(f"response body is not valid JSON: {exc}") from exc


def parse_result(response: ApiResponse) -> ParsedApiResult:
    """Extract `storyId` / `msg`; absent or unparseable fields become None."""
    try:
        data = parse_json(response.text)
    except ParseError as exc:
        logger.debug("Falling back to raw body: %s", exc)
        return ParsedApiResult()

    if not isinstance(data, dict):
        return ParsedApiResult()

    story_id = _lookup(data, "storyId")
    msg = _lookup(data, "msg")
    return ParsedApiResult(
        story_id=None if story_id is None else str(story_id),
        msg=None if msg is None else str(msg),
    )


# ── Expectations ────────────────────────────────────────────────────────

def expect_status(response: ApiResponse, expected: int, label: str = "") -> None:
    """Require an exact status code match."""
    if response.status_code != expected:
        prefix = f"{label}: " if label else ""
        raise ExpectationError(
            f"{prefix}expected status {expected}, got {response.status_code}. "
            f"Body: {_excerpt(response.text)}"
        )


def expect_message_contains(
    response: ApiResponse, substring: str, label: str = ""
) -> str:
    """Require *substring* in the `msg` field, or in the raw body if there is none.

    Returns the text the substring was found in.
    """
    parsed = parse_result(response)
    haystack = parsed.msg if parsed.msg else response.text
    if substring not in haystack:
        prefix = f"{label}: " if label else ""
        raise ExpectationError(
            f"{prefix}expected message containing '{substring}', "
            f"got: {_excerpt(haystack)}"
        )
    return haystack


def expect_story_id(response: ApiResponse, label: str = "") -> str:
    """Require a non-blank `storyId` in the body and return it."""
    story_id = parse_result(response).story_id
    if not story_id or not story_id.strip():
        prefix = f"{label}: " if label else ""
        raise ExpectationError(
            f"{prefix}expected a non-empty storyId, got: {_excerpt(response.text)}"
        )
    return story_id


def expect_non_empty_array(response: ApiResponse, label: str = "") -> list[Any]:
    """Require the body to be a JSON array with at least one element."""
    prefix = f"{label}: " if label else ""
    try:
        data = parse_json(response.text)
    except ParseError as exc:
        raise ExpectationError(f"{prefix}expected a JSON array, {exc}") from exc

    if not isinstance(data, list):
        raise ExpectationError(
            f"{prefix}expected a JSON array, got {type(data).__name__}"
        )
    if not data:
        raise ExpectationError(f"{prefix}expected a non-empty array, got []")
    return data
