"""
scenarios.py – The ordered Story API scenarios.

Each scenario receives the StoryClient and the RunState explicitly. The
create scenario writes `RunState.last_created_story_id`; the edit and
delete scenarios read it and raise PreconditionError when it is blank.
"""

from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass
from typing import Callable

from errors import ExpectationError, PreconditionError
from models import RunState, StoryInput
from story_client import StoryClient
from validator import (
    expect_message_contains,
    expect_non_empty_array,
    expect_status,
    expect_story_id,
)

logger = logging.getLogger("story-spoiler")

CREATED = 201
OK = 200
BAD_REQUEST = 400
NOT_FOUND = 404


@dataclass(frozen=True)
class Scenario:
    """One named step of the run and the state it depends on."""

    order: int
    name: str
    run: Callable[[StoryClient, RunState], None]
    requires_story_id: bool = False
    provides_story_id: bool = False


def require_story_id(state: RunState) -> str:
    if not state.has_story:
        raise PreconditionError("Missing StoryId from create.")
    return state.last_created_story_id


def _fresh_story_id() -> str:
    return str(uuid.uuid4())


# ── Happy path ──────────────────────────────────────────────────────────

def create_story_with_required_fields(client: StoryClient, state: RunState) -> None:
    label = "Create"
    story = StoryInput(
        title=f"Test Story {time.time_ns()}",
        description="This is a test story description.",
    )
    response = client.create(story)

    expect_status(response, CREATED, label)
    story_id = expect_story_id(response, label)
    state.last_created_story_id = story_id
    logger.info("Created story %s", story_id)
    expect_message_contains(response, "Successfully created", label)


def edit_existing_story(client: StoryClient, state: RunState) -> None:
    label = "Edit"
    story_id = require_story_id(state)
    story = StoryInput(
        title="Edited Story",
        description="Updated test story description.",
    )
    response = client.edit(story_id, story)

    expect_status(response, OK, label)
    expect_message_contains(response, "Successfully edited", label)


def list_all_stories(client: StoryClient, state: RunState) -> None:
    label = "Get All"
    response = client.list_all()

    expect_status(response, OK, label)
    stories = expect_non_empty_array(response, label)
    logger.info("Listed %d stories", len(stories))

    if state.has_story and state.last_created_story_id not in response.text:
        raise ExpectationError(
            f"{label}: created story {state.last_created_story_id} "
            "is missing from the list"
        )


def delete_existing_story(client: StoryClient, state: RunState) -> None:
    label = "Delete"
    story_id = require_story_id(state)
    response = client.delete(story_id)

    expect_status(response, OK, label)
    expect_message_contains(response, "Deleted successfully", label)


# ── Error paths ─────────────────────────────────────────────────────────

def create_story_without_required_fields(client: StoryClient, state: RunState) -> None:
    response = client.create({"url": ""})
    expect_status(response, BAD_REQUEST, "Create without required fields")


def edit_non_existing_story(client: StoryClient, state: RunState) -> None:
    label = "Edit non-existing"
    # Reuses the id deleted earlier in the run when there is one.
    story_id = state.last_created_story_id if state.has_story else _fresh_story_id()

    pre_delete = client.delete(story_id)
    logger.debug("Pre-delete of %s returned %s", story_id, pre_delete.status_code)

    story = StoryInput(title="AB", description="Valid description")
    response = client.edit(story_id, story)
    logger.info(
        "[EDIT non-existing] Status: %s Body: %s", response.status_code, response.text
    )

    expect_status(response, NOT_FOUND, label)
    expect_message_contains(response, "No spoilers", label)


def delete_non_existing_story(client: StoryClient, state: RunState) -> None:
    label = "Delete non-existing"
    response = client.delete(_fresh_story_id())

    expect_status(response, BAD_REQUEST, label)
    expect_message_contains(response, "Unable to delete this story spoiler", label)


SCENARIOS: list[Scenario] = [
    Scenario(1, "Create story with required fields", create_story_with_required_fields,
             provides_story_id=True),
    Scenario(2, "Edit existing story", edit_existing_story, requires_story_id=True),
    Scenario(3, "Get all stories", list_all_stories),
    Scenario(4, "Delete existing story", delete_existing_story, requires_story_id=True),
    Scenario(5, "Create story without required fields", create_story_without_required_fields),
    Scenario(6, "Edit non-existing story", edit_non_existing_story),
    Scenario(7, "Delete non-existing story", delete_non_existing_story),
]
