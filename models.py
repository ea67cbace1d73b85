"""
models.py – Plain data-classes shared across every module.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class Credentials:
    """The login identity used once per run."""

    username: str
    password: str


@dataclass
class StoryInput:
    """Request body for creating or editing a story spoiler."""

    title: str
    description: str
    url: str = ""

    def to_payload(self) -> dict[str, Any]:
        return {"title": self.title, "description": self.description, "url": self.url}


@dataclass
class ApiResponse:
    """Status code and raw body of a single API call."""

    status_code: int
    text: str = ""


@dataclass
class ParsedApiResult:
    """Fields of a JSON API body; any of them may be missing."""

    story_id: str | None = None
    msg: str | None = None


@dataclass
class RunState:
    """State shared by the ordered scenarios of one run."""

    last_created_story_id: str = ""

    @property
    def has_story(self) -> bool:
        return bool(self.last_created_story_id.strip())


class Outcome(str, Enum):
    PASSED = "passed"
    FAILED = "failed"
    ERROR = "error"
    PRECONDITION = "precondition"


@dataclass
class ScenarioResult:
    """Outcome of one executed scenario."""

    order: int
    name: str
    outcome: Outcome
    detail: str = ""
    duration: float = 0.0

    @property
    def passed(self) -> bool:
        return self.outcome is Outcome.PASSED


@dataclass
class RunReport:
    """Summary returned after the full scenario sequence."""

    results: list[ScenarioResult] = field(default_factory=list)

    @property
    def passed_count(self) -> int:
        return sum(1 for r in self.results if r.passed)

    @property
    def failed_count(self) -> int:
        return len(self.results) - self.passed_count

    @property
    def ok(self) -> bool:
        return bool(self.results) and self.failed_count == 0
