"""
sequencer.py – Runs an ordered scenario plan and collects the outcomes.

A failing scenario is recorded and the run moves on; the plan order only
exists so later steps can reuse earlier effects.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Sequence

import requests

from errors import PreconditionError
from models import Outcome, RunReport, RunState, ScenarioResult
from scenarios import SCENARIOS, Scenario
from story_client import StoryClient

logger = logging.getLogger("story-spoiler")


def validate_plan(plan: Sequence[Scenario]) -> None:
    """Reject plans that are unordered or use a story id before creating one."""
    if not plan:
        raise ValueError("Scenario plan is empty.")

    orders = [s.order for s in plan]
    if orders != sorted(set(orders)):
        raise ValueError(f"Scenario order must be strictly increasing, got {orders}.")

    provided = False
    for scenario in plan:
        if scenario.requires_story_id and not provided:
            raise ValueError(
                f"Scenario {scenario.order} '{scenario.name}' needs a created story "
                "but no earlier scenario creates one."
            )
        provided = provided or scenario.provides_story_id


def select_scenarios(
    orders: Sequence[int] | None, plan: Sequence[Scenario] = SCENARIOS
) -> list[Scenario]:
    """Return the scenarios with the given order numbers, in plan order."""
    if not orders:
        return list(plan)
    known = {s.order for s in plan}
    unknown = sorted(set(orders) - known)
    if unknown:
        raise ValueError(f"Unknown scenario number(s): {unknown}")
    wanted = set(orders)
    return [s for s in plan if s.order in wanted]


def run_scenario(
    scenario: Scenario, client: StoryClient, state: RunState
) -> ScenarioResult:
    """Execute one scenario and turn whatever it raised into a result."""
    started = time.perf_counter()
    outcome = Outcome.PASSED
    detail = ""
    try:
        scenario.run(client, state)
    except PreconditionError as exc:
        outcome, detail = Outcome.PRECONDITION, f"Precondition failed: {exc}"
    except AssertionError as exc:
        outcome, detail = Outcome.FAILED, str(exc)
    except requests.RequestException as exc:
        outcome, detail = Outcome.ERROR, f"Transport error: {exc}"
    except Exception as exc:
        outcome, detail = Outcome.ERROR, f"{type(exc).__name__}: {exc}"
        logger.debug("Traceback:", exc_info=True)

    result = ScenarioResult(
        order=scenario.order,
        name=scenario.name,
        outcome=outcome,
        detail=detail,
        duration=time.perf_counter() - started,
    )
    if result.passed:
        logger.info("✔ %d. %s", scenario.order, scenario.name)
    else:
        logger.warning("✘ %d. %s – %s", scenario.order, scenario.name, detail)
    return result


def run_scenarios(
    client: StoryClient,
    plan: Sequence[Scenario] = SCENARIOS,
    state: RunState | None = None,
    on_result: Callable[[ScenarioResult], None] | None = None,
) -> RunReport:
    """Run *plan* strictly in sequence against one shared RunState."""
    state = state if state is not None else RunState()
    report = RunReport()
    for scenario in plan:
        result = run_scenario(scenario, client, state)
        report.results.append(result)
        if on_result:
            on_result(result)

    logger.info(
        "%d of %d scenarios passed.", report.passed_count, len(report.results)
    )
    return report
