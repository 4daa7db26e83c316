from __future__ import annotations

from collections.abc import Callable
from itertools import count
from typing import Any

import pytest

from taskhooks.hook import CompletionHook
from taskhooks.stamper import StatusStamper
from taskhooks.tracker import TaskTracker


@pytest.fixture
def tick(monkeypatch: pytest.MonkeyPatch) -> None:
    """Make time-derived ids advance one millisecond per call."""
    clock = count(1_700_000_000_000)
    monkeypatch.setattr("taskhooks.utils.now_millis", lambda: next(clock))


@pytest.fixture
def tracker() -> TaskTracker:
    return TaskTracker()


@pytest.fixture
def stamper() -> StatusStamper:
    return StatusStamper()


@pytest.fixture
def hook() -> CompletionHook:
    return CompletionHook()


def _make_task(task_id: str, task_type: str = "FE", status: str = "pending", dependencies: list[str] | None = None) -> dict[str, Any]:
    return {
        "task_id": task_id,
        "title": f"Task {task_id}",
        "description": "Task description",
        "assigned_to": "fe-agent-1",
        "type": task_type,
        "status": status,
        "created": "2026-10-19T09:00:00Z",
        "dependencies": list(dependencies or []),
        "tags": [],
        "stamps": [],
    }


@pytest.fixture
def make_task() -> Callable[..., dict[str, Any]]:
    return _make_task
