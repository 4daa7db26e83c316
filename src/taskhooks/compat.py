from __future__ import annotations

from typing import Any

from .constants import COMPLETION_DEFAULTS
from .errors import CompletionDataError

_EVENT_ALIASES = {
    "agentId": "agent_id",
    "taskId": "task_id",
    "completionData": "completion_data",
}

_COMPLETION_ALIASES = {
    "workCompleted": "work_completed",
    "timeSpent": "time_spent",
    "techDebt": "tech_debt",
    "securityIssues": "security_issues",
    "nextAgent": "next_agent",
}

_TASK_ALIASES = {
    "id": "task_id",
    "assignedTo": "assigned_to",
    "completedAt": "completed_at",
}


def _rename(record: dict[str, Any], aliases: dict[str, str]) -> dict[str, Any]:
    out = dict(record)
    for legacy, canonical in aliases.items():
        if legacy in out:
            value = out.pop(legacy)
            out.setdefault(canonical, value)
    return out


def normalize_event(raw: dict[str, Any]) -> dict[str, Any]:
    """Normalize camelCase completion events into the canonical snake_case shape."""
    event = _rename(raw, _EVENT_ALIASES)
    if isinstance(event.get("task"), dict):
        event["task"] = _rename(event["task"], _TASK_ALIASES)
    return event


def normalize_task(raw: dict[str, Any]) -> dict[str, Any]:
    return _rename(raw, _TASK_ALIASES)


def normalize_completion_data(raw: Any) -> dict[str, Any]:
    """Return completion data with every known field present.

    Absent or ``None`` fields take their default; supplied values are kept
    as given, without type checks.
    """
    if not isinstance(raw, dict):
        raise CompletionDataError("COMPLETION_INVALID", f"completion data must be an object, got {type(raw).__name__}")

    data = _rename(raw, _COMPLETION_ALIASES)
    out: dict[str, Any] = {}
    for field, default in COMPLETION_DEFAULTS.items():
        value = data.get(field)
        if value is None:
            value = list(default) if isinstance(default, tuple) else default
        elif isinstance(value, tuple):
            value = list(value)
        out[field] = value
    return out
