from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from copy import deepcopy
from typing import Any

from .compat import normalize_event
from .constants import TRIGGER_RULES
from .errors import TaskHookError
from .stamper import StatusStamper
from .utils import utc_now_iso
from .validator import validate_completion_event

logger = logging.getLogger(__name__)

TriggerRule = tuple[tuple[str, str], Mapping[str, Any]]


class CompletionHook:
    """Entry point for agent completion events.

    ``on_complete`` always returns one of two shapes::

        {"success": True, "updated_task", "next_tasks", "notification", "discoveries"}
        {"success": False, "error", "error_code", "stage", "requires_escalation": True}

    Errors raised while processing are translated here and never reach the caller.
    """

    def __init__(
        self,
        stamper: StatusStamper | None = None,
        trigger_rules: Iterable[TriggerRule] = TRIGGER_RULES,
    ) -> None:
        self.stamper = stamper or StatusStamper()
        self.trigger_rules = tuple(trigger_rules)

    def on_complete(self, event_data: dict[str, Any]) -> dict[str, Any]:
        stage = "start"
        try:
            if not isinstance(event_data, dict):
                raise TaskHookError("EVENT_INVALID", f"event must be an object, got {type(event_data).__name__}")
            event = normalize_event(event_data)
            validate_completion_event(event)

            stamp = self.stamper.create_stamp(event.get("agent_id"), event.get("task_id"), event["completion_data"])
            stage = "stamp_created"

            updated_task = apply_completion(event["task"], stamp)
            stage = "task_updated"

            next_tasks = self.get_triggered_tasks(updated_task)
            stage = "triggers_computed"

            notification = self.stamper.notify_orchestrator(stamp)
            stage = "notification_built"
        except TaskHookError as exc:
            logger.warning("completion rejected at %s: %s %s", stage, exc.code, exc.message)
            return _failure(exc.code, exc.message, stage)
        except Exception as exc:
            logger.exception("unexpected failure processing completion at %s", stage)
            return _failure("UNEXPECTED", str(exc) or type(exc).__name__, stage)

        logger.info(
            "task %s completed by %s (%d follow-on)",
            stamp["task_id"],
            stamp["agent_id"],
            len(next_tasks),
        )
        return {
            "success": True,
            "updated_task": updated_task,
            "next_tasks": next_tasks,
            "notification": notification,
            "discoveries": deepcopy(stamp["discoveries"]),
        }

    def get_triggered_tasks(self, completed_task: dict[str, Any]) -> list[dict[str, Any]]:
        key = (completed_task.get("type"), completed_task.get("status"))
        return [dict(proposal) for match, proposal in self.trigger_rules if match == key]


def apply_completion(task: dict[str, Any], stamp: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of ``task`` marked done with ``stamp`` appended; ``task`` is left as is."""
    updated = deepcopy(task)
    updated["status"] = "done"
    updated["completed_at"] = utc_now_iso()
    updated["stamps"] = list(updated.get("stamps") or []) + [deepcopy(stamp)]
    return updated


def _failure(code: str, message: str, stage: str) -> dict[str, Any]:
    return {
        "success": False,
        "error": message,
        "error_code": code,
        "stage": stage,
        "requires_escalation": True,
    }
