from __future__ import annotations

import logging
from collections import Counter
from typing import Any

from .compat import normalize_task
from .constants import PROJECT_STATUS_PATH, TASK_TYPES, TODO_TASKS_PATH
from .utils import time_derived_id, utc_now_iso

logger = logging.getLogger(__name__)


class TaskTracker:
    """Builds task records and answers readiness queries over a task collection.

    The tracker never reads or writes the status/todo files; the paths are
    carried for the storage collaborator that does. Tasks keyed by ``id`` or
    ``assignedTo`` are read as ``task_id``/``assigned_to``.
    """

    def __init__(self, project_status_path: str = PROJECT_STATUS_PATH, todo_tasks_path: str = TODO_TASKS_PATH) -> None:
        self.project_status_path = project_status_path
        self.todo_tasks_path = todo_tasks_path

    def create_task(self, task_data: dict[str, Any]) -> dict[str, Any]:
        data = normalize_task(task_data)
        task_type = data.get("type")
        if task_type not in TASK_TYPES:
            logger.warning("creating task with unrecognized type %r", task_type)

        task = {
            "task_id": time_derived_id("TASK"),
            "title": data.get("title"),
            "description": data.get("description"),
            "assigned_to": data.get("assigned_to"),
            "type": task_type,
            "status": "pending",
            "created": utc_now_iso(),
            "dependencies": list(data.get("dependencies") or []),
            "tags": list(data.get("tags") or []),
            "stamps": [],
        }
        logger.debug("created task %s (%s)", task["task_id"], task_type)
        return task

    def add_stamp(self, task_id: str, agent_id: str, stamp_data: dict[str, Any]) -> dict[str, Any]:
        """Build the thin legacy stamp record.

        Nothing is appended to a task here; the completion hook uses
        ``StatusStamper.create_stamp`` instead.
        """
        return {
            "task_id": task_id,
            "agent_id": agent_id,
            "timestamp": utc_now_iso(),
            "status": stamp_data.get("status"),
            "details": stamp_data.get("details"),
            "discoveries": list(stamp_data.get("discoveries") or []),
            "next_actions": list(stamp_data.get("next_actions", stamp_data.get("nextActions")) or []),
        }

    def can_start_task(self, task_id: str, all_tasks: list[dict[str, Any]]) -> bool:
        by_id = _index_by_id([normalize_task(task) for task in all_tasks])
        return _can_start(task_id, by_id)

    def get_next_tasks(self, agent_type: str, all_tasks: list[dict[str, Any]]) -> list[dict[str, Any]]:
        views = [normalize_task(task) for task in all_tasks]
        by_id = _index_by_id(views)
        return [
            task
            for task, view in zip(all_tasks, views)
            if view.get("type") == agent_type
            and view.get("status") == "pending"
            and _can_start(view.get("task_id"), by_id)
        ]

    def materialize_trigger(self, proposal: dict[str, Any], completed_task: dict[str, Any]) -> dict[str, Any]:
        completed = normalize_task(completed_task)
        trigger_type = proposal["type"]
        source_id = completed.get("task_id")
        source_title = completed.get("title") or source_id
        return self.create_task(
            {
                "title": f"{trigger_type} after {source_title}",
                "description": f"Follow-on {trigger_type} triggered by completion of {source_id}.",
                "assigned_to": proposal.get("assign_to"),
                "type": trigger_type,
                "dependencies": [source_id] if source_id else [],
                "tags": ["triggered", f"priority:{proposal.get('priority', 'normal')}"],
            }
        )

    def summarize(self, all_tasks: list[dict[str, Any]]) -> dict[str, Any]:
        return {
            "by_status": _sorted_counts(task.get("status") for task in all_tasks),
            "by_type": _sorted_counts(task.get("type") for task in all_tasks),
            "all_done": bool(all_tasks) and all(task.get("status") == "done" for task in all_tasks),
        }


def _index_by_id(tasks: list[dict[str, Any]]) -> dict[str, dict[str, Any]]:
    by_id: dict[str, dict[str, Any]] = {}
    for task in tasks:
        # first match wins, same as a linear scan
        by_id.setdefault(task.get("task_id"), task)
    return by_id


def _can_start(task_id: str | None, by_id: dict[str, dict[str, Any]]) -> bool:
    task = by_id.get(task_id)
    if task is None:
        return True
    for dep in task.get("dependencies") or []:
        dep_task = by_id.get(dep)
        if dep_task is None or dep_task.get("status") != "done":
            return False
    return True


def _sorted_counts(values) -> dict[str, int]:
    counts = Counter("unknown" if value is None else str(value) for value in values)
    return dict(sorted(counts.items()))
