from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .compat import normalize_completion_data
from .constants import DISCOVERY_FIELDS, NOTIFICATION_TYPE, STAMP_TYPES, VALIDATION_FIELDS
from .utils import time_derived_id, utc_now_iso

logger = logging.getLogger(__name__)


class StatusStamper:
    """Shapes completion reports into stamps and orchestrator notifications."""

    def __init__(self, stamp_types: Mapping[str, frozenset[str]] = STAMP_TYPES) -> None:
        self.stamp_types = stamp_types

    def create_stamp(self, agent_id: str, task_id: str, completion_data: dict[str, Any]) -> dict[str, Any]:
        data = normalize_completion_data(completion_data)
        stamp = {
            "stamp_id": time_derived_id("STAMP"),
            "agent_id": agent_id,
            "task_id": task_id,
            "timestamp": utc_now_iso(),
            "status": data["status"],
            "work_completed": data["work_completed"],
            "time_spent": data["time_spent"],
            "discoveries": {field: data[field] for field in DISCOVERY_FIELDS},
            "handoff": {
                "next_agent": data["next_agent"],
                "requirements": data["requirements"],
                "files": data["files"],
                "notes": data["notes"],
            },
            "validation": {field: data[field] for field in VALIDATION_FIELDS},
        }
        logger.debug("stamp %s created for task %s by %s", stamp["stamp_id"], task_id, agent_id)
        return stamp

    def validate_stamp(self, agent_type: str, status: str) -> bool:
        allowed = self.stamp_types.get(agent_type)
        if allowed is None:
            return False
        valid = status in allowed
        if not valid:
            logger.warning("status %r is not in the %s vocabulary", status, agent_type)
        return valid

    def notify_orchestrator(self, stamp: dict[str, Any]) -> dict[str, Any]:
        next_agent = (stamp.get("handoff") or {}).get("next_agent")
        requires_action = bool(next_agent)

        message = f"Agent {stamp['agent_id']} completed task {stamp['task_id']} with status {stamp['status']}"
        if requires_action:
            message += f"; handoff to {next_agent}"

        return {
            "type": NOTIFICATION_TYPE,
            "agent_id": stamp["agent_id"],
            "task_id": stamp["task_id"],
            "status": stamp["status"],
            "requires_action": requires_action,
            "message": message,
        }
