from __future__ import annotations

from typing import Any

from jsonschema import ValidationError, validate

from .errors import TaskHookError

COMPLETION_EVENT_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": ["completion_data", "task"],
    "properties": {
        "completion_data": {"type": "object"},
        "task": {
            "type": "object",
            "properties": {
                "stamps": {"type": "array"},
            },
        },
    },
}


def validate_completion_event(event: dict[str, Any]) -> None:
    """Check the event envelope; field contents stay permissive."""
    try:
        validate(event, COMPLETION_EVENT_SCHEMA)
    except ValidationError as exc:
        location = "/".join(str(part) for part in exc.absolute_path) or "<event>"
        raise TaskHookError("EVENT_INVALID", f"{location}: {exc.message}") from exc
