from __future__ import annotations

from types import MappingProxyType

# Read and written by the storage collaborator, never by this package.
PROJECT_STATUS_PATH = ".claude/project-status.json"
TODO_TASKS_PATH = ".claude/todo-tasks.json"

TASK_TYPES = {"FE", "BE", "DB"}

STAMP_TYPES = MappingProxyType(
    {
        "FE": frozenset({"frontend-complete", "ui-review", "animation-complete", "responsive-done"}),
        "BE": frozenset({"backend-complete", "api-ready", "logic-implemented", "tested"}),
        "DB": frozenset({"database-complete", "schema-ready", "migration-complete", "optimized"}),
    }
)

NOTIFICATION_TYPE = "TASK_COMPLETED"

DISCOVERY_FIELDS = ("optimizations", "tech_debt", "security_issues", "improvements")
VALIDATION_FIELDS = ("tested", "reviewed", "approved")

COMPLETION_DEFAULTS = MappingProxyType(
    {
        "status": None,
        "work_completed": None,
        "time_spent": None,
        "optimizations": (),
        "tech_debt": (),
        "security_issues": (),
        "improvements": (),
        "next_agent": None,
        "requirements": None,
        "files": (),
        "notes": None,
        "tested": False,
        "reviewed": False,
        "approved": False,
    }
)

# (task type, task status) -> follow-on proposal
TRIGGER_RULES = (
    (("FE", "done"), MappingProxyType({"type": "INTEGRATION_TEST", "priority": "high", "assign_to": "orchestrator"})),
)
