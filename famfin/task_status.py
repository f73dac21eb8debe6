"""
Task status transitions.

Any status may follow any other. The table below lists the statuses that
force the ``isActive`` flag when a task enters them; statuses missing from it
keep whatever the client submitted.
"""

from typing import Dict, Optional

from .db.models import TaskStatus

FORCED_ACTIVE_STATE: Dict[TaskStatus, bool] = {
    TaskStatus.APPROVED: False,
}


def forced_active_state(status: TaskStatus) -> Optional[bool]:
    return FORCED_ACTIVE_STATE.get(TaskStatus(status))


def resolve_is_active(status: TaskStatus, submitted: bool) -> bool:
    """Return the ``isActive`` value to persist for a task saved with ``status``."""
    forced = forced_active_state(status)
    if forced is None:
        return bool(submitted)
    return forced
