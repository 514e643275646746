"""Task lifecycle: status transitions and their timestamp side effects.

The transition table decides which timestamps move, not whether a status
may be written. In the default (permissive) mode any status value is
assignable; edges missing from the table only skip the timestamp effects.
``completed -> pending`` therefore leaves a stale ``completed_at`` behind,
which is the documented behaviour. Strict mode discards such requests.
"""

import logging
from datetime import datetime

from patterns.domain_config import LifecycleConfig
from patterns.workflow_states import TransitionTable, WorkflowTransition
from verticals.operations.models.schemas import Task, TaskStatus

logger = logging.getLogger(__name__)

StatusChange = WorkflowTransition


# ---------------------------------------------------------------------------
# Transition rules
# ---------------------------------------------------------------------------

TASK_TRANSITIONS: TransitionTable[TaskStatus] = TransitionTable({
    TaskStatus.PENDING: [TaskStatus.ACTIVE, TaskStatus.COMPLETED],
    TaskStatus.ACTIVE: [TaskStatus.COMPLETED, TaskStatus.PENDING],
    TaskStatus.COMPLETED: [],  # terminal
})


def _apply_effects(task: Task, from_status: TaskStatus, to_status: TaskStatus, now: datetime) -> None:
    if to_status == TaskStatus.COMPLETED:
        task.completed_at = now
    elif to_status == TaskStatus.ACTIVE and from_status == TaskStatus.PENDING:
        task.activated_at = now
    elif to_status == TaskStatus.PENDING and from_status == TaskStatus.ACTIVE:
        task.activated_at = None


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

class TaskLifecycle:
    """Applies status changes to tasks.

    Usage::

        lifecycle = TaskLifecycle()
        lifecycle.activate(task, now)   # pending -> active, stamps activated_at
        lifecycle.pause(task, now)      # active -> pending, clears activated_at
        lifecycle.complete(task, now)   # -> completed, stamps completed_at
    """

    def __init__(self, config: LifecycleConfig | None = None):
        self.config = config or LifecycleConfig()
        self.table = TASK_TRANSITIONS

    def can_transition(self, from_status: TaskStatus, to_status: TaskStatus) -> bool:
        return self.table.can_transition(TaskStatus(from_status), TaskStatus(to_status))

    def allowed_targets(self, status: TaskStatus) -> list[TaskStatus]:
        return self.table.allowed_targets(TaskStatus(status))

    def is_terminal(self, status: TaskStatus) -> bool:
        return self.table.is_terminal(TaskStatus(status))

    def set_status(
        self,
        task: Task,
        new_status: TaskStatus | str,
        now: datetime,
        actor: str = "system",
    ) -> StatusChange | None:
        """Write ``new_status`` on ``task`` and apply the timestamp effects.

        Returns the transition record, or None when strict mode discards
        an edge that is not in the table.
        """
        to_status = TaskStatus(new_status)
        from_status = TaskStatus(task.status)
        change = self.table.record(task.id, from_status, to_status, now, actor=actor)

        if not change.defined:
            if self.config.strict_transitions:
                logger.warning(
                    "Discarded undefined transition task=%s %s -> %s",
                    task.id, from_status.value, to_status.value,
                )
                return None
            logger.debug(
                "Undefined transition written without table effects task=%s %s -> %s",
                task.id, from_status.value, to_status.value,
            )

        task.status = to_status
        _apply_effects(task, from_status, to_status, now)
        logger.info("Task %s status %s -> %s", task.id, from_status.value, to_status.value)
        return change

    # -- Triggers --

    def activate(self, task: Task, now: datetime) -> StatusChange | None:
        return self.set_status(task, TaskStatus.ACTIVE, now)

    def complete(self, task: Task, now: datetime) -> StatusChange | None:
        return self.set_status(task, TaskStatus.COMPLETED, now)

    def pause(self, task: Task, now: datetime) -> StatusChange | None:
        return self.set_status(task, TaskStatus.PENDING, now)
