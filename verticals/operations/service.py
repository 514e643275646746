"""Operations dashboard facade: the operations a UI calls.

Owns one EntityStore plus the session's filter criteria and a log of
status changes. Commands mutate the store; queries recompute derived
views from the current collections every time. Bad input and unknown ids
are absorbed here: logged, and answered with None or False.
"""

import logging
from datetime import timedelta
from typing import Any, Callable

from pydantic import BaseModel, ValidationError

from patterns.domain_config import DashboardConfig
from verticals.operations.config import config as default_config
from verticals.operations.filters import active_filters_count, filter_tasks
from verticals.operations.lifecycle import StatusChange, TaskLifecycle
from verticals.operations.metrics import compute_chart_data, compute_dashboard_stats, task_duration
from verticals.operations.models.schemas import (
    ChartData,
    DashboardStats,
    FilterCriteria,
    Personnel,
    PersonnelInput,
    Task,
    TaskInput,
    TaskStatus,
)
from verticals.operations.seed import DEFAULT_CATEGORIES, seed_personnel, seed_tasks
from verticals.operations.store import Clock, EntityStore, local_now

logger = logging.getLogger(__name__)

ConfirmDelete = Callable[[Task], bool]


def _coerce(model: type[BaseModel], fields: Any) -> Any:
    """Validate a dict into ``model``; pass model instances through."""
    if isinstance(fields, model):
        return fields
    try:
        return model.model_validate(fields)
    except ValidationError as exc:
        logger.warning("Rejected %s: %s", model.__name__, exc.errors(include_url=False))
        return None


class OperationsDashboard:
    """Session facade over tasks, personnel, filters and statistics.

    Usage::

        dash = OperationsDashboard(seed=True)
        task = dash.create_task({"title": "Oil change", "category": "Maintenance"})
        dash.set_status(task.id, "active")
        dash.set_filters(status="active")
        visible = dash.list_filtered_tasks()
        stats = dash.compute_dashboard_stats()
        dash.delete_task(task.id, confirm=lambda t: True)
    """

    def __init__(
        self,
        config: DashboardConfig | None = None,
        clock: Clock = local_now,
        seed: bool | None = None,
    ):
        self.config = config or default_config
        self.clock = clock
        self.store = EntityStore(
            categories=DEFAULT_CATEGORIES,
            lifecycle=TaskLifecycle(self.config.lifecycle),
            clock=clock,
        )
        self.criteria = FilterCriteria()
        self._history: list[StatusChange] = []

        if self.config.seed_demo_data if seed is None else seed:
            self.store.load(tasks=seed_tasks(), personnel=seed_personnel())
            logger.info(
                "Loaded demo data tasks=%d personnel=%d",
                len(self.store.tasks), len(self.store.personnel),
            )

    def close(self) -> None:
        """End the session: drop every collection and the change log."""
        self.store.clear()
        self._history.clear()
        self.criteria = FilterCriteria()

    # -- Task commands --

    def create_task(self, fields: TaskInput | dict[str, Any]) -> Task | None:
        data = _coerce(TaskInput, fields)
        if data is None:
            return None
        task = self.store.create_task(data)
        if task.status != TaskStatus.PENDING:
            self._history.append(
                self.store.lifecycle.table.record(
                    task.id, TaskStatus.PENDING, TaskStatus(task.status), task.created_at
                )
            )
        return task

    def update_task(self, task_id: str, fields: TaskInput | dict[str, Any]) -> Task | None:
        data = _coerce(TaskInput, fields)
        if data is None:
            return None
        task = self.store.get_task(task_id)
        previous = TaskStatus(task.status) if task else None
        updated = self.store.update_task(task_id, data)
        if updated is not None and previous != updated.status:
            self._history.append(
                self.store.lifecycle.table.record(
                    task_id, previous, TaskStatus(updated.status), self.clock(), actor="edit"
                )
            )
        return updated

    def set_status(self, task_id: str, new_status: TaskStatus | str) -> Task | None:
        """Change a task's status; returns the task, or None if nothing changed."""
        try:
            status = TaskStatus(new_status)
        except ValueError:
            logger.warning("Rejected unknown status %r for task %s", new_status, task_id)
            return None
        change = self.store.set_status(task_id, status)
        if change is None:
            return None
        self._history.append(change)
        return self.store.get_task(task_id)

    def delete_task(self, task_id: str, confirm: ConfirmDelete) -> bool:
        """Delete a task only after ``confirm(task)`` returns true. There is no undo."""
        task = self.store.get_task(task_id)
        if task is None:
            logger.debug("delete_task: unknown task %s", task_id)
            return False
        if not confirm(task):
            logger.info("Deletion of task %s not confirmed", task_id)
            return False
        deleted = self.store.delete_task(task_id)
        if deleted:
            self._history = [c for c in self._history if c.subject_id != task_id]
        return deleted

    # -- Personnel commands --

    def create_personnel(self, fields: PersonnelInput | dict[str, Any]) -> Personnel | None:
        data = _coerce(PersonnelInput, fields)
        if data is None:
            return None
        return self.store.create_personnel(data)

    def toggle_active(self, personnel_id: str) -> Personnel | None:
        return self.store.toggle_active(personnel_id)

    # -- Filters --

    def set_filters(self, **changes: Any) -> FilterCriteria:
        """Update some criteria fields, keeping the others."""
        data = self.criteria.model_dump()
        data.update(changes)
        criteria = _coerce(FilterCriteria, data)
        if criteria is not None:
            self.criteria = criteria
        return self.criteria

    def clear_filters(self) -> FilterCriteria:
        self.criteria = FilterCriteria.cleared()
        return self.criteria

    def active_filters_count(self) -> int:
        return active_filters_count(self.criteria)

    # -- Queries --

    @property
    def categories(self) -> list[str]:
        return self.store.categories

    def list_tasks(self) -> list[Task]:
        return self.store.list_tasks()

    def list_personnel(self) -> list[Personnel]:
        return self.store.list_personnel()

    def get_task(self, task_id: str) -> Task | None:
        return self.store.get_task(task_id)

    def list_filtered_tasks(self, criteria: FilterCriteria | dict[str, Any] | None = None) -> list[Task]:
        if criteria is None:
            criteria = self.criteria
        else:
            criteria = _coerce(FilterCriteria, criteria)
            if criteria is None:
                return []
        return filter_tasks(self.store.list_tasks(), criteria)

    def compute_dashboard_stats(self) -> DashboardStats:
        return compute_dashboard_stats(
            self.store.list_tasks(),
            self.store.list_personnel(),
            self.clock(),
            self.config.metrics,
        )

    def chart_data(self) -> ChartData:
        return compute_chart_data(
            self.store.list_tasks(),
            self.store.list_personnel(),
            self.clock(),
            self.config.metrics,
        )

    def task_duration(self, task_id: str) -> timedelta | None:
        task = self.store.get_task(task_id)
        if task is None:
            return None
        return task_duration(task, self.clock())

    def assigned_personnel(self, task: Task) -> list[Personnel]:
        """Resolve assignee ids in assignment order, skipping stale ones."""
        people = (self.store.get_personnel(pid) for pid in task.assigned_to)
        return [p for p in people if p is not None]

    def eligible_assignees(self) -> list[Personnel]:
        """Personnel that may be picked for a new assignment."""
        return [p for p in self.store.list_personnel() if p.active]

    def status_history(self, task_id: str) -> list[StatusChange]:
        return [c for c in self._history if c.subject_id == task_id]
