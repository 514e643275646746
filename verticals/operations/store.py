"""Entity store: canonical in-memory tasks, personnel and categories.

Extends InMemoryRepository with operations-specific rules: lifecycle
timestamps are never overwritten by an edit, status changes go through
the lifecycle engine, unknown categories are registered on the fly, and
personnel with blank required fields are declined.
"""

import logging
import uuid
from datetime import datetime
from typing import Any, Callable, Iterable

from pydantic import BaseModel

from patterns.repository import InMemoryRepository
from verticals.operations.lifecycle import StatusChange, TaskLifecycle
from verticals.operations.models.schemas import (
    Personnel,
    PersonnelInput,
    Task,
    TaskInput,
    TaskStatus,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def local_now() -> datetime:
    """Current local time, timezone-aware."""
    return datetime.now().astimezone()


def new_id() -> str:
    return str(uuid.uuid4())


# ---------------------------------------------------------------------------
# Repositories
# ---------------------------------------------------------------------------

class TaskRepository(InMemoryRepository[Task]):
    """Tasks; lifecycle timestamps are owned by TaskLifecycle."""

    protected_fields = ("id", "created_at", "activated_at", "completed_at", "status")


class PersonnelRepository(InMemoryRepository[Personnel]):
    protected_fields = ("id",)


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------

class EntityStore:
    """Session-scoped holder of tasks, personnel and known categories.

    ``revision`` increases on every successful mutation; derived views are
    never cached here and should simply be recomputed on the next read.
    """

    def __init__(
        self,
        categories: Iterable[str] = (),
        lifecycle: TaskLifecycle | None = None,
        clock: Clock = local_now,
    ):
        self.tasks = TaskRepository()
        self.personnel = PersonnelRepository()
        self._categories: list[str] = list(dict.fromkeys(categories))
        self.lifecycle = lifecycle or TaskLifecycle()
        self.clock = clock
        self.revision = 0

    def _touch(self) -> None:
        self.revision += 1

    # -- Categories --

    @property
    def categories(self) -> list[str]:
        return list(self._categories)

    def register_category(self, category: str) -> bool:
        """Append a category if it is new. Returns True when added."""
        if category in self._categories:
            return False
        self._categories.append(category)
        logger.info("Registered new category %r", category)
        return True

    # -- Tasks --

    def list_tasks(self) -> list[Task]:
        return self.tasks.list()

    def get_task(self, task_id: str) -> Task | None:
        return self.tasks.get(task_id)

    def create_task(self, data: TaskInput) -> Task:
        """Insert a new task stamped with the current time.

        A non-pending initial status is applied through the lifecycle from
        ``pending`` so the timestamps match the status from the start.
        """
        now = self.clock()
        task = Task(
            id=new_id(),
            title=data.title,
            description=data.description,
            status=TaskStatus.PENDING,
            priority=data.priority,
            assigned_to=list(data.assigned_to),
            category=data.category,
            estimated_hours=data.estimated_hours,
            created_at=now,
        )
        self.tasks.add(task)
        if data.status != TaskStatus.PENDING:
            self.lifecycle.set_status(task, data.status, now)
        self.register_category(data.category)
        self._touch()
        logger.info("Created task %s %r", task.id, task.title)
        return task

    def update_task(self, task_id: str, data: TaskInput) -> Task | None:
        """Replace the editable fields of an existing task.

        Unknown ids are a no-op and return None, as is an edit whose status
        change strict mode refuses; nothing is written in either case.
        """
        task = self.tasks.get(task_id)
        if task is None:
            logger.debug("update_task: unknown task %s", task_id)
            return None

        status_changed = TaskStatus(data.status) != task.status
        if (
            status_changed
            and self.lifecycle.config.strict_transitions
            and not self.lifecycle.can_transition(task.status, data.status)
        ):
            logger.warning(
                "Declined edit of task %s: undefined transition %s -> %s",
                task_id, TaskStatus(task.status).value, TaskStatus(data.status).value,
            )
            return None

        fields: dict[str, Any] = data.model_dump(exclude={"status"})
        self.tasks.update(task_id, fields)
        if status_changed:
            self.lifecycle.set_status(task, data.status, self.clock())
        self.register_category(data.category)
        self._touch()
        logger.info("Updated task %s", task_id)
        return task

    def set_status(self, task_id: str, new_status: TaskStatus | str) -> StatusChange | None:
        task = self.tasks.get(task_id)
        if task is None:
            logger.debug("set_status: unknown task %s", task_id)
            return None
        change = self.lifecycle.set_status(task, new_status, self.clock())
        if change is not None:
            self._touch()
        return change

    def delete_task(self, task_id: str) -> bool:
        deleted = self.tasks.delete(task_id)
        if deleted:
            self._touch()
            logger.info("Deleted task %s", task_id)
        else:
            logger.debug("delete_task: unknown task %s", task_id)
        return deleted

    # -- Personnel --

    def list_personnel(self) -> list[Personnel]:
        return self.personnel.list()

    def get_personnel(self, personnel_id: str) -> Personnel | None:
        return self.personnel.get(personnel_id)

    def create_personnel(self, data: PersonnelInput) -> Personnel | None:
        """Insert a new person; declines (returns None) on blank fields."""
        if not data.is_complete:
            logger.warning("Declined personnel with blank name, role or department")
            return None
        person = Personnel(id=new_id(), **data.model_dump())
        self.personnel.add(person)
        self._touch()
        logger.info("Created personnel %s %r", person.id, person.name)
        return person

    def toggle_active(self, personnel_id: str) -> Personnel | None:
        person = self.personnel.get(personnel_id)
        if person is None:
            logger.debug("toggle_active: unknown personnel %s", personnel_id)
            return None
        person.active = not person.active
        self._touch()
        logger.info("Personnel %s active=%s", personnel_id, person.active)
        return person

    # -- Session --

    def load(
        self,
        tasks: Iterable[Task] = (),
        personnel: Iterable[Personnel] = (),
        categories: Iterable[str] = (),
    ) -> None:
        """Insert pre-built entities as-is (seed data or an external loader)."""
        for category in categories:
            self.register_category(category)
        for person in personnel:
            self.personnel.add(person)
        for task in tasks:
            self.tasks.add(task)
            self.register_category(task.category)
        self._touch()

    def snapshot(self) -> dict[str, Any]:
        """JSON-ready copy of the collections, for an external save()."""
        return {
            "tasks": [_dump(t) for t in self.tasks.list()],
            "personnel": [_dump(p) for p in self.personnel.list()],
            "categories": self.categories,
        }

    def clear(self) -> None:
        self.tasks.clear()
        self.personnel.clear()
        self._categories.clear()
        self._touch()


def _dump(model: BaseModel) -> dict[str, Any]:
    return model.model_dump(mode="json")
