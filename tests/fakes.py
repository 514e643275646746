"""Test doubles: a controllable clock and task/personnel factories."""
from datetime import datetime, timedelta
from itertools import count

from verticals.operations.models.schemas import Personnel, Task

BASE_TIME = datetime(2025, 3, 10, 9, 0).astimezone()

_ids = count(1)


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime = BASE_TIME):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


def make_task(**overrides) -> Task:
    data = {
        "id": f"t{next(_ids)}",
        "title": "Inspect pump",
        "description": "Routine inspection",
        "category": "Maintenance",
        "estimated_hours": 2,
        "created_at": BASE_TIME - timedelta(days=3),
    }
    data.update(overrides)
    return Task(**data)


def make_person(**overrides) -> Personnel:
    data = {
        "id": f"p{next(_ids)}",
        "name": "Ana García",
        "role": "Technician",
        "department": "Maintenance",
    }
    data.update(overrides)
    return Personnel(**data)
