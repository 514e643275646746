"""Pydantic schemas for tasks, personnel, filter criteria and statistics."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class TaskStatus(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"
    COMPLETED = "completed"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


ALL = "all"
UNASSIGNED = "unassigned"


def _dedupe(ids: list[str]) -> list[str]:
    """Drop repeated ids, keeping first insertion order."""
    return list(dict.fromkeys(ids))


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------

class TaskInput(BaseModel):
    title: str = Field(..., min_length=1, max_length=500)
    description: str = ""
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    assigned_to: list[str] = Field(default_factory=list)
    category: str = Field(..., min_length=1)
    estimated_hours: float = Field(1.0, gt=0)

    @field_validator("title", "category")
    @classmethod
    def _strip(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("assigned_to")
    @classmethod
    def _unique_assignees(cls, value: list[str]) -> list[str]:
        return _dedupe(value)


class PersonnelInput(BaseModel):
    """Personnel form fields; blank values are rejected by the store, not here."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = ""
    role: str = ""
    department: str = ""
    active: bool = True

    @property
    def is_complete(self) -> bool:
        return bool(self.name and self.role and self.department)


class FilterCriteria(BaseModel):
    """Selection of visible tasks. ``all`` disables a field."""

    model_config = ConfigDict(frozen=True)

    search_term: str = ""
    status: str = ALL
    priority: str = ALL
    category: str = ALL
    personnel: str = ALL

    @field_validator("status", "priority", mode="before")
    @classmethod
    def _enum_value(cls, value):
        return value.value if isinstance(value, Enum) else value

    @classmethod
    def cleared(cls) -> "FilterCriteria":
        return cls()


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------

class Task(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    id: str
    title: str
    description: str = ""
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    assigned_to: list[str] = Field(default_factory=list)
    category: str
    estimated_hours: float = Field(1.0, gt=0)
    created_at: datetime
    activated_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    @field_validator("assigned_to")
    @classmethod
    def _unique_assignees(cls, value: list[str]) -> list[str]:
        return _dedupe(value)

    @field_validator("created_at", "activated_at", "completed_at")
    @classmethod
    def _aware(cls, value: Optional[datetime]) -> Optional[datetime]:
        """Naive timestamps are read as local time."""
        if value is None or value.tzinfo is not None:
            return value
        return value.astimezone()


class Personnel(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    id: str
    name: str
    role: str
    department: str
    active: bool = True


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------

class DashboardStats(BaseModel):
    total_tasks: int = 0
    pending_tasks: int = 0
    active_tasks: int = 0
    completed_tasks: int = 0
    active_personnel: int = 0
    urgent_tasks: int = 0
    completion_rate: float = Field(0.0, ge=0, le=100)
    avg_estimated_hours: float = 0.0
    today_tasks: int = 0
    efficiency: int = Field(100, ge=0, le=100)


class ChartPoint(BaseModel):
    name: str
    value: int
    fill: str


class ActivityPoint(BaseModel):
    day: str
    date: str
    created: int = 0
    completed: int = 0


class ChartData(BaseModel):
    status: list[ChartPoint] = Field(default_factory=list)
    departments: list[ChartPoint] = Field(default_factory=list)
    weekly: list[ActivityPoint] = Field(default_factory=list)
