"""Dashboard statistics and chart series: pure functions.

Everything here is recomputed from the current collections on each call.
Durations of active tasks depend on ``now`` and grow while the task runs,
so they must never be stored.
"""

import math
from collections import Counter
from datetime import date, datetime, timedelta
from typing import Iterable, Sequence

from patterns.domain_config import MetricsConfig
from verticals.operations.models.schemas import (
    ActivityPoint,
    ChartData,
    ChartPoint,
    DashboardStats,
    Personnel,
    Task,
    TaskPriority,
    TaskStatus,
)


def _local_date(value: datetime) -> date:
    if value.tzinfo is None:
        return value.date()
    return value.astimezone().date()


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _fill(index: int) -> str:
    return f"hsl(var(--chart-{index}))"


# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------

def compute_dashboard_stats(
    tasks: Sequence[Task],
    personnel: Iterable[Personnel],
    now: datetime,
    config: MetricsConfig | None = None,
) -> DashboardStats:
    """Aggregate counts and rates for the dashboard header and cards.

    completion_rate is a percentage in [0, 100], 0 with no tasks.
    efficiency is completed / (completed + active) as a whole percentage,
    rounded half up, and ``config.idle_efficiency`` when nothing is active.
    """
    config = config or MetricsConfig()
    total = len(tasks)
    by_status = Counter(TaskStatus(t.status) for t in tasks)
    pending = by_status[TaskStatus.PENDING]
    active = by_status[TaskStatus.ACTIVE]
    completed = by_status[TaskStatus.COMPLETED]

    today = _local_date(now)

    if active > 0:
        efficiency = round_half_up(completed / (completed + active) * 100)
    else:
        efficiency = config.idle_efficiency

    return DashboardStats(
        total_tasks=total,
        pending_tasks=pending,
        active_tasks=active,
        completed_tasks=completed,
        active_personnel=sum(1 for p in personnel if p.active),
        urgent_tasks=sum(
            1 for t in tasks
            if t.priority == TaskPriority.URGENT and t.status != TaskStatus.COMPLETED
        ),
        completion_rate=(completed / total * 100) if total else 0.0,
        avg_estimated_hours=(sum(t.estimated_hours for t in tasks) / total) if total else 0.0,
        today_tasks=sum(1 for t in tasks if _local_date(t.created_at) == today),
        efficiency=efficiency,
    )


# ---------------------------------------------------------------------------
# Per-task duration
# ---------------------------------------------------------------------------

def task_duration(task: Task, now: datetime) -> timedelta | None:
    """Worked time for a task, or None when it is not defined.

    Completed with both stamps: completed_at - activated_at.
    Active with activated_at: now - activated_at (live).
    Anything else: None; callers show estimated hours instead.
    """
    if task.status == TaskStatus.COMPLETED and task.activated_at and task.completed_at:
        return task.completed_at - task.activated_at
    if task.status == TaskStatus.ACTIVE and task.activated_at:
        return now - task.activated_at
    return None


def duration_hours(task: Task, now: datetime) -> float | None:
    delta = task_duration(task, now)
    if delta is None:
        return None
    return round(delta.total_seconds() / 3600, 1)


# ---------------------------------------------------------------------------
# Chart series
# ---------------------------------------------------------------------------

def status_chart(stats: DashboardStats) -> list[ChartPoint]:
    return [
        ChartPoint(name="Pending", value=stats.pending_tasks, fill=_fill(1)),
        ChartPoint(name="Active", value=stats.active_tasks, fill=_fill(2)),
        ChartPoint(name="Completed", value=stats.completed_tasks, fill=_fill(3)),
    ]


def department_chart(
    personnel: Iterable[Personnel],
    config: MetricsConfig | None = None,
) -> list[ChartPoint]:
    """Headcount per department, in order of first appearance."""
    config = config or MetricsConfig()
    counts = Counter(p.department for p in personnel)
    return [
        ChartPoint(
            name=department[: config.department_label_width],
            value=count,
            fill=_fill(index % config.palette_size + 1),
        )
        for index, (department, count) in enumerate(counts.items())
    ]


def weekly_activity(
    tasks: Iterable[Task],
    now: datetime,
    config: MetricsConfig | None = None,
) -> list[ActivityPoint]:
    """Created vs completed counts for each of the last N local days, oldest first."""
    config = config or MetricsConfig()
    today = _local_date(now)
    days = [today - timedelta(days=offset) for offset in range(config.weekly_window_days - 1, -1, -1)]

    tasks = list(tasks)
    created = Counter(_local_date(t.created_at) for t in tasks)
    completed = Counter(
        _local_date(t.completed_at)
        for t in tasks
        if t.status == TaskStatus.COMPLETED and t.completed_at
    )
    return [
        ActivityPoint(
            day=d.strftime("%a"),
            date=d.isoformat(),
            created=created[d],
            completed=completed[d],
        )
        for d in days
    ]


def compute_chart_data(
    tasks: Sequence[Task],
    personnel: Sequence[Personnel],
    now: datetime,
    config: MetricsConfig | None = None,
) -> ChartData:
    stats = compute_dashboard_stats(tasks, personnel, now, config)
    return ChartData(
        status=status_chart(stats),
        departments=department_chart(personnel, config),
        weekly=weekly_activity(tasks, now, config),
    )
