"""Test dashboard statistics, durations and chart series."""
from datetime import timedelta

from patterns.domain_config import MetricsConfig
from verticals.operations.metrics import (
    compute_chart_data,
    compute_dashboard_stats,
    department_chart,
    duration_hours,
    round_half_up,
    task_duration,
    weekly_activity,
)

from fakes import BASE_TIME, make_person, make_task


def test_empty_collections():
    stats = compute_dashboard_stats([], [], BASE_TIME)
    assert stats.total_tasks == 0
    assert stats.completion_rate == 0
    assert stats.avg_estimated_hours == 0
    assert stats.efficiency == 100


def test_scenario_rates():
    tasks = [
        make_task(status="pending"),
        make_task(status="active", activated_at=BASE_TIME),
        make_task(status="completed", completed_at=BASE_TIME),
        make_task(status="completed", completed_at=BASE_TIME),
    ]
    stats = compute_dashboard_stats(tasks, [], BASE_TIME)
    assert stats.completion_rate == 50
    assert stats.efficiency == 67
    assert (stats.pending_tasks, stats.active_tasks, stats.completed_tasks) == (1, 1, 2)


def test_efficiency_is_100_without_active_tasks():
    tasks = [make_task(status="pending"), make_task(status="completed", completed_at=BASE_TIME)]
    assert compute_dashboard_stats(tasks, [], BASE_TIME).efficiency == 100


def test_idle_efficiency_is_configurable():
    stats = compute_dashboard_stats([], [], BASE_TIME, MetricsConfig(idle_efficiency=0))
    assert stats.efficiency == 0


def test_counts_personnel_urgent_and_average():
    tasks = [
        make_task(priority="urgent", estimated_hours=3),
        make_task(priority="urgent", status="completed", completed_at=BASE_TIME, estimated_hours=6),
        make_task(priority="low", estimated_hours=1.5),
    ]
    people = [make_person(), make_person(active=False)]
    stats = compute_dashboard_stats(tasks, people, BASE_TIME)
    assert stats.active_personnel == 1
    assert stats.urgent_tasks == 1
    assert stats.avg_estimated_hours == 3.5
    assert 0 <= stats.completion_rate <= 100


def test_today_tasks_uses_calendar_day():
    tasks = [
        make_task(created_at=BASE_TIME.replace(hour=0, minute=5)),
        make_task(created_at=BASE_TIME - timedelta(days=1)),
        make_task(created_at=BASE_TIME),
    ]
    assert compute_dashboard_stats(tasks, [], BASE_TIME).today_tasks == 2


def test_round_half_up():
    assert round_half_up(66.5) == 67
    assert round_half_up(50.5) == 51
    assert round_half_up(66.4) == 66


def test_duration_of_completed_task():
    task = make_task(
        status="completed",
        activated_at=BASE_TIME,
        completed_at=BASE_TIME + timedelta(hours=4, minutes=30),
    )
    assert task_duration(task, BASE_TIME + timedelta(days=2)) == timedelta(hours=4, minutes=30)
    assert duration_hours(task, BASE_TIME) == 4.5


def test_duration_of_active_task_is_live():
    task = make_task(status="active", activated_at=BASE_TIME)
    assert task_duration(task, BASE_TIME + timedelta(hours=1)) == timedelta(hours=1)
    assert task_duration(task, BASE_TIME + timedelta(hours=3)) == timedelta(hours=3)


def test_duration_undefined_otherwise():
    assert task_duration(make_task(), BASE_TIME) is None
    direct = make_task(status="completed", completed_at=BASE_TIME)
    assert task_duration(direct, BASE_TIME) is None


def test_department_chart_truncates_and_cycles_palette():
    people = [make_person(department=f"Department{i}") for i in range(6)]
    people.append(make_person(department="Department0"))
    points = department_chart(people, MetricsConfig())
    assert len(points) == 6
    assert points[0].name == "Department"
    assert points[0].value == 2
    assert points[0].fill == "hsl(var(--chart-1))"
    assert points[5].fill == "hsl(var(--chart-1))"


def test_weekly_activity_counts_last_seven_days():
    tasks = [
        make_task(created_at=BASE_TIME - timedelta(hours=1)),
        make_task(created_at=BASE_TIME - timedelta(days=6)),
        make_task(created_at=BASE_TIME - timedelta(days=7)),
        make_task(
            created_at=BASE_TIME - timedelta(days=2),
            status="completed",
            completed_at=BASE_TIME - timedelta(days=1),
        ),
    ]
    points = weekly_activity(tasks, BASE_TIME)
    assert len(points) == 7
    assert points[-1].date == BASE_TIME.date().isoformat()
    assert points[-1].created == 1
    assert points[0].created == 1
    assert points[-2].completed == 1
    assert sum(p.created for p in points) == 3


def test_chart_data_status_series():
    tasks = [make_task(), make_task(status="active", activated_at=BASE_TIME)]
    charts = compute_chart_data(tasks, [make_person()], BASE_TIME)
    assert [(p.name, p.value) for p in charts.status] == [
        ("Pending", 1), ("Active", 1), ("Completed", 0),
    ]
    assert [(p.name, p.value) for p in charts.departments] == [("Maintenanc", 1)]
    assert len(charts.weekly) == 7
