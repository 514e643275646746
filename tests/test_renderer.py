"""Test markdown rendering of dashboard views."""
from datetime import timedelta

from core.engine.template_engine import TemplateEngine, fmt_hm, fmt_hours, render_generic
from verticals.operations.renderer import duration_label, render_view, time_label

from fakes import BASE_TIME, make_task


def test_format_helpers():
    assert fmt_hours(4.5) == "4.5h"
    assert fmt_hours(16.0) == "16h"
    assert fmt_hm(timedelta(hours=8, minutes=15)) == "8h 15m"
    assert fmt_hours(None) == "N/A"


def test_duration_label_variants():
    done = make_task(status="completed", activated_at=BASE_TIME,
                     completed_at=BASE_TIME + timedelta(hours=4, minutes=30))
    running = make_task(status="active", activated_at=BASE_TIME)
    idle = make_task(estimated_hours=6)
    assert duration_label(done, BASE_TIME) == "4.5h completed"
    assert duration_label(running, BASE_TIME + timedelta(hours=2)) == "2h elapsed"
    assert duration_label(idle, BASE_TIME) == "6h estimated"


def test_time_label_prefers_latest_stamp():
    task = make_task(status="active", activated_at=BASE_TIME)
    assert time_label(task, "%Y-%m-%d").startswith("Started: ")
    assert time_label(make_task(), "%Y-%m-%d").startswith("Created: ")


def test_operations_vertical_is_registered():
    assert "operations" in TemplateEngine.list_verticals()


def test_render_dashboard(clock):
    from verticals.operations.service import OperationsDashboard

    dashboard = OperationsDashboard(clock=clock, seed=True)
    text = render_view(dashboard, "dashboard")
    assert "## Industrial Control Panel" in text
    assert "**Total Tasks:** 5" in text
    assert "Personnel by Department" in text
    assert "**Efficiency:** 100%" in text


def test_render_tasks_empty_state(dashboard):
    text = render_view(dashboard, "tasks")
    assert "No tasks found." in text
    assert "Start by creating your first task." in text

    dashboard.set_filters(status="active")
    assert "Try adjusting the search filters." in render_view(dashboard, "tasks")


def test_render_tasks_table(dashboard):
    ana = dashboard.create_personnel({"name": "Ana", "role": "Technician", "department": "Maintenance"})
    dashboard.create_task({"title": "Oil change", "category": "Maintenance", "assigned_to": [ana.id]})
    text = render_view(dashboard, "tasks")
    assert "| Oil change | pending | medium | Maintenance | Ana |" in text


def test_render_task_detail(clock, dashboard):
    task = dashboard.create_task({"title": "Oil change", "category": "Maintenance"})
    dashboard.set_status(task.id, "active")
    clock.advance(hours=1, minutes=20)
    text = render_view(dashboard, "task_detail", task.id)
    assert "## Oil change" in text
    assert "**Worked:** 1h 20m (in progress)" in text
    assert "- Unassigned" in text


def test_render_task_detail_missing(dashboard):
    assert render_view(dashboard, "task_detail", "nope") == "**Error:** Task nope not found"


def test_render_personnel(clock):
    from verticals.operations.service import OperationsDashboard

    text = render_view(OperationsDashboard(clock=clock, seed=True), "personnel")
    assert "**Inactive:** 1" in text
    assert "**Maintenance** (2)" in text


def test_generic_fallback():
    text = render_generic("summary", {"count": 3, "rate": 0.5, "_hidden": 1})
    assert "**count:** 3" in text
    assert "_hidden" not in text


def test_generic_fallback_lists_labels_and_nested_values():
    text = render_generic("backlog", {
        "tasks": [{"id": "t1", "title": "Inspect pump"}, {"id": "p2", "name": "Ana"}],
        "stats": {"total_tasks": 2, "completion_rate": 50.0},
    })
    assert "**tasks:** 2" in text
    assert "- Inspect pump" in text
    assert "- Ana" in text
    assert "- completion_rate: 50.00" in text


def test_unregistered_vertical_uses_fallback():
    text = TemplateEngine.render("summary", {"error": "Task not found"}, "warehouse")
    assert text == "**Error:** Task not found"
