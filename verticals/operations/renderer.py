"""Template engine renderer for the operations vertical.

Turns dashboard payloads into markdown: stat cards, text bar charts, task
cards, a task detail sheet and the personnel roster. ``build_*`` helpers
assemble the payloads from an OperationsDashboard; ``render_operations``
only formats what it is given.
"""

from datetime import datetime
from typing import Any, Dict

from core.engine.template_engine import (
    TemplateEngine,
    fmt_datetime,
    fmt_hm,
    fmt_hours,
    fmt_int,
    fmt_pct,
    register_renderer,
    render_generic,
)
from verticals.operations.metrics import duration_hours, task_duration
from verticals.operations.models.schemas import Task, TaskStatus

VERTICAL = "operations"
BAR = "█"
BAR_WIDTH = 20


# ---------------------------------------------------------------------------
# Per-task labels
# ---------------------------------------------------------------------------

def time_label(task: Task, date_format: str) -> str:
    if task.status == TaskStatus.COMPLETED and task.completed_at:
        return f"Completed: {fmt_datetime(task.completed_at, date_format)}"
    if task.status == TaskStatus.ACTIVE and task.activated_at:
        return f"Started: {fmt_datetime(task.activated_at, date_format)}"
    return f"Created: {fmt_datetime(task.created_at, date_format)}"


def duration_label(task: Task, now: datetime) -> str:
    """Short duration text; estimated hours when no duration is defined."""
    hours = duration_hours(task, now)
    if hours is None:
        return f"{fmt_hours(task.estimated_hours)} estimated"
    if task.status == TaskStatus.COMPLETED:
        return f"{fmt_hours(hours)} completed"
    return f"{fmt_hours(hours)} elapsed"


def detailed_duration(task: Task, now: datetime) -> str | None:
    delta = task_duration(task, now)
    if delta is None:
        return None
    if task.status == TaskStatus.ACTIVE:
        return f"{fmt_hm(delta)} (in progress)"
    return fmt_hm(delta)


# ---------------------------------------------------------------------------
# Payload builders
# ---------------------------------------------------------------------------

def _card(dashboard, task: Task, now: datetime) -> Dict[str, Any]:
    date_format = dashboard.config.display.date_format
    return {
        "id": task.id,
        "title": task.title,
        "status": TaskStatus(task.status).value,
        "priority": task.priority.value,
        "category": task.category,
        "assignees": [p.name for p in dashboard.assigned_personnel(task)],
        "time": time_label(task, date_format),
        "duration": duration_label(task, now),
    }


def build_dashboard_payload(dashboard) -> Dict[str, Any]:
    return {
        "stats": dashboard.compute_dashboard_stats().model_dump(),
        "charts": dashboard.chart_data().model_dump(),
    }


def build_tasks_payload(dashboard) -> Dict[str, Any]:
    now = dashboard.clock()
    return {
        "tasks": [_card(dashboard, t, now) for t in dashboard.list_filtered_tasks()],
        "search_term": dashboard.criteria.search_term,
        "active_filters": dashboard.active_filters_count(),
    }


def build_task_detail_payload(dashboard, task_id: str) -> Dict[str, Any]:
    task = dashboard.get_task(task_id)
    if task is None:
        return {"error": f"Task {task_id} not found"}
    now = dashboard.clock()
    detailed = dashboard.config.display.detailed_date_format
    card = _card(dashboard, task, now)
    card.update({
        "description": task.description,
        "estimated": fmt_hours(task.estimated_hours),
        "worked": detailed_duration(task, now),
        "created_at": fmt_datetime(task.created_at, detailed),
        "activated_at": fmt_datetime(task.activated_at, detailed) if task.activated_at else None,
        "completed_at": fmt_datetime(task.completed_at, detailed) if task.completed_at else None,
        "assignees": [
            {"name": p.name, "role": p.role, "active": p.active}
            for p in dashboard.assigned_personnel(task)
        ],
    })
    return card


def build_personnel_payload(dashboard) -> Dict[str, Any]:
    people = dashboard.list_personnel()
    departments: Dict[str, list] = {}
    for p in people:
        departments.setdefault(p.department, []).append(
            {"name": p.name, "role": p.role, "active": p.active}
        )
    return {
        "total": len(people),
        "active": sum(1 for p in people if p.active),
        "inactive": sum(1 for p in people if not p.active),
        "departments": departments,
    }


_BUILDERS = {
    "dashboard": build_dashboard_payload,
    "tasks": build_tasks_payload,
    "personnel": build_personnel_payload,
}


def render_view(dashboard, view_name: str, task_id: str | None = None) -> str:
    """Build and render one view of ``dashboard`` as markdown."""
    if view_name == "task_detail":
        payload = build_task_detail_payload(dashboard, task_id or "")
    else:
        payload = _BUILDERS[view_name](dashboard)
    return TemplateEngine.render(view_name, payload, VERTICAL)


# ---------------------------------------------------------------------------
# Markdown
# ---------------------------------------------------------------------------

def _bars(points: list, label_key: str = "name") -> list[str]:
    peak = max((p["value"] for p in points), default=0)
    lines = []
    for p in points:
        width = round(p["value"] / peak * BAR_WIDTH) if peak else 0
        lines.append(f"    {p[label_key]:<12} {BAR * width} {p['value']}")
    return lines


def _render_dashboard(result: Dict[str, Any]) -> str:
    stats = result["stats"]
    charts = result["charts"]
    lines = ["## Industrial Control Panel\n"]
    lines.append(
        f"Productivity: {fmt_pct(stats['completion_rate'])} | "
        f"{fmt_int(stats['active_tasks'])} active tasks\n"
    )
    lines.append(f"- **Total Tasks:** {fmt_int(stats['total_tasks'])}")
    lines.append(f"- **Active Personnel:** {fmt_int(stats['active_personnel'])}")
    lines.append(f"- **Completed:** {fmt_int(stats['completed_tasks'])}")
    lines.append(f"- **Urgent:** {fmt_int(stats['urgent_tasks'])}")

    if stats["total_tasks"] > 0:
        lines.append("\n**Task Distribution:**")
        lines.extend(_bars(charts["status"]))
        lines.append("\n**Personnel by Department:**")
        lines.extend(_bars(charts["departments"]))

    lines.append("\n**Last 7 Days (created / completed):**")
    for day in charts["weekly"]:
        lines.append(f"    {day['day']} {day['date']}  {day['created']} / {day['completed']}")

    lines.append(f"\n- **Average Time:** {stats['avg_estimated_hours']:.1f}h per task")
    lines.append(f"- **Tasks Today:** {fmt_int(stats['today_tasks'])}")
    lines.append(f"- **Efficiency:** {stats['efficiency']}%")
    return "\n".join(lines)


def _render_tasks(result: Dict[str, Any]) -> str:
    tasks = result["tasks"]
    lines = [f"## Tasks ({len(tasks)} shown)\n"]
    if result["active_filters"]:
        plural = "s" if result["active_filters"] != 1 else ""
        lines.append(f"_{result['active_filters']} active filter{plural}_\n")
    if not tasks:
        lines.append("No tasks found.")
        if result["search_term"] or result["active_filters"]:
            lines.append("Try adjusting the search filters.")
        else:
            lines.append("Start by creating your first task.")
        return "\n".join(lines)

    lines.append("| Title | Status | Priority | Category | Assigned | When | Duration |")
    lines.append("|-------|--------|----------|----------|----------|------|----------|")
    for t in tasks:
        assigned = ", ".join(t["assignees"]) or "Unassigned"
        lines.append(
            f"| {t['title'][:40]} | {t['status']} | {t['priority']} | {t['category']} | "
            f"{assigned} | {t['time']} | {t['duration']} |"
        )
    return "\n".join(lines)


def _render_task_detail(result: Dict[str, Any]) -> str:
    lines = [f"## {result['title']}\n"]
    lines.append(f"**Status:** {result['status']} | **Priority:** {result['priority']} | "
                 f"**Category:** {result['category']}")
    if result["description"]:
        lines.append(f"\n{result['description']}")
    lines.append(f"\n- **Estimated:** {result['estimated']}")
    if result["worked"]:
        lines.append(f"- **Worked:** {result['worked']}")
    lines.append(f"- **Created:** {result['created_at']}")
    if result["activated_at"]:
        lines.append(f"- **Started:** {result['activated_at']}")
    if result["completed_at"]:
        lines.append(f"- **Completed:** {result['completed_at']}")

    lines.append("\n**Assigned Personnel:**")
    if not result["assignees"]:
        lines.append("- Unassigned")
    for person in result["assignees"]:
        state = "Active" if person["active"] else "Inactive"
        lines.append(f"- {person['name']} ({person['role']}, {state})")
    return "\n".join(lines)


def _render_personnel(result: Dict[str, Any]) -> str:
    lines = ["## Personnel\n"]
    lines.append(f"- **Total:** {fmt_int(result['total'])}")
    lines.append(f"- **Active:** {fmt_int(result['active'])}")
    lines.append(f"- **Inactive:** {fmt_int(result['inactive'])}")
    for department, people in result["departments"].items():
        lines.append(f"\n**{department}** ({len(people)})")
        for person in people:
            state = "Active" if person["active"] else "Inactive"
            lines.append(f"- {person['name']}, {person['role']} ({state})")
    return "\n".join(lines)


def render_operations(view_name: str, result: Dict[str, Any], options: Dict) -> str:
    """Render operations views into markdown."""
    if "error" in result:
        return f"**Error:** {result['error']}"

    if view_name == "dashboard":
        return _render_dashboard(result)
    if view_name == "tasks":
        return _render_tasks(result)
    if view_name == "task_detail":
        return _render_task_detail(result)
    if view_name == "personnel":
        return _render_personnel(result)

    return render_generic(view_name, result)


# Auto-register on import
register_renderer(VERTICAL, render_operations)
