"""Template Engine: markdown for derived views.

Shared number and date formatters, a renderer registry keyed by vertical,
and a plain fallback for payloads nobody registered a renderer for.
"""

from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Optional


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------

def fmt_pct(value: float | None) -> str:
    """Format a float as percentage."""
    if value is None:
        return "N/A"
    return f"{value:.1f}%"


def fmt_int(value: int | None) -> str:
    """Format an integer with comma separators."""
    if value is None:
        return "N/A"
    return f"{value:,}"


def fmt_hours(value: float | None) -> str:
    """Format an hour count with one decimal, dropping a trailing .0."""
    if value is None:
        return "N/A"
    rounded = round(value, 1)
    if rounded == int(rounded):
        return f"{int(rounded)}h"
    return f"{rounded}h"


def fmt_hm(delta: timedelta | None) -> str:
    """Format a duration as whole hours and minutes, e.g. ``4h 30m``."""
    if delta is None:
        return "N/A"
    total_minutes = int(delta.total_seconds() // 60)
    hours, minutes = divmod(total_minutes, 60)
    return f"{hours}h {minutes}m"


def fmt_datetime(value: datetime | None, fmt: str = "%d %b %H:%M") -> str:
    if value is None:
        return "N/A"
    return value.strftime(fmt)


# ---------------------------------------------------------------------------
# Generic fallback renderer
# ---------------------------------------------------------------------------

_LABEL_KEYS = ("title", "name", "id")


def _label(item: Any) -> str:
    if isinstance(item, dict):
        for key in _LABEL_KEYS:
            if key in item:
                return str(item[key])
    return str(item)


def _scalar(value: Any) -> str:
    if isinstance(value, float):
        return f"{value:,.2f}"
    return str(value)


def render_generic(view_name: str, result: Dict) -> str:
    """Fallback for views without a dedicated renderer.

    Keys starting with ``_`` are private. Lists show a count and the label
    (title, name or id) of each entry; nested dicts become a sub-list.
    """
    if "error" in result:
        return f"**Error:** {result['error']}"

    lines = [f"## {view_name}", ""]
    for key, value in result.items():
        if key.startswith("_"):
            continue
        if isinstance(value, list):
            lines.append(f"**{key}:** {len(value)}")
            lines.extend(f"- {_label(item)}" for item in value)
        elif isinstance(value, dict):
            lines.append(f"**{key}:**")
            lines.extend(f"- {k}: {_scalar(v)}" for k, v in value.items())
        else:
            lines.append(f"**{key}:** {_scalar(value)}")
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Renderer type and registry
# ---------------------------------------------------------------------------

VerticalRenderer = Callable[[str, Dict, Dict], str]

_VERTICAL_RENDERERS: Dict[str, VerticalRenderer] = {}


def register_renderer(vertical: str, renderer: VerticalRenderer) -> None:
    """Route ``vertical``'s views to ``renderer(view_name, result, options)``.

    A later registration for the same vertical replaces the earlier one.
    """
    _VERTICAL_RENDERERS[vertical] = renderer


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

class TemplateEngine:
    """Dispatch a view payload to its vertical's renderer.

    Usage::

        TemplateEngine.render("dashboard", payload, "operations")
    """

    @staticmethod
    def render(
        view_name: str,
        result: Dict[str, Any],
        vertical: str,
        options: Optional[Dict[str, Any]] = None,
    ) -> str:
        renderer = _VERTICAL_RENDERERS.get(vertical)
        if renderer is None:
            return render_generic(view_name, result)
        return renderer(view_name, result, options or {})

    @staticmethod
    def list_verticals() -> list[str]:
        return sorted(_VERTICAL_RENDERERS)
