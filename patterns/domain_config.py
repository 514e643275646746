"""Dataclass-based domain configuration pattern.

Each vertical defines its thresholds, limits, and feature flags as a
frozen dataclass. This gives you:
- Type safety (IDE autocompletion, mypy checking)
- Default values (sensible out-of-the-box)
- Immutability (frozen=True prevents accidental mutation)
- Easy overrides (from env vars or explicit keyword arguments)

Example domain: the operations dashboard.
"""

import os
from dataclasses import dataclass, field


# ---------------------------------------------------------------------------
# Nested config sections
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LifecycleConfig:
    """Task status transition policy."""

    # False: any status may be written, timestamps follow the table.
    # True: requests for edges missing from the table are discarded.
    strict_transitions: bool = False


@dataclass(frozen=True)
class MetricsConfig:
    """Dashboard statistics and chart settings."""

    idle_efficiency: int = 100  # efficiency reported with no active tasks
    department_label_width: int = 10
    palette_size: int = 5
    weekly_window_days: int = 7


@dataclass(frozen=True)
class DisplayConfig:
    """Fixed-locale date formats used by the renderer."""

    date_format: str = "%d %b %H:%M"
    detailed_date_format: str = "%A %d %B %Y, %H:%M"


# ---------------------------------------------------------------------------
# Top-level domain config
# ---------------------------------------------------------------------------

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class DashboardConfig:
    """Complete configuration for the operations dashboard.

    Usage::

        config = DashboardConfig.from_env()
        dashboard = OperationsDashboard(config=config)
    """

    lifecycle: LifecycleConfig = field(default_factory=LifecycleConfig)
    metrics: MetricsConfig = field(default_factory=MetricsConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)

    seed_demo_data: bool = False
    theme_file: str | None = None
    log_level: str = "INFO"

    @classmethod
    def default(cls) -> "DashboardConfig":
        """Create config with all defaults."""
        return cls()

    @classmethod
    def from_env(cls, prefix: str = "OPSDASH_") -> "DashboardConfig":
        """Create config from environment variables.

        Example: OPSDASH_STRICT_TRANSITIONS=true OPSDASH_LOG_LEVEL=DEBUG
        """
        overrides: dict = {}

        strict = os.getenv(f"{prefix}STRICT_TRANSITIONS")
        if strict:
            overrides["lifecycle"] = LifecycleConfig(
                strict_transitions=strict.strip().lower() in _TRUTHY
            )

        seed = os.getenv(f"{prefix}SEED_DEMO_DATA")
        if seed:
            overrides["seed_demo_data"] = seed.strip().lower() in _TRUTHY

        theme_file = os.getenv(f"{prefix}THEME_FILE")
        if theme_file:
            overrides["theme_file"] = theme_file

        log_level = os.getenv(f"{prefix}LOG_LEVEL")
        if log_level:
            overrides["log_level"] = log_level.strip().upper()

        return cls(**overrides)
