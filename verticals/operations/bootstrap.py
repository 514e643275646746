"""Session bootstrap: config from env, logging, theme backend, dashboard."""

import logging
from dataclasses import dataclass

from core.observability.logging_setup import setup_logging
from patterns.domain_config import DashboardConfig
from verticals.operations.preferences import JsonFilePreferences, MemoryPreferences, ThemePreference
from verticals.operations.service import OperationsDashboard
from verticals.operations.store import Clock, local_now

logger = logging.getLogger(__name__)


@dataclass
class DashboardSession:
    dashboard: OperationsDashboard
    theme: ThemePreference
    config: DashboardConfig

    def close(self) -> None:
        self.dashboard.close()


def start_session(
    config: DashboardConfig | None = None,
    clock: Clock = local_now,
    configure_logging: bool = True,
) -> DashboardSession:
    """Build a ready-to-use session.

    Without an explicit config, settings come from ``OPSDASH_*`` variables.
    """
    config = config or DashboardConfig.from_env()
    if configure_logging:
        setup_logging(level=config.log_level)

    backend = JsonFilePreferences(config.theme_file) if config.theme_file else MemoryPreferences()
    session = DashboardSession(
        dashboard=OperationsDashboard(config=config, clock=clock),
        theme=ThemePreference(backend),
        config=config,
    )
    logger.info(
        "Session started strict=%s seeded=%s theme=%s",
        config.lifecycle.strict_transitions,
        config.seed_demo_data,
        session.theme.current().value,
    )
    return session
