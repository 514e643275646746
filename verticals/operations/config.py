"""Operations vertical configuration.

Re-exports the DashboardConfig from the patterns module,
demonstrating how verticals use the domain config pattern.
"""

from patterns.domain_config import DashboardConfig

# Default configuration instance
config = DashboardConfig.default()
