"""Operations vertical: industrial task and personnel dashboard.

Demonstrates the patterns working together in one domain:
- Pydantic schemas for tasks, personnel, filter criteria and statistics
- In-memory repositories behind an entity store
- Enum state machine for the task lifecycle
- Pure-function filter rules and metrics
- Template engine renderer
- Dataclass configuration
"""
