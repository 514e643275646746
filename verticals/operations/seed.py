"""Demo data for a fresh session: six workers, five tasks, five categories."""

from datetime import datetime

from verticals.operations.models.schemas import Personnel, Task, TaskPriority, TaskStatus

DEFAULT_CATEGORIES = ["Maintenance", "Quality", "Safety", "Logistics", "Production"]


def _at(day: int, hour: int, minute: int = 0) -> datetime:
    return datetime(2025, 1, day, hour, minute).astimezone()


def seed_personnel() -> list[Personnel]:
    return [
        Personnel(id="1", name="Carlos Méndez", role="Supervisor", department="Production"),
        Personnel(id="2", name="Ana García", role="Technician", department="Maintenance"),
        Personnel(id="3", name="Luis Rodríguez", role="Operator", department="Production"),
        Personnel(id="4", name="María López", role="Engineer", department="Quality"),
        Personnel(id="5", name="Pedro Sánchez", role="Technician", department="Maintenance", active=False),
        Personnel(id="6", name="Carmen Vega", role="Analyst", department="Quality"),
    ]


def seed_tasks() -> list[Task]:
    return [
        Task(
            id="2",
            title="Measuring equipment calibration",
            description="Quarterly calibration of every measuring instrument in the quality area",
            status=TaskStatus.PENDING,
            priority=TaskPriority.MEDIUM,
            assigned_to=["4", "6"],
            created_at=_at(9, 7),
            estimated_hours=6,
            category="Quality",
        ),
        Task(
            id="3",
            title="Main compressor preventive maintenance",
            description="Filter change, pressure check and lubrication of the central compressor",
            status=TaskStatus.COMPLETED,
            priority=TaskPriority.URGENT,
            assigned_to=["2"],
            created_at=_at(7, 6),
            activated_at=_at(7, 8),
            completed_at=_at(7, 12, 30),
            estimated_hours=3,
            category="Maintenance",
        ),
        Task(
            id="4",
            title="Industrial safety training",
            description="Monthly safety procedures session for new employees",
            status=TaskStatus.PENDING,
            priority=TaskPriority.MEDIUM,
            assigned_to=["1"],
            created_at=_at(10, 14),
            estimated_hours=2,
            category="Safety",
        ),
        Task(
            id="6",
            title="Electrical system inspection",
            description="Inspection and testing of the plant's main electrical system",
            status=TaskStatus.COMPLETED,
            priority=TaskPriority.HIGH,
            assigned_to=["2", "5"],
            created_at=_at(5, 9),
            activated_at=_at(5, 10),
            completed_at=_at(6, 2),
            estimated_hours=12,
            category="Maintenance",
        ),
        Task(
            id="7",
            title="Quality control batch 2025-001",
            description="Analysis and verification of the first production batch of the year",
            status=TaskStatus.COMPLETED,
            priority=TaskPriority.MEDIUM,
            assigned_to=["4"],
            created_at=_at(4, 7),
            activated_at=_at(4, 8, 30),
            completed_at=_at(4, 16, 45),
            estimated_hours=6,
            category="Quality",
        ),
    ]
