"""In-memory repository pattern.

Provides a generic repository with CRUD operations over pydantic models,
keyed by their ``id`` attribute. Insertion order is preserved, so listing
returns items in the order they were added. Verticals subclass this to
declare which fields an update must never overwrite.

Example: TaskRepository protecting its lifecycle timestamps.
"""

from typing import Any, Generic, Iterator, TypeVar

from pydantic import BaseModel

# ---------------------------------------------------------------------------
# Type variable for model classes
# ---------------------------------------------------------------------------

ModelT = TypeVar("ModelT", bound=BaseModel)


# ---------------------------------------------------------------------------
# Base repository
# ---------------------------------------------------------------------------

class InMemoryRepository(Generic[ModelT]):
    """Generic insertion-ordered repository.

    Subclass and extend `protected_fields`::

        class TaskRepository(InMemoryRepository[Task]):
            protected_fields = ("id", "created_at", "completed_at")
    """

    protected_fields: tuple[str, ...] = ("id", "created_at")

    def __init__(self) -> None:
        self._items: dict[str, ModelT] = {}

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items

    def __iter__(self) -> Iterator[ModelT]:
        return iter(list(self._items.values()))

    # -- List --

    def list(self, filters: dict[str, Any] | None = None) -> list[ModelT]:
        """List items in insertion order, optionally by exact field match."""
        items = list(self._items.values())
        if filters:
            for field_name, value in filters.items():
                if value is None:
                    continue
                items = [i for i in items if getattr(i, field_name, None) == value]
        return items

    # -- Get by ID --

    def get(self, item_id: str) -> ModelT | None:
        return self._items.get(item_id)

    # -- Create --

    def add(self, item: ModelT) -> ModelT:
        """Insert a new item. Raises ValueError on a duplicate id."""
        item_id = getattr(item, "id")
        if item_id in self._items:
            raise ValueError(f"Duplicate id: {item_id}")
        self._items[item_id] = item
        return item

    # -- Update --

    def update(self, item_id: str, data: dict[str, Any]) -> ModelT | None:
        """Update an existing item in place. Returns None if not found."""
        item = self._items.get(item_id)
        if item is None:
            return None

        known = type(item).model_fields
        for key, value in data.items():
            if key in known and key not in self.protected_fields:
                setattr(item, key, value)
        return item

    # -- Delete --

    def delete(self, item_id: str) -> bool:
        """Delete an item. Returns True if deleted, False if not found."""
        return self._items.pop(item_id, None) is not None

    def clear(self) -> None:
        self._items.clear()
