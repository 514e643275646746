"""Pure-function rules engine pattern.

Rules are stateless predicates: item -> bool, wrapped with a name.
No storage, no side effects. This makes them:
- Trivially testable (pure input/output)
- Composable (conjunction over any number of rules)
- Auditable (deterministic, explainable per rule)

Example domain: task list filtering (see verticals/operations/filters.py).
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Iterable, TypeVar

ItemT = TypeVar("ItemT")


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass
class RuleResult:
    """Outcome of a single rule evaluation."""

    passed: bool
    rule_name: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)


@dataclass
class RuleSetResult:
    """Aggregate outcome of multiple rules."""

    all_passed: bool
    results: list[RuleResult]
    failed: list[RuleResult] = field(default_factory=list)

    def __post_init__(self):
        self.failed = [r for r in self.results if not r.passed]
        self.all_passed = len(self.failed) == 0


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Rule(Generic[ItemT]):
    """A named predicate."""

    name: str
    predicate: Callable[[ItemT], bool]
    description: str = ""

    def __call__(self, item: ItemT) -> bool:
        return self.predicate(item)

    def evaluate(self, item: ItemT) -> RuleResult:
        passed = bool(self.predicate(item))
        return RuleResult(
            passed=passed,
            rule_name=self.name,
            message=self.description if passed else f"Rejected by {self.name}",
        )


# ---------------------------------------------------------------------------
# Rule composition
# ---------------------------------------------------------------------------

def evaluate_rules(*results: RuleResult) -> RuleSetResult:
    """Compose multiple rule results into a single aggregate."""
    return RuleSetResult(
        all_passed=all(r.passed for r in results),
        results=list(results),
    )


def select(items: Iterable[ItemT], rules: Iterable[Rule[ItemT]]) -> list[ItemT]:
    """Keep the items every rule accepts, preserving input order.

    Example::

        visible = select(tasks, [by_status("active"), by_priority("urgent")])
    """
    rules = list(rules)
    return [item for item in items if all(rule(item) for rule in rules)]
