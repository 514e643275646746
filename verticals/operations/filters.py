"""Task filtering: pure functions.

Builds one named rule per active criterion and keeps the tasks every rule
accepts. Input order is preserved and nothing is mutated, so filtering an
already filtered list with the same criteria returns it unchanged.
"""

from typing import Iterable

from patterns.rules_engine import Rule, RuleSetResult, evaluate_rules, select
from verticals.operations.models.schemas import ALL, UNASSIGNED, FilterCriteria, Task


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------

def by_search(term: str) -> Rule[Task]:
    needle = term.lower()
    return Rule(
        name="search",
        predicate=lambda t: needle in t.title.lower() or needle in t.description.lower(),
        description=f"Title or description contains {term!r}",
    )


def by_status(status: str) -> Rule[Task]:
    return Rule(name="status", predicate=lambda t: t.status == status)


def by_priority(priority: str) -> Rule[Task]:
    return Rule(name="priority", predicate=lambda t: t.priority == priority)


def by_category(category: str) -> Rule[Task]:
    return Rule(name="category", predicate=lambda t: t.category == category)


def by_personnel(personnel: str) -> Rule[Task]:
    if personnel == UNASSIGNED:
        return Rule(name="personnel", predicate=lambda t: not t.assigned_to)
    return Rule(name="personnel", predicate=lambda t: personnel in t.assigned_to)


def build_rules(criteria: FilterCriteria) -> list[Rule[Task]]:
    """One rule per criterion that is not ``all`` (or a non-empty search)."""
    rules: list[Rule[Task]] = []
    if criteria.search_term:
        rules.append(by_search(criteria.search_term))
    if criteria.status != ALL:
        rules.append(by_status(criteria.status))
    if criteria.priority != ALL:
        rules.append(by_priority(criteria.priority))
    if criteria.category != ALL:
        rules.append(by_category(criteria.category))
    if criteria.personnel != ALL:
        rules.append(by_personnel(criteria.personnel))
    return rules


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

def filter_tasks(tasks: Iterable[Task], criteria: FilterCriteria | None = None) -> list[Task]:
    """Return the tasks matching every criterion, in input order."""
    return select(tasks, build_rules(criteria or FilterCriteria()))


def explain_match(task: Task, criteria: FilterCriteria) -> RuleSetResult:
    """Per-criterion verdicts for one task, e.g. to say why it is hidden."""
    return evaluate_rules(*(rule.evaluate(task) for rule in build_rules(criteria)))


def active_filters_count(criteria: FilterCriteria) -> int:
    """Number of select filters in use; the search box is not counted."""
    return sum(
        value != ALL
        for value in (criteria.status, criteria.priority, criteria.category, criteria.personnel)
    )
