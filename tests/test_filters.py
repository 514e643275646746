"""Test task filtering rules."""
import pytest

from verticals.operations.filters import active_filters_count, explain_match, filter_tasks
from verticals.operations.models.schemas import FilterCriteria, TaskStatus

from fakes import make_task


@pytest.fixture
def tasks():
    return [
        make_task(title="Compressor service", status="pending", priority="urgent", assigned_to=[]),
        make_task(title="Calibrate gauges", description="Quality lab COMPRESSOR gauges",
                  status="active", priority="medium", category="Quality", assigned_to=["p1"]),
        make_task(title="Safety drill", status="completed", priority="low", category="Safety",
                  assigned_to=[]),
        make_task(title="Forklift check", status="completed", priority="high", category="Logistics",
                  assigned_to=["p1", "p2"]),
    ]


def test_default_criteria_match_all(tasks):
    assert filter_tasks(tasks, FilterCriteria()) == tasks
    assert filter_tasks(tasks) == tasks


def test_search_is_case_insensitive_over_title_and_description(tasks):
    result = filter_tasks(tasks, FilterCriteria(search_term="compressor"))
    assert [t.title for t in result] == ["Compressor service", "Calibrate gauges"]


def test_status_priority_category(tasks):
    assert [t.title for t in filter_tasks(tasks, FilterCriteria(status="completed"))] == [
        "Safety drill", "Forklift check",
    ]
    assert [t.title for t in filter_tasks(tasks, FilterCriteria(priority="urgent"))] == [
        "Compressor service",
    ]
    assert [t.title for t in filter_tasks(tasks, FilterCriteria(category="Quality"))] == [
        "Calibrate gauges",
    ]


def test_status_accepts_enum(tasks):
    result = filter_tasks(tasks, FilterCriteria(status=TaskStatus.ACTIVE))
    assert [t.title for t in result] == ["Calibrate gauges"]


def test_personnel_membership_and_unassigned(tasks):
    assert [t.title for t in filter_tasks(tasks, FilterCriteria(personnel="p2"))] == ["Forklift check"]
    assert [t.title for t in filter_tasks(tasks, FilterCriteria(personnel="unassigned"))] == [
        "Compressor service", "Safety drill",
    ]


def test_composition_is_intersection(tasks):
    combined = filter_tasks(tasks, FilterCriteria(status="completed", personnel="unassigned"))
    by_status = filter_tasks(tasks, FilterCriteria(status="completed"))
    by_personnel = filter_tasks(tasks, FilterCriteria(personnel="unassigned"))
    assert combined == [t for t in by_status if t in by_personnel]
    assert [t.title for t in combined] == ["Safety drill"]


def test_filter_is_idempotent(tasks):
    criteria = FilterCriteria(search_term="c", status="completed")
    once = filter_tasks(tasks, criteria)
    assert filter_tasks(once, criteria) == once


def test_filter_does_not_mutate_input(tasks):
    snapshot = [t.model_dump() for t in tasks]
    filter_tasks(tasks, FilterCriteria(status="active", search_term="gauge"))
    assert [t.model_dump() for t in tasks] == snapshot


def test_active_filters_count_ignores_search():
    assert active_filters_count(FilterCriteria(search_term="x")) == 0
    assert active_filters_count(FilterCriteria(status="active", personnel="unassigned")) == 2


def test_explain_match(tasks):
    result = explain_match(tasks[0], FilterCriteria(status="completed", priority="urgent"))
    assert not result.all_passed
    assert [r.rule_name for r in result.failed] == ["status"]
