import logging

from src.employee_management.employee_management.core.enums import DepartmentIssue
from src.employee_management.employee_management.metrics.sink import InMemoryMetrics, NullMetrics


def test_query_stats_average_per_operation():
    m = InMemoryMetrics()
    m.record_query_time("employees.list_all", 10)
    m.record_query_time("employees.list_all", 30)
    m.record_query_time("payslips.create", 5)

    stats = m.query_stats()
    assert stats["average_query_ms"]["employees.list_all"] == 20
    assert stats["query_counts"] == {"employees.list_all": 2, "payslips.create": 1}
    assert stats["total_queries"] == 3


def test_slow_query_is_logged(caplog):
    caplog.set_level(logging.DEBUG)
    m = InMemoryMetrics(slow_query_ms=50)
    m.record_query_time("fast", 10)
    m.record_query_time("slow", 75)

    warnings = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
    assert warnings == ["Slow query detected: slow took 75.0ms"]


def test_cache_hit_ratio():
    m = InMemoryMetrics()
    for hit in (True, True, True, False):
        m.record_cache_access("departments", hit)

    stats = m.cache_stats()
    assert stats["hit_ratios"]["departments"] == 75
    assert stats["total_hits"] == 3
    assert stats["total_misses"] == 1


def test_department_issue_counts_use_issue_names():
    m = InMemoryMetrics()
    m.record_department_issue(DepartmentIssue.EMPTY_DEPARTMENT_NAME)
    m.record_department_issue("EMPTY_DEPARTMENT_NAME")
    assert m.department_issue_counts() == {"EMPTY_DEPARTMENT_NAME": 2}


def test_reset_clears_everything():
    m = InMemoryMetrics()
    m.record_query_time("x", 1)
    m.record_cache_access("c", True)
    m.record_department_issue("Y")

    m.reset()

    assert m.snapshot() == {
        "query_stats": {"average_query_ms": {}, "query_counts": {}, "total_queries": 0},
        "cache_stats": {"hit_ratios": {}, "total_hits": 0, "total_misses": 0},
        "department_issues": {},
    }


def test_null_metrics_accepts_calls():
    m = NullMetrics()
    m.record_query_time("x", 1)
    m.record_cache_access("c", False)
    m.record_department_issue("Y")
