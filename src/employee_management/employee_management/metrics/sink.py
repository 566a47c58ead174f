"""Metrics sink used by repositories and services.

Note: Counters live on the sink instance that the container injects; nothing
here is process-global.
"""

from __future__ import annotations

import logging
import threading
from collections import Counter
from typing import Protocol

from ..core.constants import DEFAULT_SLOW_QUERY_MS

logger = logging.getLogger(__name__)


class MetricsSink(Protocol):
    def record_query_time(self, operation: str, elapsed_ms: float) -> None:
        raise NotImplementedError

    def record_cache_access(self, cache_name: str, hit: bool) -> None:
        raise NotImplementedError

    def record_department_issue(self, issue: str) -> None:
        raise NotImplementedError


class NullMetrics(MetricsSink):
    """Sink that drops everything."""

    def record_query_time(self, operation: str, elapsed_ms: float) -> None:
        return None

    def record_cache_access(self, cache_name: str, hit: bool) -> None:
        return None

    def record_department_issue(self, issue: str) -> None:
        return None


class InMemoryMetrics(MetricsSink):
    """Thread-safe counters for query timings, cache effectiveness and department issues."""

    def __init__(self, *, slow_query_ms: float = DEFAULT_SLOW_QUERY_MS):
        self._slow_query_ms = float(slow_query_ms)
        self._lock = threading.Lock()
        self._query_total_ms: dict[str, float] = {}
        self._query_counts: Counter[str] = Counter()
        self._cache_hits: Counter[str] = Counter()
        self._cache_misses: Counter[str] = Counter()
        self._department_issues: Counter[str] = Counter()

    def record_query_time(self, operation: str, elapsed_ms: float) -> None:
        with self._lock:
            self._query_total_ms[operation] = self._query_total_ms.get(operation, 0.0) + float(elapsed_ms)
            self._query_counts[operation] += 1

        if elapsed_ms > self._slow_query_ms:
            logger.warning("Slow query detected: %s took %.1fms", operation, elapsed_ms)
        else:
            logger.debug("Query executed: %s took %.1fms", operation, elapsed_ms)

    def record_cache_access(self, cache_name: str, hit: bool) -> None:
        with self._lock:
            if hit:
                self._cache_hits[cache_name] += 1
            else:
                self._cache_misses[cache_name] += 1

    def record_department_issue(self, issue: str) -> None:
        with self._lock:
            self._department_issues[getattr(issue, "value", str(issue))] += 1

    def query_stats(self) -> dict:
        with self._lock:
            averages = {
                op: self._query_total_ms[op] / count
                for op, count in self._query_counts.items()
                if count > 0
            }
            return {
                "average_query_ms": averages,
                "query_counts": dict(self._query_counts),
                "total_queries": sum(self._query_counts.values()),
            }

    def cache_stats(self) -> dict:
        with self._lock:
            hit_ratios: dict[str, float] = {}
            for name in set(self._cache_hits) | set(self._cache_misses):
                hits = self._cache_hits[name]
                total = hits + self._cache_misses[name]
                if total > 0:
                    hit_ratios[name] = hits / total * 100
            return {
                "hit_ratios": hit_ratios,
                "total_hits": sum(self._cache_hits.values()),
                "total_misses": sum(self._cache_misses.values()),
            }

    def department_issue_counts(self) -> dict[str, int]:
        with self._lock:
            return dict(self._department_issues)

    def snapshot(self) -> dict:
        return {
            "query_stats": self.query_stats(),
            "cache_stats": self.cache_stats(),
            "department_issues": self.department_issue_counts(),
        }

    def reset(self) -> None:
        logger.info("Resetting performance statistics")
        with self._lock:
            self._query_total_ms.clear()
            self._query_counts.clear()
            self._cache_hits.clear()
            self._cache_misses.clear()
            self._department_issues.clear()
