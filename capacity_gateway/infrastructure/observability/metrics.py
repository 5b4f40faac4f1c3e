"""Prometheus metrics for monitoring ranking outcomes and optimizer assignments"""

from typing import Iterable

from prometheus_client import Counter, Histogram

from capacity_gateway.domain.models import OptimizationResult

# Ranking metrics
ranking_counter = Counter(
    "capacity_ranking_total",
    "Single-project bank rankings served",
    ["outcome"],  # eligible_found | none_eligible
)

# Optimizer metrics
optimizer_assignment_counter = Counter(
    "capacity_optimizer_assignments_total",
    "Project outcomes produced by the optimizer",
    ["outcome"],  # forced | assigned | unassigned
)

optimizer_duration_histogram = Histogram(
    "capacity_optimizer_duration_seconds",
    "Optimizer run time",
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0],
)

allocation_commit_counter = Counter(
    "capacity_allocation_commits_total",
    "Reviewed allocations written back to projects",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_ranking(eligible_count: int) -> None:
    outcome = "eligible_found" if eligible_count > 0 else "none_eligible"
    ranking_counter.labels(outcome=outcome).inc()


def assignment_outcome(result: OptimizationResult) -> str:
    if result.forced:
        return "forced"
    return "assigned" if result.recommended_bank_id else "unassigned"


def record_optimization(results: Iterable[OptimizationResult]) -> None:
    """Record per-project optimizer outcomes for monitoring placement rates"""
    for result in results:
        optimizer_assignment_counter.labels(outcome=assignment_outcome(result)).inc()
