"""Multi-project allocator - greedy most-constrained-first bank assignment"""

from dataclasses import replace
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from capacity_gateway.domain.models import (
    FORCED_SCORE,
    NO_ELIGIBLE_BANK_NAME,
    Bank,
    OptimizationResult,
    Project,
    Weights,
)
from capacity_gateway.domain.ranking import is_eligible, rank_banks_for_project
from capacity_gateway.domain.ratings import RATING_SCALE


class CapacitySnapshot:
    """
    Working copy of the bank book for a single optimizer run.

    Banks are cloned on construction so capacity can be consumed across
    sequential assignments without touching the caller's records.
    """

    def __init__(self, banks: Sequence[Bank]):
        self.banks: List[Bank] = [replace(bank) for bank in banks]
        self._by_id: Dict[str, Bank] = {}
        for bank in self.banks:
            # First occurrence wins on duplicate ids
            self._by_id.setdefault(bank.id, bank)

    def get(self, bank_id: str) -> Optional[Bank]:
        return self._by_id.get(bank_id)

    def consume(self, bank_id: str, amount: float) -> None:
        self._by_id[bank_id].used_capacity += amount


def planned_projects(projects: Sequence[Project]) -> List[Project]:
    return [p for p in projects if p.is_planned]


def unmatched_forced_assignments(
    banks: Sequence[Bank],
    projects: Sequence[Project],
    forced_assignments: Optional[Mapping[str, str]],
) -> List[Tuple[str, str]]:
    """Forced (project_id, bank_id) pairs the optimizer will skip because an id does not resolve"""
    if not forced_assignments:
        return []
    planned_ids = {p.id for p in planned_projects(projects)}
    bank_ids = {b.id for b in banks}
    return [
        (project_id, bank_id)
        for project_id, bank_id in forced_assignments.items()
        if project_id not in planned_ids or bank_id not in bank_ids
    ]


def optimize_projects(
    banks: Sequence[Bank],
    projects: Sequence[Project],
    weights: Weights,
    forced_assignments: Optional[Mapping[str, str]] = None,
    rating_scale: Mapping[str, float] = RATING_SCALE,
) -> List[OptimizationResult]:
    """
    Assign one bank to every planned project.

    Steps:
    1. Keep only Planned projects and clone the banks into a capacity snapshot
    2. Honor forced assignments (project_id -> bank_id) unconditionally, in map
       order, consuming the bank's capacity. Pairs with an unknown planned
       project or bank are skipped.
    3. Order the remaining projects by how many banks are eligible for them
       (fewest first), computed once against the post-forced snapshot
    4. For each, take the top eligible bank from the ranking engine and consume
       its capacity, or report "No eligible bank"

    Returns forced results first, then automatic results in processing order.
    Never raises for unsatisfiable projects.
    """
    planned = planned_projects(projects)
    planned_by_id: Dict[str, Project] = {}
    for project in planned:
        planned_by_id.setdefault(project.id, project)

    snapshot = CapacitySnapshot(banks)
    results: List[OptimizationResult] = []

    forced_ids = set()
    for project_id, bank_id in (forced_assignments or {}).items():
        project = planned_by_id.get(project_id)
        bank = snapshot.get(bank_id)
        if project is None or bank is None:
            continue

        forced_ids.add(project_id)
        snapshot.consume(bank.id, project.capacity_needed)
        results.append(
            OptimizationResult(
                project_id=project.id,
                project_name=project.name,
                recommended_bank_id=bank.id,
                recommended_bank_name=bank.name,
                score=FORCED_SCORE,
                forced=True,
            )
        )

    remaining = [p for p in planned if p.id not in forced_ids]

    # Most constrained first; sorted() is stable so ties keep project order
    eligible_counts = {
        id(project): sum(1 for bank in snapshot.banks if is_eligible(bank, project, rating_scale))
        for project in remaining
    }
    ordered = sorted(remaining, key=lambda p: eligible_counts[id(p)])

    for project in ordered:
        ranked = rank_banks_for_project(snapshot.banks, project, weights, rating_scale)
        best = next((r for r in ranked if r.eligible), None)

        if best is None:
            results.append(
                OptimizationResult(
                    project_id=project.id,
                    project_name=project.name,
                    recommended_bank_id="",
                    recommended_bank_name=NO_ELIGIBLE_BANK_NAME,
                    score=0,
                )
            )
            continue

        # ranked entries wrap the snapshot's own bank objects
        best.bank.used_capacity += project.capacity_needed
        results.append(
            OptimizationResult(
                project_id=project.id,
                project_name=project.name,
                recommended_bank_id=best.id,
                recommended_bank_name=best.name,
                score=best.score,
            )
        )

    return results
