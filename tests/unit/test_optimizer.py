"""Unit tests for the multi-project allocator"""

from dataclasses import replace
from capacity_gateway.domain.models import (
    FORCED_SCORE,
    NO_ELIGIBLE_BANK_NAME,
    Bank,
    Project,
    Weights,
)
from capacity_gateway.domain.optimizer import (
    CapacitySnapshot,
    optimize_projects,
    unmatched_forced_assignments,
)

CAPACITY_ONLY = Weights(capacity_headroom=1, price_competitiveness=0, credit_rating=0)


def make_bank(bank_id: str, countries, total=100, used=0, **extra) -> Bank:
    return Bank(id=bank_id, name=f"Bank {bank_id}", total_capacity=total, used_capacity=used, countries=countries, **extra)


def make_project(project_id: str, country: str, need: float, **extra) -> Project:
    return Project(id=project_id, name=f"Project {project_id}", country=country, capacity_needed=need, **extra)


def test_most_constrained_project_is_placed_first():
    """
    P1 (need 80) can only use A; P2 (need 50) can use A or B.

    P1 is processed first even though P2 is listed first, takes 80 of A's 100,
    and P2 lands on B where the headroom is.
    """
    bank_a = make_bank("A", ["FR", "US"], total=100)
    bank_b = make_bank("B", ["US"], total=100)
    p1 = make_project("P1", "FR", 80)
    p2 = make_project("P2", "US", 50)

    results = optimize_projects([bank_a, bank_b], [p2, p1], CAPACITY_ONLY)

    assert [(r.project_id, r.recommended_bank_id) for r in results] == [("P1", "A"), ("P2", "B")]
    # P2 on B: (100 - 50) / 100 headroom + 0.05 local bonus
    assert results[1].score == 0.55


def test_sequencing_counts_tenor_and_rating_filters():
    """
    Both projects fit country-wise at A and B, but only A meets the AA floor.

    Counting the rating filter puts the strict project first so it gets A
    before the easy project consumes it.
    """
    bank_a = make_bank("A", ["US"], total=100, credit_rating="AAA")
    bank_b = make_bank("B", ["US"], total=100, credit_rating="BBB")
    easy = make_project("easy", "US", 100)
    strict = make_project("strict", "US", 100, minimum_credit_rating="AA")

    results = optimize_projects([bank_a, bank_b], [easy, strict], CAPACITY_ONLY)

    assert [(r.project_id, r.recommended_bank_id) for r in results] == [("strict", "A"), ("easy", "B")]


def test_forced_assignment_consumes_capacity_before_automatic_pass():
    bank_a = make_bank("A", ["US"], total=100)
    p1 = make_project("P1", "US", 100)
    p2 = make_project("P2", "US", 10)

    results = optimize_projects([bank_a], [p1, p2], CAPACITY_ONLY, {"P1": "A"})

    assert results[0].project_id == "P1"
    assert results[0].forced is True
    assert results[0].score == FORCED_SCORE
    # A has nothing left for P2
    assert results[1].project_id == "P2"
    assert results[1].recommended_bank_id == ""
    assert results[1].recommended_bank_name == NO_ELIGIBLE_BANK_NAME
    assert results[1].score == 0


def test_forced_assignment_ignores_eligibility():
    """A pinned bank is honored even if it does not operate in the country"""
    bank = make_bank("DE-only", ["DE"], total=50)
    project = make_project("P1", "US", 500, minimum_credit_rating="AAA")

    results = optimize_projects([bank], [project], CAPACITY_ONLY, {"P1": "DE-only"})

    assert len(results) == 1
    assert results[0].recommended_bank_id == "DE-only"
    assert results[0].recommended_bank_name == "Bank DE-only"
    assert results[0].forced is True


def test_unknown_forced_ids_are_skipped():
    bank = make_bank("A", ["US"])
    project = make_project("P1", "US", 10)
    forced = {"ghost-project": "A", "P1": "ghost-bank"}

    results = optimize_projects([bank], [project], CAPACITY_ONLY, forced)

    # P1's pin did not resolve, so it goes through the automatic pass
    assert len(results) == 1
    assert results[0].forced is False
    assert results[0].recommended_bank_id == "A"
    assert unmatched_forced_assignments([bank], [project], forced) == [
        ("ghost-project", "A"),
        ("P1", "ghost-bank"),
    ]


def test_issued_projects_are_never_allocated():
    bank = make_bank("A", ["US"])
    issued = make_project("done", "US", 10, status="Issued", allocated_bank_id="A")
    planned = make_project("todo", "US", 10)

    results = optimize_projects([bank], [issued, planned], CAPACITY_ONLY, {"done": "A"})

    assert [r.project_id for r in results] == ["todo"]
    assert unmatched_forced_assignments([bank], [issued, planned], {"done": "A"}) == [("done", "A")]


def test_no_eligible_bank_is_reported_not_raised():
    project = make_project("P1", "JP", 10)

    results = optimize_projects([make_bank("A", ["US"])], [project], CAPACITY_ONLY)

    assert len(results) == 1
    assert results[0].recommended_bank_id == ""
    assert results[0].recommended_bank_name == NO_ELIGIBLE_BANK_NAME
    assert results[0].score == 0
    assert results[0].forced is False


def test_no_banks_at_all():
    results = optimize_projects([], [make_project("P1", "US", 10)], CAPACITY_ONLY)
    assert results[0].recommended_bank_id == ""


def test_no_projects_returns_empty_list():
    assert optimize_projects([make_bank("A", ["US"])], [], CAPACITY_ONLY) == []


def test_forced_results_come_first_in_map_order():
    banks = [make_bank("A", ["US"], total=1000), make_bank("B", ["US"], total=1000)]
    projects = [make_project(p, "US", 10) for p in ("P1", "P2", "P3")]

    results = optimize_projects(banks, projects, CAPACITY_ONLY, {"P3": "B", "P2": "A"})

    assert [r.project_id for r in results] == ["P3", "P2", "P1"]
    assert [r.forced for r in results] == [True, True, False]


def test_capacity_depletes_across_automatic_assignments():
    """Three equal projects spread across two banks as headroom shrinks"""
    banks = [make_bank("A", ["US"], total=100), make_bank("B", ["US"], total=100)]
    projects = [make_project(p, "US", 40) for p in ("P1", "P2", "P3")]

    results = optimize_projects(banks, projects, CAPACITY_ONLY)

    assert [r.recommended_bank_id for r in results] == ["A", "B", "A"]


def test_caller_banks_are_not_mutated():
    banks = [make_bank("A", ["US"], total=100, used=10)]
    snapshot_before = [replace(b) for b in banks]

    optimize_projects(banks, [make_project("P1", "US", 50)], CAPACITY_ONLY, {"P1": "A"})
    optimize_projects(banks, [make_project("P2", "US", 50)], CAPACITY_ONLY)

    assert banks == snapshot_before


def test_capacity_snapshot_clones_banks():
    original = make_bank("A", ["US"], total=100, used=10)
    snapshot = CapacitySnapshot([original])

    snapshot.consume("A", 25)

    assert snapshot.get("A").used_capacity == 35
    assert snapshot.get("A") is not original
    assert original.used_capacity == 10
    assert snapshot.get("missing") is None
