"""Bank ranking and multi-project optimization endpoints"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from capacity_gateway.api.v1.schemas import (
    AssignmentSchema,
    CommitRequest,
    CommitResponse,
    OptimizationResultSchema,
    OptimizeRequest,
    OptimizeResponse,
    RankedBankSchema,
    RankingResponse,
)
from capacity_gateway.api.dependencies import get_request_id, get_weights
from capacity_gateway.infrastructure.database.session import get_db
from capacity_gateway.infrastructure.database.repositories import (
    BankRepository,
    ProjectRepository,
    project_to_domain,
)
from capacity_gateway.domain.models import Weights
from capacity_gateway.domain.ranking import rank_banks_for_project
from capacity_gateway.domain.optimizer import optimize_projects, planned_projects, unmatched_forced_assignments
from capacity_gateway.domain.exceptions import (
    BankNotFoundError,
    ProjectNotFoundError,
    ProjectNotPlannedError,
)
from capacity_gateway.infrastructure.observability.metrics import (
    allocation_commit_counter,
    assignment_outcome,
    optimizer_duration_histogram,
    record_optimization,
    record_ranking,
)
from capacity_gateway.infrastructure.observability.logging import (
    log_commit,
    log_optimization,
    log_ranking,
    log_skipped_forced_assignment,
)

router = APIRouter()


@router.get("/projects/{project_id}/ranking", response_model=RankingResponse)
def rank_project(
    project_id: str,
    request: Request,
    db: Session = Depends(get_db),
    weights: Weights = Depends(get_weights),
):
    """
    Rank every bank for one planned project using the stored weights.

    Eligible banks are listed first; ineligible ones carry their disqualify
    reasons and a score of 0.
    """
    try:
        project = project_to_domain(ProjectRepository(db).get_project(project_id))
    except ProjectNotFoundError:
        raise HTTPException(status_code=404, detail="Project not found")

    if not project.is_planned:
        raise HTTPException(status_code=409, detail=f"Project is {project.status}")

    banks = BankRepository(db).list_domain()
    ranked = rank_banks_for_project(banks, project, weights)

    eligible_count = sum(1 for r in ranked if r.eligible)
    record_ranking(eligible_count)
    log_ranking(get_request_id(request), project.id, eligible_count, len(ranked))

    return RankingResponse(
        project_id=project.id,
        project_name=project.name,
        banks=[
            RankedBankSchema(
                bank_id=r.id,
                bank_name=r.name,
                credit_rating=r.bank.credit_rating,
                available_capacity=r.available_capacity,
                score=r.score,
                capacity_score=r.capacity_score,
                price_score=r.price_score,
                rating_score=r.rating_score,
                is_local_bank=r.is_local_bank,
                eligible=r.eligible,
                disqualify_reasons=r.disqualify_reasons,
            )
            for r in ranked
        ],
    )


@router.post("/optimize", response_model=OptimizeResponse)
def optimize(
    request: Request,
    request_body: OptimizeRequest = OptimizeRequest(),
    db: Session = Depends(get_db),
    weights: Weights = Depends(get_weights),
):
    """
    Recommend one bank per planned project.

    Forced assignments are honored first; pairs whose project or bank cannot be
    resolved are skipped and reported back. Nothing is persisted: accepted
    results go through POST /v1/optimize/commit.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    banks = BankRepository(db).list_domain()
    projects = ProjectRepository(db).list_domain()
    forced = request_body.forced_assignments

    skipped = unmatched_forced_assignments(banks, projects, forced)
    for project_id, bank_id in skipped:
        log_skipped_forced_assignment(request_id, project_id, bank_id)

    with optimizer_duration_histogram.time():
        results = optimize_projects(banks, projects, weights, forced)

    record_optimization(results)
    outcomes = [assignment_outcome(r) for r in results]
    duration_ms = (time.time() - start_time) * 1000
    log_optimization(
        request_id,
        planned_count=len(planned_projects(projects)),
        forced_count=outcomes.count("forced"),
        assigned_count=outcomes.count("assigned"),
        unassigned_count=outcomes.count("unassigned"),
        duration_ms=duration_ms,
    )

    return OptimizeResponse(
        results=[
            OptimizationResultSchema(
                project_id=r.project_id,
                project_name=r.project_name,
                recommended_bank_id=r.recommended_bank_id,
                recommended_bank_name=r.recommended_bank_name,
                score=r.score,
                forced=r.forced,
            )
            for r in results
        ],
        skipped_forced_assignments=[
            AssignmentSchema(project_id=project_id, bank_id=bank_id) for project_id, bank_id in skipped
        ],
    )


@router.post("/optimize/commit", response_model=CommitResponse)
def commit_allocations(
    request_body: CommitRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """
    Write accepted recommendations back to their projects.

    Each pair sets the project's allocated bank. Pairs naming an unknown bank,
    an unknown project or a project that is no longer Planned are skipped.
    """
    request_id = get_request_id(request)
    bank_repo = BankRepository(db)
    project_repo = ProjectRepository(db)

    committed = []
    skipped = []
    for assignment in request_body.assignments:
        try:
            bank_repo.get_bank(assignment.bank_id)
            project_repo.allocate(assignment.project_id, assignment.bank_id)
            committed.append(assignment)
        except (BankNotFoundError, ProjectNotFoundError, ProjectNotPlannedError) as e:
            logging.warning(f"Allocation skipped: {e}", extra={"request_id": request_id})
            skipped.append(assignment)

    db.commit()

    allocation_commit_counter.inc(len(committed))
    log_commit(request_id, len(committed), len(skipped))

    return CommitResponse(committed=committed, skipped=skipped)
