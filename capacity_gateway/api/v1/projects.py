"""/v1/projects - financing needs and their lifecycle"""

import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from sqlalchemy.orm import Session

from capacity_gateway.api.v1.schemas import (
    IssueRequest,
    ProjectCreate,
    ProjectResponse,
    ProjectStatus,
    ProjectUpdate,
)
from capacity_gateway.api.dependencies import get_request_id
from capacity_gateway.infrastructure.database.session import get_db
from capacity_gateway.infrastructure.database.repositories import BankRepository, ProjectRepository
from capacity_gateway.domain.exceptions import (
    AllocationRequiredError,
    BankNotFoundError,
    ProjectNotFoundError,
)

router = APIRouter()


@router.get("/projects", response_model=List[ProjectResponse])
def list_projects(
    status: Optional[ProjectStatus] = Query(None, description="Filter by lifecycle status"),
    db: Session = Depends(get_db),
):
    return ProjectRepository(db).list_projects(status=status)


@router.get("/projects/{project_id}", response_model=ProjectResponse)
def get_project(project_id: str, db: Session = Depends(get_db)):
    try:
        return ProjectRepository(db).get_project(project_id)
    except ProjectNotFoundError:
        raise HTTPException(status_code=404, detail="Project not found")


@router.post("/projects", response_model=ProjectResponse, status_code=201)
def create_project(request_body: ProjectCreate, request: Request, db: Session = Depends(get_db)):
    """Create a project, Planned unless stated otherwise"""
    try:
        if request_body.allocated_bank_id:
            BankRepository(db).get_bank(request_body.allocated_bank_id)
        db_project = ProjectRepository(db).create_project(request_body.model_dump())
    except BankNotFoundError:
        db.rollback()
        raise HTTPException(status_code=404, detail="Bank not found")
    except AllocationRequiredError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))

    db.commit()
    db.refresh(db_project)
    logging.info("Project created", extra={"request_id": get_request_id(request), "project_id": db_project.id})
    return db_project


@router.put("/projects/{project_id}", response_model=ProjectResponse)
def update_project(
    project_id: str,
    request_body: ProjectUpdate,
    request: Request,
    db: Session = Depends(get_db),
):
    try:
        if request_body.allocated_bank_id:
            BankRepository(db).get_bank(request_body.allocated_bank_id)
        db_project = ProjectRepository(db).update_project(project_id, request_body.model_dump(exclude_unset=True))
    except ProjectNotFoundError:
        db.rollback()
        raise HTTPException(status_code=404, detail="Project not found")
    except BankNotFoundError:
        db.rollback()
        raise HTTPException(status_code=404, detail="Bank not found")
    except AllocationRequiredError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))

    db.commit()
    db.refresh(db_project)
    logging.info("Project updated", extra={"request_id": get_request_id(request), "project_id": project_id})
    return db_project


@router.delete("/projects/{project_id}", status_code=204)
def delete_project(project_id: str, request: Request, db: Session = Depends(get_db)):
    try:
        ProjectRepository(db).delete_project(project_id)
    except ProjectNotFoundError:
        db.rollback()
        raise HTTPException(status_code=404, detail="Project not found")

    db.commit()
    logging.info("Project deleted", extra={"request_id": get_request_id(request), "project_id": project_id})
    return Response(status_code=204)


@router.post("/projects/{project_id}/issue", response_model=ProjectResponse)
def issue_project(
    project_id: str,
    request: Request,
    request_body: Optional[IssueRequest] = None,
    db: Session = Depends(get_db),
):
    """
    Mark a project as Issued.

    Requires an allocated bank, either already on the project or supplied in
    the body. Issued projects drop out of ranking and optimization.
    """
    body = request_body or IssueRequest()
    request_id = get_request_id(request)

    try:
        if body.allocated_bank_id:
            BankRepository(db).get_bank(body.allocated_bank_id)
        db_project = ProjectRepository(db).issue_project(
            project_id,
            issuance_date=body.issuance_date,
            allocated_bank_id=body.allocated_bank_id,
        )
    except ProjectNotFoundError:
        db.rollback()
        raise HTTPException(status_code=404, detail="Project not found")
    except BankNotFoundError:
        db.rollback()
        raise HTTPException(status_code=404, detail="Bank not found")
    except AllocationRequiredError as e:
        db.rollback()
        logging.warning(f"Issue rejected: {e}", extra={"request_id": request_id, "project_id": project_id})
        raise HTTPException(status_code=400, detail=str(e))

    db.commit()
    db.refresh(db_project)
    logging.info(
        "Project issued",
        extra={
            "request_id": request_id,
            "project_id": project_id,
            "bank_id": db_project.allocated_bank_id,
        },
    )
    return db_project
