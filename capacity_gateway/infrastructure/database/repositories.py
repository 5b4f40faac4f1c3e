"""Data access layer for banks, projects and settings"""

from datetime import date
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
from capacity_gateway.config import settings
from capacity_gateway.infrastructure.database.models import BankRecord, ProjectRecord, SettingsRecord
from capacity_gateway.domain.models import (
    DEFAULT_AVERAGE_PRICE_BPS,
    ISSUED,
    PLANNED,
    Bank,
    Project,
    Weights,
)
from capacity_gateway.domain.exceptions import (
    AllocationRequiredError,
    BankNotFoundError,
    ProjectNotFoundError,
    ProjectNotPlannedError,
)


BANK_REQUIRED = {"name", "total_capacity", "used_capacity"}
BANK_LISTS = {"countries", "sensitive_subjects"}
PROJECT_REQUIRED = {"name", "country", "capacity_needed", "status"}
PROJECT_LISTS = {"project_type"}


def _clean_changes(changes: Dict[str, Any], required: set, lists: set) -> Dict[str, Any]:
    cleaned = {}
    for key, value in changes.items():
        if value is None and key in required:
            continue
        if value is None and key in lists:
            value = []
        cleaned[key] = value
    return cleaned


def bank_to_domain(record: BankRecord) -> Bank:
    return Bank(
        id=record.id,
        name=record.name,
        total_capacity=record.total_capacity,
        used_capacity=record.used_capacity,
        countries=list(record.countries or []),
        credit_rating=record.credit_rating,
        max_tenor=record.max_tenor,
        average_price=record.average_price,
        sensitive_subjects=list(record.sensitive_subjects or []),
    )


def project_to_domain(record: ProjectRecord) -> Project:
    return Project(
        id=record.id,
        name=record.name,
        country=record.country,
        capacity_needed=record.capacity_needed,
        tenor_required=record.tenor_required,
        project_type=list(record.project_type or []),
        minimum_credit_rating=record.minimum_credit_rating,
        status=record.status,
        allocated_bank_id=record.allocated_bank_id,
    )


class BankRepository:
    """Repository for banks"""

    def __init__(self, db: Session):
        self.db = db

    def list_banks(self) -> List[BankRecord]:
        return self.db.query(BankRecord).order_by(BankRecord.name).all()

    def list_domain(self) -> List[Bank]:
        return [bank_to_domain(b) for b in self.list_banks()]

    def get_bank(self, bank_id: str) -> BankRecord:
        """Fetch a bank or raise BankNotFoundError"""
        bank = self.db.query(BankRecord).filter(BankRecord.id == bank_id).first()
        if bank is None:
            raise BankNotFoundError(f"Bank {bank_id} not found")
        return bank

    def create_bank(self, fields: Dict[str, Any]) -> BankRecord:
        """Persist a new bank; average price defaults to 50bps"""
        data = dict(fields)
        if data.get("average_price") is None:
            data["average_price"] = DEFAULT_AVERAGE_PRICE_BPS
        data["countries"] = data.get("countries") or []
        data["sensitive_subjects"] = data.get("sensitive_subjects") or []

        db_bank = BankRecord(**data)
        self.db.add(db_bank)
        self.db.flush()
        return db_bank

    def update_bank(self, bank_id: str, changes: Dict[str, Any]) -> BankRecord:
        """Apply partial changes; an explicit null clears optional fields only"""
        db_bank = self.get_bank(bank_id)
        for key, value in _clean_changes(changes, BANK_REQUIRED, BANK_LISTS).items():
            setattr(db_bank, key, value)
        self.db.flush()
        return db_bank

    def delete_bank(self, bank_id: str) -> None:
        self.db.delete(self.get_bank(bank_id))
        self.db.flush()


class ProjectRepository:
    """Repository for projects"""

    def __init__(self, db: Session):
        self.db = db

    def list_projects(self, status: Optional[str] = None) -> List[ProjectRecord]:
        query = self.db.query(ProjectRecord)
        if status is not None:
            query = query.filter(ProjectRecord.status == status)
        return query.order_by(ProjectRecord.name).all()

    def list_domain(self) -> List[Project]:
        return [project_to_domain(p) for p in self.list_projects()]

    def get_project(self, project_id: str) -> ProjectRecord:
        """Fetch a project or raise ProjectNotFoundError"""
        project = self.db.query(ProjectRecord).filter(ProjectRecord.id == project_id).first()
        if project is None:
            raise ProjectNotFoundError(f"Project {project_id} not found")
        return project

    def create_project(self, fields: Dict[str, Any]) -> ProjectRecord:
        data = dict(fields)
        data["status"] = data.get("status") or PLANNED
        data["project_type"] = data.get("project_type") or []
        if data["status"] == ISSUED and not data.get("allocated_bank_id"):
            raise AllocationRequiredError("A bank must be allocated before marking as issued")

        db_project = ProjectRecord(**data)
        self.db.add(db_project)
        self.db.flush()
        return db_project

    def update_project(self, project_id: str, changes: Dict[str, Any]) -> ProjectRecord:
        db_project = self.get_project(project_id)
        changes = _clean_changes(changes, PROJECT_REQUIRED, PROJECT_LISTS)
        status = changes.get("status", db_project.status)
        allocated = changes.get("allocated_bank_id", db_project.allocated_bank_id)
        if status == ISSUED and not allocated:
            raise AllocationRequiredError("A bank must be allocated before marking as issued")

        for key, value in changes.items():
            setattr(db_project, key, value)
        self.db.flush()
        return db_project

    def delete_project(self, project_id: str) -> None:
        self.db.delete(self.get_project(project_id))
        self.db.flush()

    def issue_project(
        self,
        project_id: str,
        issuance_date: Optional[date] = None,
        allocated_bank_id: Optional[str] = None,
    ) -> ProjectRecord:
        """
        Transition a project to Issued.

        Raises:
            AllocationRequiredError: Neither the project nor the request names a bank
        """
        db_project = self.get_project(project_id)
        if not db_project.allocated_bank_id and not allocated_bank_id:
            raise AllocationRequiredError("A bank must be allocated before marking as issued")

        db_project.status = ISSUED
        db_project.issuance_date = issuance_date or date.today()
        if allocated_bank_id:
            db_project.allocated_bank_id = allocated_bank_id
        self.db.flush()
        return db_project

    def allocate(self, project_id: str, bank_id: str) -> ProjectRecord:
        """
        Record an accepted bank for a planned project.

        Raises:
            ProjectNotFoundError, ProjectNotPlannedError
        """
        db_project = self.get_project(project_id)
        if db_project.status != PLANNED:
            raise ProjectNotPlannedError(f"Project {project_id} is {db_project.status}")
        db_project.allocated_bank_id = bank_id
        self.db.flush()
        return db_project


class SettingsRepository:
    """Repository for the single ranking settings row"""

    def __init__(self, db: Session):
        self.db = db

    def get_settings(self) -> SettingsRecord:
        """Load settings, creating the default row on first access"""
        record = self.db.query(SettingsRecord).filter(SettingsRecord.id == 1).first()
        if record is None:
            record = SettingsRecord(
                id=1,
                capacity_headroom=settings.default_weight_capacity_headroom,
                price_competitiveness=settings.default_weight_price_competitiveness,
                credit_rating=settings.default_weight_credit_rating,
                sensitive_subjects=list(settings.default_sensitive_subjects),
            )
            self.db.add(record)
            self.db.flush()
        return record

    def get_weights(self) -> Weights:
        record = self.get_settings()
        return Weights(
            capacity_headroom=record.capacity_headroom,
            price_competitiveness=record.price_competitiveness,
            credit_rating=record.credit_rating,
        )

    def update_settings(
        self,
        weights: Optional[Weights] = None,
        sensitive_subjects: Optional[List[str]] = None,
    ) -> SettingsRecord:
        record = self.get_settings()
        if weights is not None:
            record.capacity_headroom = weights.capacity_headroom
            record.price_competitiveness = weights.price_competitiveness
            record.credit_rating = weights.credit_rating
        if sensitive_subjects is not None:
            record.sensitive_subjects = list(sensitive_subjects)
        self.db.flush()
        return record
