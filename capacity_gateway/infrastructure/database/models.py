"""SQLAlchemy ORM models for banks, projects and ranking settings"""

import uuid
from sqlalchemy import Column, String, Float, DateTime, Date, Integer, Text, JSON
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


class BankRecord(Base):
    """Bank credit facility"""

    __tablename__ = "bank"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(Text, nullable=False)
    logo_url = Column(Text, nullable=True)
    credit_rating = Column(String(8), nullable=True)
    total_capacity = Column(Float, nullable=False)
    used_capacity = Column(Float, nullable=False, default=0)
    max_tenor = Column(Float, nullable=True)
    average_price = Column(Float, nullable=True)
    countries = Column(JSON, nullable=False, default=list)
    sensitive_subjects = Column(JSON, nullable=False, default=list)
    last_updated = Column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    @property
    def available_capacity(self) -> float:
        return self.total_capacity - self.used_capacity


class ProjectRecord(Base):
    """Financing need, Planned until issued against an allocated bank"""

    __tablename__ = "project"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(Text, nullable=False)
    country = Column(String(8), nullable=False, index=True)
    capacity_needed = Column(Float, nullable=False)
    tenor_required = Column(Float, nullable=True)
    project_type = Column(JSON, nullable=False, default=list)
    minimum_credit_rating = Column(String(8), nullable=True)
    status = Column(String(16), nullable=False, default="Planned", index=True)
    planned_issuance_date = Column(Date, nullable=True)
    issuance_date = Column(Date, nullable=True)
    # Plain id, not a foreign key: deleting a bank leaves past allocations intact
    allocated_bank_id = Column(String(36), nullable=True)


class SettingsRecord(Base):
    """Single-row ranking configuration"""

    __tablename__ = "app_settings"

    id = Column(Integer, primary_key=True, default=1)
    capacity_headroom = Column(Float, nullable=False)
    price_competitiveness = Column(Float, nullable=False)
    credit_rating = Column(Float, nullable=False)
    sensitive_subjects = Column(JSON, nullable=False, default=list)
