"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from capacity_gateway.domain.models import Weights
from capacity_gateway.infrastructure.database.repositories import SettingsRepository
from capacity_gateway.infrastructure.database.session import get_db


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_weights(db: Session = Depends(get_db)) -> Weights:
    """Provide the stored ranking weights"""
    return SettingsRepository(db).get_weights()
