"""/v1/settings and /v1/ratings - ranking configuration and reference data"""

import logging
from typing import List
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from capacity_gateway.api.v1.schemas import RatingSchema, SettingsResponse, SettingsUpdate, WeightsSchema
from capacity_gateway.api.dependencies import get_request_id
from capacity_gateway.infrastructure.database.session import get_db
from capacity_gateway.infrastructure.database.models import SettingsRecord
from capacity_gateway.infrastructure.database.repositories import SettingsRepository
from capacity_gateway.domain.models import Weights
from capacity_gateway.domain.ratings import RATING_SCALE

router = APIRouter()


def _to_response(record: SettingsRecord) -> SettingsResponse:
    return SettingsResponse(
        weights=WeightsSchema(
            capacity_headroom=record.capacity_headroom,
            price_competitiveness=record.price_competitiveness,
            credit_rating=record.credit_rating,
        ),
        sensitive_subjects=list(record.sensitive_subjects or []),
    )


@router.get("/settings", response_model=SettingsResponse)
def get_settings(db: Session = Depends(get_db)):
    record = SettingsRepository(db).get_settings()
    db.commit()
    return _to_response(record)


@router.put("/settings", response_model=SettingsResponse)
def update_settings(request_body: SettingsUpdate, request: Request, db: Session = Depends(get_db)):
    """
    Update ranking weights and/or the sensitive-subject vocabulary.

    Weights are rescaled proportionally to sum to 1.0 (left as given when
    they are all zero).
    """
    weights = None
    if request_body.weights is not None:
        weights = Weights(**request_body.weights.model_dump()).normalized()

    record = SettingsRepository(db).update_settings(
        weights=weights,
        sensitive_subjects=request_body.sensitive_subjects,
    )
    db.commit()
    logging.info("Settings updated", extra={"request_id": get_request_id(request)})
    return _to_response(record)


@router.get("/ratings", response_model=List[RatingSchema])
def list_ratings():
    """Rating scale, strongest first"""
    ordered = sorted(RATING_SCALE.items(), key=lambda item: -item[1])
    return [RatingSchema(rating=rating, score=score) for rating, score in ordered]
