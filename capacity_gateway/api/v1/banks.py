"""/v1/banks - bank facility records"""

import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.orm import Session

from capacity_gateway.api.v1.schemas import BankCreate, BankUpdate, BankResponse
from capacity_gateway.api.dependencies import get_request_id
from capacity_gateway.infrastructure.database.session import get_db
from capacity_gateway.infrastructure.database.repositories import BankRepository
from capacity_gateway.domain.exceptions import BankNotFoundError

router = APIRouter()


@router.get("/banks", response_model=List[BankResponse])
def list_banks(db: Session = Depends(get_db)):
    return BankRepository(db).list_banks()


@router.get("/banks/{bank_id}", response_model=BankResponse)
def get_bank(bank_id: str, db: Session = Depends(get_db)):
    try:
        return BankRepository(db).get_bank(bank_id)
    except BankNotFoundError:
        raise HTTPException(status_code=404, detail="Bank not found")


@router.post("/banks", response_model=BankResponse, status_code=201)
def create_bank(request_body: BankCreate, request: Request, db: Session = Depends(get_db)):
    """Create a bank; average price defaults to 50bps when omitted"""
    db_bank = BankRepository(db).create_bank(request_body.model_dump())
    db.commit()
    db.refresh(db_bank)
    logging.info("Bank created", extra={"request_id": get_request_id(request), "bank_id": db_bank.id})
    return db_bank


@router.put("/banks/{bank_id}", response_model=BankResponse)
def update_bank(bank_id: str, request_body: BankUpdate, request: Request, db: Session = Depends(get_db)):
    """Apply the supplied fields; the bank id is immutable"""
    try:
        db_bank = BankRepository(db).update_bank(bank_id, request_body.model_dump(exclude_unset=True))
    except BankNotFoundError:
        db.rollback()
        raise HTTPException(status_code=404, detail="Bank not found")

    db.commit()
    db.refresh(db_bank)
    logging.info("Bank updated", extra={"request_id": get_request_id(request), "bank_id": bank_id})
    return db_bank


@router.delete("/banks/{bank_id}", status_code=204)
def delete_bank(bank_id: str, request: Request, db: Session = Depends(get_db)):
    try:
        BankRepository(db).delete_bank(bank_id)
    except BankNotFoundError:
        db.rollback()
        raise HTTPException(status_code=404, detail="Bank not found")

    db.commit()
    logging.info("Bank deleted", extra={"request_id": get_request_id(request), "bank_id": bank_id})
    return Response(status_code=204)
