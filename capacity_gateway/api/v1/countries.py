"""/v1/countries - country reference data and per-country bank coverage"""

from typing import Dict, List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from capacity_gateway.api.v1.schemas import (
    CountryCoverageResponse,
    CountrySchema,
    CoverageBankSchema,
    CoverageProjectSchema,
)
from capacity_gateway.infrastructure.database.session import get_db
from capacity_gateway.infrastructure.database.repositories import BankRepository, ProjectRepository
from capacity_gateway.domain.countries import COUNTRIES, REGIONS, country_coverage, get_country

router = APIRouter()


@router.get("/countries", response_model=List[CountrySchema])
def list_countries():
    """Known countries, sorted by name"""
    return sorted(COUNTRIES.values(), key=lambda country: country.name)


@router.get("/countries/regions", response_model=Dict[str, List[str]])
def list_regions():
    return {region: list(codes) for region, codes in REGIONS.items()}


@router.get("/countries/{code}/coverage", response_model=CountryCoverageResponse)
def get_country_coverage(code: str, db: Session = Depends(get_db)):
    """
    Banks able to lend in a country and the country's projects.

    Banks operating GLOBAL count toward every country. Available capacity is
    summed over those banks, overdrawn banks included.
    """
    country = get_country(code.strip().upper())
    if country is None:
        raise HTTPException(status_code=404, detail="Country not found")

    coverage = country_coverage(
        country,
        BankRepository(db).list_domain(),
        ProjectRepository(db).list_domain(),
    )
    local_ids = set(coverage.local_bank_ids)

    return CountryCoverageResponse(
        country=CountrySchema.model_validate(country),
        available_capacity=coverage.available_capacity,
        banks=[
            CoverageBankSchema(
                bank_id=bank.id,
                bank_name=bank.name,
                credit_rating=bank.credit_rating,
                available_capacity=bank.available_capacity,
                is_local_bank=bank.id in local_ids,
            )
            for bank in coverage.banks
        ],
        projects=[
            CoverageProjectSchema(
                project_id=project.id,
                project_name=project.name,
                capacity_needed=project.capacity_needed,
                status=project.status,
                allocated_bank_id=project.allocated_bank_id,
            )
            for project in coverage.projects
        ],
    )
