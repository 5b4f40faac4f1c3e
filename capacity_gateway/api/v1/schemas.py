"""Pydantic schemas for API request/response validation"""

from datetime import date, datetime
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from capacity_gateway.domain.countries import is_known_country
from capacity_gateway.domain.ratings import is_known_rating

ProjectStatus = Literal["Planned", "Issued"]

# Request bodies reject Infinity/NaN in numeric fields
STRICT_NUMBERS = ConfigDict(allow_inf_nan=False)


def _check_rating(value: Optional[str]) -> Optional[str]:
    if value is not None and not is_known_rating(value):
        raise ValueError(f"Unknown credit rating: {value}")
    return value


def _check_bank_countries(values: Optional[List[str]]) -> Optional[List[str]]:
    if values is None:
        return None
    codes = [v.strip().upper() for v in values]
    unknown = [code for code in codes if not is_known_country(code, allow_global=True)]
    if unknown:
        raise ValueError(f"Unknown country codes: {', '.join(unknown)}")
    return codes


def _check_project_country(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    code = value.strip().upper()
    if not is_known_country(code):
        raise ValueError(f"Unknown country code: {code}")
    return code


class BankCreate(BaseModel):
    """Request body for POST /v1/banks"""

    model_config = STRICT_NUMBERS

    name: str = Field(..., min_length=1)
    logo_url: Optional[str] = None
    credit_rating: Optional[str] = None
    total_capacity: float = Field(..., ge=0, description="Total facility size")
    used_capacity: float = Field(0, ge=0, description="Capacity already committed")
    max_tenor: Optional[float] = Field(None, ge=0, description="Longest tenor in years, omit for unlimited")
    average_price: Optional[float] = Field(None, ge=0, description="Average price in bps, defaults to 50")
    countries: List[str] = Field(default_factory=list, description="ISO codes or GLOBAL")
    sensitive_subjects: List[str] = Field(default_factory=list)

    @field_validator("credit_rating")
    @classmethod
    def check_rating(cls, value: Optional[str]) -> Optional[str]:
        return _check_rating(value)

    @field_validator("countries")
    @classmethod
    def check_countries(cls, values: Optional[List[str]]) -> Optional[List[str]]:
        return _check_bank_countries(values)


class BankUpdate(BaseModel):
    """Request body for PUT /v1/banks/{bank_id}; omitted fields are left unchanged"""

    model_config = STRICT_NUMBERS

    name: Optional[str] = Field(None, min_length=1)
    logo_url: Optional[str] = None
    credit_rating: Optional[str] = None
    total_capacity: Optional[float] = Field(None, ge=0)
    used_capacity: Optional[float] = Field(None, ge=0)
    max_tenor: Optional[float] = Field(None, ge=0)
    average_price: Optional[float] = Field(None, ge=0)
    countries: Optional[List[str]] = None
    sensitive_subjects: Optional[List[str]] = None

    @field_validator("credit_rating")
    @classmethod
    def check_rating(cls, value: Optional[str]) -> Optional[str]:
        return _check_rating(value)

    @field_validator("countries")
    @classmethod
    def check_countries(cls, values: Optional[List[str]]) -> Optional[List[str]]:
        return _check_bank_countries(values)


class BankResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    logo_url: Optional[str] = None
    credit_rating: Optional[str] = None
    total_capacity: float
    used_capacity: float
    available_capacity: float
    max_tenor: Optional[float] = None
    average_price: Optional[float] = None
    countries: List[str]
    sensitive_subjects: List[str]
    last_updated: Optional[datetime] = None


class ProjectCreate(BaseModel):
    """Request body for POST /v1/projects"""

    model_config = STRICT_NUMBERS

    name: str = Field(..., min_length=1)
    country: str = Field(..., min_length=2, description="ISO country code")
    capacity_needed: float = Field(..., gt=0)
    tenor_required: Optional[float] = Field(None, ge=0)
    project_type: List[str] = Field(default_factory=list, description="Sensitive subjects the project touches")
    minimum_credit_rating: Optional[str] = None
    status: ProjectStatus = "Planned"
    planned_issuance_date: Optional[date] = None
    issuance_date: Optional[date] = None
    allocated_bank_id: Optional[str] = None

    @field_validator("minimum_credit_rating")
    @classmethod
    def check_rating(cls, value: Optional[str]) -> Optional[str]:
        return _check_rating(value)

    @field_validator("country")
    @classmethod
    def check_country(cls, value: str) -> str:
        return _check_project_country(value)


class ProjectUpdate(BaseModel):
    """Request body for PUT /v1/projects/{project_id}; omitted fields are left unchanged"""

    model_config = STRICT_NUMBERS

    name: Optional[str] = Field(None, min_length=1)
    country: Optional[str] = Field(None, min_length=2)
    capacity_needed: Optional[float] = Field(None, gt=0)
    tenor_required: Optional[float] = Field(None, ge=0)
    project_type: Optional[List[str]] = None
    minimum_credit_rating: Optional[str] = None
    status: Optional[ProjectStatus] = None
    planned_issuance_date: Optional[date] = None
    issuance_date: Optional[date] = None
    allocated_bank_id: Optional[str] = None

    @field_validator("minimum_credit_rating")
    @classmethod
    def check_rating(cls, value: Optional[str]) -> Optional[str]:
        return _check_rating(value)

    @field_validator("country")
    @classmethod
    def check_country(cls, value: Optional[str]) -> Optional[str]:
        return _check_project_country(value)


class ProjectResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    country: str
    capacity_needed: float
    tenor_required: Optional[float] = None
    project_type: List[str]
    minimum_credit_rating: Optional[str] = None
    status: ProjectStatus
    planned_issuance_date: Optional[date] = None
    issuance_date: Optional[date] = None
    allocated_bank_id: Optional[str] = None


class IssueRequest(BaseModel):
    """Request body for POST /v1/projects/{project_id}/issue"""

    issuance_date: Optional[date] = None
    allocated_bank_id: Optional[str] = None


class RankedBankSchema(BaseModel):
    """One bank's standing for a project"""

    bank_id: str
    bank_name: str
    credit_rating: Optional[str] = None
    available_capacity: float
    score: float
    capacity_score: float
    price_score: float
    rating_score: float
    is_local_bank: bool
    eligible: bool
    disqualify_reasons: List[str]


class RankingResponse(BaseModel):
    """Response for GET /v1/projects/{project_id}/ranking"""

    project_id: str
    project_name: str
    banks: List[RankedBankSchema]


class OptimizeRequest(BaseModel):
    """Request body for POST /v1/optimize"""

    forced_assignments: Dict[str, str] = Field(
        default_factory=dict, description="Project id -> bank id pinned by the user"
    )


class OptimizationResultSchema(BaseModel):
    project_id: str
    project_name: str
    recommended_bank_id: str
    recommended_bank_name: str
    score: float
    forced: bool = False


class AssignmentSchema(BaseModel):
    project_id: str
    bank_id: str


class OptimizeResponse(BaseModel):
    """Response for POST /v1/optimize"""

    results: List[OptimizationResultSchema]
    skipped_forced_assignments: List[AssignmentSchema]


class CommitRequest(BaseModel):
    """Request body for POST /v1/optimize/commit - the accepted results only"""

    assignments: List[AssignmentSchema]


class CommitResponse(BaseModel):
    committed: List[AssignmentSchema]
    skipped: List[AssignmentSchema]


class WeightsSchema(BaseModel):
    model_config = STRICT_NUMBERS

    capacity_headroom: float = Field(..., ge=0)
    price_competitiveness: float = Field(..., ge=0)
    credit_rating: float = Field(..., ge=0)


class SettingsResponse(BaseModel):
    """Response for GET/PUT /v1/settings"""

    weights: WeightsSchema
    sensitive_subjects: List[str]


class SettingsUpdate(BaseModel):
    """Request body for PUT /v1/settings; omitted sections are left unchanged"""

    weights: Optional[WeightsSchema] = None
    sensitive_subjects: Optional[List[str]] = None


class RatingSchema(BaseModel):
    rating: str
    score: float


class CountrySchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    code: str
    name: str
    region: str


class CoverageBankSchema(BaseModel):
    bank_id: str
    bank_name: str
    credit_rating: Optional[str] = None
    available_capacity: float
    is_local_bank: bool


class CoverageProjectSchema(BaseModel):
    project_id: str
    project_name: str
    capacity_needed: float
    status: ProjectStatus
    allocated_bank_id: Optional[str] = None


class CountryCoverageResponse(BaseModel):
    """Response for GET /v1/countries/{code}/coverage"""

    country: CountrySchema
    available_capacity: float
    banks: List[CoverageBankSchema]
    projects: List[CoverageProjectSchema]
