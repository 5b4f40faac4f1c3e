"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from typing import List, Optional

# Pseudo-country code for banks operating everywhere
GLOBAL_COUNTRY = "GLOBAL"

# Project lifecycle
PLANNED = "Planned"
ISSUED = "Issued"
PROJECT_STATUSES = (PLANNED, ISSUED)

DEFAULT_AVERAGE_PRICE_BPS = 50

# Optimizer sentinels
FORCED_SCORE = -1
NO_ELIGIBLE_BANK_NAME = "No eligible bank"

# Disqualify reasons, in evaluation order
REASON_COUNTRY = "Does not operate in project country"
REASON_SENSITIVE = "Sensitive subject conflict"
REASON_TENOR = "Max tenor insufficient"
REASON_RATING = "Credit rating below minimum"
REASON_CAPACITY = "No available capacity"


@dataclass
class Bank:
    """Credit facility offered by a bank"""

    id: str
    name: str
    total_capacity: float
    used_capacity: float
    countries: List[str] = field(default_factory=list)
    credit_rating: Optional[str] = None
    max_tenor: Optional[float] = None  # years, None = unlimited
    average_price: Optional[float] = None  # basis points
    sensitive_subjects: List[str] = field(default_factory=list)

    @property
    def available_capacity(self) -> float:
        # May be negative when used capacity was set above the total
        return self.total_capacity - self.used_capacity


@dataclass
class Project:
    """Financing need waiting for (or holding) a bank allocation"""

    id: str
    name: str
    country: str
    capacity_needed: float
    tenor_required: Optional[float] = None
    project_type: List[str] = field(default_factory=list)
    minimum_credit_rating: Optional[str] = None
    status: str = PLANNED  # "Planned" or "Issued"
    allocated_bank_id: Optional[str] = None

    @property
    def is_planned(self) -> bool:
        return self.status == PLANNED


@dataclass
class Weights:
    """Relative importance of each soft scoring component"""

    capacity_headroom: float = 0.5
    price_competitiveness: float = 0.25
    credit_rating: float = 0.25

    def normalized(self) -> "Weights":
        """
        Rescale proportionally so the three weights sum to 1.0.

        All-zero weights are returned unchanged.
        """
        total = self.capacity_headroom + self.price_competitiveness + self.credit_rating
        if total <= 0:
            return Weights(self.capacity_headroom, self.price_competitiveness, self.credit_rating)
        return Weights(
            capacity_headroom=self.capacity_headroom / total,
            price_competitiveness=self.price_competitiveness / total,
            credit_rating=self.credit_rating / total,
        )


@dataclass
class RankedBank:
    """Scored view of one bank for one project, never persisted"""

    bank: Bank
    available_capacity: float
    score: float
    capacity_score: float
    price_score: float
    rating_score: float
    is_local_bank: bool
    eligible: bool
    disqualify_reasons: List[str] = field(default_factory=list)

    @property
    def id(self) -> str:
        return self.bank.id

    @property
    def name(self) -> str:
        return self.bank.name


@dataclass
class OptimizationResult:
    """One project's outcome from an allocator run"""

    project_id: str
    project_name: str
    recommended_bank_id: str  # "" when no bank is eligible
    recommended_bank_name: str
    score: float  # FORCED_SCORE for pinned assignments
    forced: bool = False
