"""Bank ranking engine - hard eligibility filters and weighted soft scoring"""

import math
from typing import List, Mapping, Sequence

from capacity_gateway.domain.models import (
    GLOBAL_COUNTRY,
    REASON_CAPACITY,
    REASON_COUNTRY,
    REASON_RATING,
    REASON_SENSITIVE,
    REASON_TENOR,
    Bank,
    Project,
    RankedBank,
    Weights,
)
from capacity_gateway.domain.ratings import RATING_SCALE, meets_minimum_rating, rating_to_score

# Price normalization: 0bps scores 1.0, PRICE_CEILING_BPS and above score 0.0
PRICE_CEILING_BPS = 500
NEUTRAL_PRICE_SCORE = 0.5

LOCAL_BANK_BONUS = 0.05


def _round3(value: float) -> float:
    # Half-up rounding to 3 decimals
    return math.floor(value * 1000 + 0.5) / 1000


def operates_in_country(bank: Bank, country: str) -> bool:
    return GLOBAL_COUNTRY in bank.countries or country in bank.countries


def has_sensitive_conflict(bank: Bank, project: Project) -> bool:
    """A conflict needs both sides non-empty and at least one shared label"""
    if not project.project_type or not bank.sensitive_subjects:
        return False
    return any(subject in bank.sensitive_subjects for subject in project.project_type)


def meets_tenor(bank: Bank, project: Project) -> bool:
    if project.tenor_required is None or bank.max_tenor is None:
        return True
    return bank.max_tenor >= project.tenor_required


def is_local_bank(bank: Bank, country: str) -> bool:
    # Qualifying only through GLOBAL does not make a bank local
    return country in bank.countries and GLOBAL_COUNTRY not in bank.countries


def disqualify_reasons(
    bank: Bank,
    project: Project,
    rating_scale: Mapping[str, float] = RATING_SCALE,
) -> List[str]:
    """
    Run every hard filter and collect the reasons a bank cannot serve a project.

    All checks run regardless of earlier failures, so several reasons may be
    returned. An empty list means the bank is eligible.
    """
    reasons = []
    if not operates_in_country(bank, project.country):
        reasons.append(REASON_COUNTRY)
    if has_sensitive_conflict(bank, project):
        reasons.append(REASON_SENSITIVE)
    if not meets_tenor(bank, project):
        reasons.append(REASON_TENOR)
    if not meets_minimum_rating(bank.credit_rating, project.minimum_credit_rating, rating_scale):
        reasons.append(REASON_RATING)
    if bank.available_capacity <= 0:
        reasons.append(REASON_CAPACITY)
    return reasons


def is_eligible(
    bank: Bank,
    project: Project,
    rating_scale: Mapping[str, float] = RATING_SCALE,
) -> bool:
    return not disqualify_reasons(bank, project, rating_scale)


def score_bank(
    bank: Bank,
    project: Project,
    weights: Weights,
    rating_scale: Mapping[str, float] = RATING_SCALE,
) -> RankedBank:
    """
    Evaluate one bank against one project.

    Components (each clamped to >= 0 before weighting):
    - capacity: headroom beyond the need, relative to the bank's total size
    - price: linear, 0bps -> 1.0, 500bps -> 0.0, neutral 0.5 when unpriced
    - rating: ordinal / 10, neutral 0.5 when unrated

    Local banks get a flat 0.05 bonus. Ineligible banks score exactly 0.
    """
    reasons = disqualify_reasons(bank, project, rating_scale)
    eligible = not reasons
    available = bank.available_capacity

    if bank.total_capacity > 0:
        capacity_score = max(0.0, (available - project.capacity_needed) / bank.total_capacity)
    else:
        capacity_score = 0.0

    if bank.average_price is not None:
        price_score = max(0.0, 1 - bank.average_price / PRICE_CEILING_BPS)
    else:
        price_score = NEUTRAL_PRICE_SCORE

    rating_score = rating_to_score(bank.credit_rating, rating_scale) / 10

    local = is_local_bank(bank, project.country)
    local_bonus = LOCAL_BANK_BONUS if local else 0.0

    if eligible:
        score = (
            weights.capacity_headroom * capacity_score
            + weights.price_competitiveness * price_score
            + weights.credit_rating * rating_score
            + local_bonus
        )
    else:
        score = 0.0

    return RankedBank(
        bank=bank,
        available_capacity=available,
        score=_round3(score),
        capacity_score=_round3(capacity_score),
        price_score=_round3(price_score),
        rating_score=_round3(rating_score),
        is_local_bank=local,
        eligible=eligible,
        disqualify_reasons=reasons,
    )


def rank_banks_for_project(
    banks: Sequence[Bank],
    project: Project,
    weights: Weights,
    rating_scale: Mapping[str, float] = RATING_SCALE,
) -> List[RankedBank]:
    """
    Score every bank for a project and order the result.

    Eligible banks come first, then ineligible ones; each group is sorted by
    descending score. Ties keep the input order.
    """
    ranked = [score_bank(bank, project, weights, rating_scale) for bank in banks]
    return sorted(ranked, key=lambda r: (not r.eligible, -r.score))
