"""Credit rating ordinal scale shared by banks, projects and the ranking engine"""

from types import MappingProxyType
from typing import List, Mapping, Optional

# S&P-style and Moody's-style ratings mapped onto 0-10
RATING_SCALE: Mapping[str, float] = MappingProxyType({
    "AAA": 10,
    "AA+": 9, "Aa1": 9,
    "AA": 8.5, "Aa2": 8.5,
    "AA-": 8, "Aa3": 8,
    "A+": 7.5, "A1": 7.5,
    "A": 7, "A2": 7,
    "A-": 6.5, "A3": 6.5,
    "BBB+": 6, "Baa1": 6,
    "BBB": 5.5, "Baa2": 5.5,
    "BBB-": 5, "Baa3": 5,
    "BB+": 4.5, "Ba1": 4.5,
    "BB": 4, "Ba2": 4,
    "BB-": 3.5, "Ba3": 3.5,
    "B+": 3, "B1": 3,
    "B": 2.5, "B2": 2.5,
    "B-": 2, "B3": 2,
    "CCC+": 1.5, "Caa1": 1.5,
    "CCC": 1, "Caa2": 1,
    "CCC-": 0.5, "Caa3": 0.5,
    "D": 0,
})

# Middle of the scale, used for unrated banks and unknown labels
DEFAULT_RATING_SCORE = 5.0

CREDIT_RATINGS: List[str] = [
    "AAA", "AA+", "AA", "AA-",
    "A+", "A", "A-",
    "BBB+", "BBB", "BBB-",
    "BB+", "BB", "BB-",
    "B+", "B", "B-",
    "CCC+", "CCC", "CCC-",
    "D",
]


def is_known_rating(rating: str, scale: Mapping[str, float] = RATING_SCALE) -> bool:
    return rating in scale


def rating_to_score(rating: Optional[str], scale: Mapping[str, float] = RATING_SCALE) -> float:
    """Map a rating label to its ordinal value, DEFAULT_RATING_SCORE if absent or unknown"""
    if not rating:
        return DEFAULT_RATING_SCORE
    return float(scale.get(rating, DEFAULT_RATING_SCORE))


def meets_minimum_rating(
    bank_rating: Optional[str],
    minimum_rating: Optional[str],
    scale: Mapping[str, float] = RATING_SCALE,
) -> bool:
    """
    Check a bank's rating against a project's floor.

    No floor always passes; an unrated bank never passes a floor.
    Equal ordinals pass (AA+ and Aa1 are interchangeable).
    """
    if not minimum_rating:
        return True
    if not bank_rating:
        return False
    return rating_to_score(bank_rating, scale) >= rating_to_score(minimum_rating, scale)
