"""Unit tests for the credit rating scale"""

import pytest
from capacity_gateway.domain.ratings import (
    CREDIT_RATINGS,
    DEFAULT_RATING_SCORE,
    RATING_SCALE,
    is_known_rating,
    meets_minimum_rating,
    rating_to_score,
)


def test_rating_to_score_known_labels():
    assert rating_to_score("AAA") == 10
    assert rating_to_score("A") == 7
    assert rating_to_score("A-") == 6.5
    assert rating_to_score("D") == 0


def test_moodys_labels_match_sp_equivalents():
    """Aa1 = AA+, Baa3 = BBB-, Caa3 = CCC-"""
    assert rating_to_score("Aa1") == rating_to_score("AA+")
    assert rating_to_score("Baa3") == rating_to_score("BBB-")
    assert rating_to_score("Caa3") == rating_to_score("CCC-")


def test_rating_to_score_defaults_to_middle():
    """Missing and unrecognized ratings both score 5"""
    assert rating_to_score(None) == DEFAULT_RATING_SCORE
    assert rating_to_score("") == DEFAULT_RATING_SCORE
    assert rating_to_score("ZZZ") == DEFAULT_RATING_SCORE


def test_meets_minimum_rating_below_floor():
    """A- (6.5) does not meet an A (7) floor"""
    assert meets_minimum_rating("A-", "A") is False


def test_meets_minimum_rating_tie_passes():
    assert meets_minimum_rating("A", "A") is True
    assert meets_minimum_rating("A2", "A") is True


def test_meets_minimum_rating_no_floor():
    assert meets_minimum_rating(None, None) is True
    assert meets_minimum_rating("D", None) is True


def test_meets_minimum_rating_unrated_bank_fails_floor():
    assert meets_minimum_rating(None, "D") is False


def test_custom_scale_is_honored():
    scale = {"GOOD": 9, "BAD": 1}
    assert rating_to_score("GOOD", scale) == 9
    assert meets_minimum_rating("BAD", "GOOD", scale) is False


def test_rating_scale_is_read_only():
    with pytest.raises(TypeError):
        RATING_SCALE["AAA"] = 0


def test_credit_ratings_are_ordered_and_known():
    scores = [rating_to_score(r) for r in CREDIT_RATINGS]
    assert scores == sorted(scores, reverse=True)
    assert all(is_known_rating(r) for r in CREDIT_RATINGS)
