"""Unit tests for the country table and coverage"""

import pytest

from capacity_gateway.domain.countries import (
    COUNTRIES,
    REGIONS,
    country_coverage,
    get_country,
    is_known_country,
)
from capacity_gateway.domain.models import Bank, Project


def test_country_lookup():
    france = get_country("FR")
    assert france.name == "France"
    assert france.region == "Europe"
    assert get_country("ZZ") is None


def test_global_is_only_known_when_allowed():
    assert is_known_country("GLOBAL", allow_global=True) is True
    assert is_known_country("GLOBAL") is False
    assert is_known_country("US") is True
    assert is_known_country("us") is False


def test_table_is_read_only():
    with pytest.raises(TypeError):
        COUNTRIES["ZZ"] = COUNTRIES["FR"]
    with pytest.raises(TypeError):
        REGIONS["Nowhere"] = ()


def test_every_country_belongs_to_exactly_one_region():
    grouped = [code for codes in REGIONS.values() for code in codes]
    assert sorted(grouped) == sorted(COUNTRIES)
    assert "JP" in REGIONS["Asia"]


def test_coverage_counts_global_banks_and_overdrawn_capacity():
    banks = [
        Bank(id="local", name="Local", total_capacity=100, used_capacity=30, countries=["FR"]),
        Bank(id="world", name="World", total_capacity=50, used_capacity=70, countries=["GLOBAL"]),
        Bank(id="elsewhere", name="Elsewhere", total_capacity=500, countries=["DE"]),
    ]
    projects = [
        Project(id="metro", name="Metro", country="FR", capacity_needed=10),
        Project(id="plant", name="Plant", country="DE", capacity_needed=10),
    ]

    coverage = country_coverage(get_country("FR"), banks, projects)

    assert [b.id for b in coverage.banks] == ["local", "world"]
    assert coverage.local_bank_ids == ["local"]
    # 70 + (-20)
    assert coverage.available_capacity == 50
    assert [p.id for p in coverage.projects] == ["metro"]


def test_coverage_of_unserved_country_is_empty():
    banks = [Bank(id="de", name="DE", total_capacity=100, countries=["DE"])]

    coverage = country_coverage(get_country("JP"), banks, [])

    assert coverage.banks == []
    assert coverage.available_capacity == 0
    assert coverage.projects == []
