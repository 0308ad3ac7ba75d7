"""
Shared fixtures for progress engine tests.

The catalog mirrors a typical deployment: a seven-stage college path, a
vocational path for training/military, and a direct-to-workforce path for
work/other.
"""

from datetime import date

import pytest

from models.catalog import PathCatalog, StageCatalog
from models.record import AlumniProgressRecord

# Before the June 1st reference date, so elapsed years = calendar years - 1
REFERENCE_NOW = date(2026, 3, 15)

COLLEGE_STAGES = ("yr1", "yr2", "yr3", "yr4", "graduated", "employed", "above-median")
VOCATION_STAGES = ("in-program", "credentialed", "employed", "above-median")
WORKFORCE_STAGES = ("25-percent", "50-percent", "75-percent", "above-median")


def _build_catalog() -> StageCatalog:
    vocation = PathCatalog(stages=VOCATION_STAGES, employment_stage="employed")
    workforce = PathCatalog(stages=WORKFORCE_STAGES, employment_stage="25-percent")
    return StageCatalog(
        paths={
            "college": PathCatalog(stages=COLLEGE_STAGES, employment_stage="employed"),
            "training": vocation,
            "military": vocation,
            "work": workforce,
            "other": workforce,
        }
    )


@pytest.fixture(scope="session")
def catalog() -> StageCatalog:
    """Session-scoped so hypothesis-driven tests can use it."""
    return _build_catalog()


@pytest.fixture
def now() -> date:
    return REFERENCE_NOW


@pytest.fixture
def make_record():
    """Factory for records with sensible defaults."""

    def _make(**fields) -> AlumniProgressRecord:
        fields.setdefault("cohort_year", 2024)
        fields.setdefault("path_type", "college")
        return AlumniProgressRecord(**fields)

    return _make
