"""Shared test fixtures for the ITR computation engine test suite."""

from decimal import Decimal

import pytest

from itr_engine.domain.models.declaration import Declaration, LineItem
from itr_engine.domain.models.enums import AssessmentYear, SalaryComponent
from itr_engine.domain.services.year_config_defaults import default_year_config, default_year_table


def items(*amounts, location: str = "India") -> tuple[LineItem, ...]:
    """Line items for the given amounts, all from one location."""
    return tuple(LineItem(amount=Decimal(str(a)), location=location) for a in amounts)


@pytest.fixture
def year_table():
    """Hardcoded configuration for every supported assessment year."""
    return default_year_table()


@pytest.fixture
def config_2024():
    """AY 2024-25 configuration (the reference year)."""
    return default_year_config(AssessmentYear.AY_2024_25)


@pytest.fixture
def salaried_declaration() -> Declaration:
    """Resident individual below 60 with Rs 12 lakh basic salary, AY 2024-25."""
    return Declaration(
        assessee_name="Test Assessee",
        pan="ABCDE1234F",
        assessment_year="2024-25",
        salary={SalaryComponent.BASIC_SALARY: items(1200000)},
    )
