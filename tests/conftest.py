"""
Pytest configuration and shared fixtures for the arrear calculator tests.
"""

import os
import sys
from datetime import date

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from schemas import ArrearRequest, RateEntry, RateTables, SalaryComponentSide


def make_side(**overrides) -> SalaryComponentSide:
    data = {"cpc": "7th", "basic_pay": 50000, "pay_level": "10", "increment_month": 7}
    data.update(overrides)
    return SalaryComponentSide.model_validate(data)


def make_request(from_date, to_date, paid=None, to_be_paid=None) -> ArrearRequest:
    return ArrearRequest(
        employee_id="E12345",
        employee_name="A. K. Sharma",
        designation="Senior Officer",
        department="Accounts",
        from_date=from_date,
        to_date=to_date,
        paid=paid or make_side(),
        to_be_paid=to_be_paid or make_side(basic_pay=56000),
    )


@pytest.fixture
def side_factory():
    return make_side


@pytest.fixture
def request_factory():
    return make_request


@pytest.fixture
def da_fifty_percent():
    return RateTables(da=[RateEntry(from_date=date(2016, 1, 1), rate=50)])


@pytest.fixture
def sample_rates():
    """DA steps up mid-2023; HRA slabs depend on DA band; TA depends on pay level."""
    return RateTables(
        da=[
            RateEntry(from_date=date(2023, 1, 1), to_date=date(2023, 6, 30), rate=42),
            RateEntry(from_date=date(2023, 7, 1), rate=46),
        ],
        hra=[
            RateEntry(from_date=date(2017, 7, 1), rate=24, da_rate_from=0, da_rate_to=24.99),
            RateEntry(from_date=date(2017, 7, 1), rate=27, da_rate_from=25, da_rate_to=49.99, min_amount=5400),
            RateEntry(from_date=date(2024, 1, 1), rate=30, da_rate_from=50, da_rate_to=200),
        ],
        npa=[RateEntry(from_date=date(2017, 7, 1), rate=20)],
        ta=[
            RateEntry(from_date=date(2017, 7, 1), rate=1350, pay_level_from="1", pay_level_to="2"),
            RateEntry(from_date=date(2017, 7, 1), rate=3600, pay_level_from="3", pay_level_to="8"),
            RateEntry(from_date=date(2017, 7, 1), rate=7200, pay_level_from="9", pay_level_to="18"),
        ],
    )
