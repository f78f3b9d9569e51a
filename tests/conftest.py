"""
conftest.py — Shared pytest fixtures for portfolio_analytics test suite.
"""
from __future__ import annotations

import datetime
from decimal import Decimal

import pytest

from portfolio_analytics.records import InvestmentRecord


@pytest.fixture(scope="session")
def as_of() -> datetime.date:
    """Fixed valuation date so results do not depend on the clock."""
    return datetime.date(2024, 7, 1)


@pytest.fixture(scope="session")
def sample_records() -> list[InvestmentRecord]:
    """A small fund across three sectors with mixed runway."""
    return [
        InvestmentRecord(
            name="AlphaAI",
            sector="AI",
            amount_invested=Decimal("2000000"),
            current_valuation=Decimal("5000000"),
            invested_at=datetime.date(2022, 3, 15),
            round_stage="Seed",
            cash_remaining=Decimal("1200000"),
            monthly_burn_rate=Decimal("100000"),
            monthly_revenue=Decimal("40000"),
        ),
        InvestmentRecord(
            name="BetaPay",
            sector="Fintech",
            amount_invested=Decimal("3000000"),
            current_valuation=Decimal("2500000"),
            invested_at=datetime.date(2023, 1, 1),
            round_stage="Series A",
            cash_remaining=Decimal("450000"),
            monthly_burn_rate=Decimal("100000"),
            monthly_revenue=Decimal("120000"),
        ),
        InvestmentRecord(
            name="GammaCloud",
            sector="SaaS",
            amount_invested=Decimal("1500000"),
            current_valuation=Decimal("4500000"),
            invested_at=datetime.date(2021, 10, 20),
            round_stage="Series A",
            cash_remaining=Decimal("250000"),
            monthly_burn_rate=Decimal("100000"),
        ),
        InvestmentRecord(
            name="DeltaLedger",
            sector="Fintech",
            amount_invested=Decimal("1000000"),
            current_valuation=Decimal("1000000"),
            invested_at=datetime.date(2024, 6, 15),
            round_stage="Pre-Seed",
            cash_remaining=Decimal("800000"),
            monthly_burn_rate=Decimal("0"),
        ),
    ]
