"""
health.py — Cash runway and health classification for portfolio companies.

Depends only on: records.py
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, Literal

import pandas as pd

from portfolio_analytics.records import InvestmentRecord

HealthStatus = Literal["green", "yellow", "red"]

# Stands in for "no burn, runway unbounded"; larger than any runway we band on.
RUNWAY_UNBOUNDED = 999

GREEN_MIN_RUNWAY = 6  # months
YELLOW_MIN_RUNWAY = 3  # months


def calc_runway(cash_remaining: Decimal, monthly_burn_rate: Decimal) -> int:
    """Whole months of cash left at the current burn, or RUNWAY_UNBOUNDED if not burning."""
    if monthly_burn_rate > 0:
        return math.floor(cash_remaining / monthly_burn_rate)
    return RUNWAY_UNBOUNDED


def classify_runway(runway_months: int) -> HealthStatus:
    if runway_months >= GREEN_MIN_RUNWAY:
        return "green"
    if runway_months >= YELLOW_MIN_RUNWAY:
        return "yellow"
    return "red"


@dataclass(frozen=True)
class CompanyHealth:
    """Derived health for one record. The record itself is left untouched."""

    record: InvestmentRecord
    runway_months: int
    status: HealthStatus

    @property
    def runway_unbounded(self) -> bool:
        return self.runway_months == RUNWAY_UNBOUNDED


def assess_company(record: InvestmentRecord) -> CompanyHealth:
    runway = calc_runway(record.cash_remaining, record.monthly_burn_rate)
    return CompanyHealth(record=record, runway_months=runway, status=classify_runway(runway))


@dataclass(frozen=True)
class PortfolioHealth:
    """Companies bucketed by health status, each bucket in input order."""

    green: tuple[CompanyHealth, ...] = field(default_factory=tuple)
    yellow: tuple[CompanyHealth, ...] = field(default_factory=tuple)
    red: tuple[CompanyHealth, ...] = field(default_factory=tuple)

    def counts(self) -> dict[str, int]:
        return {"green": len(self.green), "yellow": len(self.yellow), "red": len(self.red)}

    def to_frame(self) -> pd.DataFrame:
        """One row per company: name, sector, runway_months, status."""
        rows = [
            {
                "name": h.record.name,
                "sector": h.record.sector,
                "cash_remaining": h.record.cash_remaining,
                "monthly_burn_rate": h.record.monthly_burn_rate,
                "runway_months": h.runway_months,
                "status": h.status,
            }
            for h in (*self.green, *self.yellow, *self.red)
        ]
        return pd.DataFrame(
            rows,
            columns=["name", "sector", "cash_remaining", "monthly_burn_rate", "runway_months", "status"],
        )

    def __len__(self) -> int:
        return len(self.green) + len(self.yellow) + len(self.red)


def get_portfolio_health(records: Iterable[InvestmentRecord]) -> PortfolioHealth:
    """
    Classify every company by runway.

    green  : runway >= 6 months (including companies with no burn)
    yellow : 3 <= runway < 6
    red    : runway < 3, including zero or negative cash
    """
    buckets: dict[str, list[CompanyHealth]] = {"green": [], "yellow": [], "red": []}
    for record in records:
        health = assess_company(record)
        buckets[health.status].append(health)

    return PortfolioHealth(
        green=tuple(buckets["green"]),
        yellow=tuple(buckets["yellow"]),
        red=tuple(buckets["red"]),
    )
