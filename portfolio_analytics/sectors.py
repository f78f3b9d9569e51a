"""
sectors.py — Sector allocation and per-sector performance.

Depends only on: records.py, metrics.py
"""
from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

import pandas as pd

from portfolio_analytics.metrics import calc_moic
from portfolio_analytics.records import InvestmentRecord

_HUNDRED = Decimal(100)


@dataclass(frozen=True)
class SectorAllocation:
    sector: str
    value: Decimal
    percentage: float  # share of total current valuation, 0–100


@dataclass(frozen=True)
class SectorComparison:
    sector: str
    total_invested: Decimal
    current_value: Decimal
    moic: Decimal
    company_count: int


def get_sector_allocation(records: Iterable[InvestmentRecord]) -> list[SectorAllocation]:
    """
    Current valuation grouped by sector, sorted by sector label.

    Percentages are shares of the portfolio's total current valuation and
    sum to 100 (up to float rounding). All percentages are 0 when the total
    is zero.
    """
    by_sector: dict[str, Decimal] = defaultdict(Decimal)
    total = Decimal(0)
    for record in records:
        by_sector[record.sector] += record.current_valuation
        total += record.current_valuation

    allocations = []
    for sector in sorted(by_sector):
        value = by_sector[sector]
        percentage = float(value / total * _HUNDRED) if total != 0 else 0.0
        allocations.append(SectorAllocation(sector=sector, value=value, percentage=percentage))
    return allocations


def get_sector_comparison(records: Iterable[InvestmentRecord]) -> list[SectorComparison]:
    """Invested capital, current value, MOIC and company count per sector, sorted by sector."""
    invested: dict[str, Decimal] = defaultdict(Decimal)
    value: dict[str, Decimal] = defaultdict(Decimal)
    counts: dict[str, int] = defaultdict(int)

    for record in records:
        invested[record.sector] += record.amount_invested
        value[record.sector] += record.current_valuation
        counts[record.sector] += 1

    return [
        SectorComparison(
            sector=sector,
            total_invested=invested[sector],
            current_value=value[sector],
            moic=calc_moic(invested[sector], value[sector]),
            company_count=counts[sector],
        )
        for sector in sorted(counts)
    ]


def sector_allocation_frame(allocations: Iterable[SectorAllocation]) -> pd.DataFrame:
    return pd.DataFrame(
        [{"sector": a.sector, "value": a.value, "percentage": a.percentage} for a in allocations],
        columns=["sector", "value", "percentage"],
    )


def sector_comparison_frame(comparisons: Iterable[SectorComparison]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "sector": c.sector,
                "total_invested": c.total_invested,
                "current_value": c.current_value,
                "moic": c.moic,
                "company_count": c.company_count,
            }
            for c in comparisons
        ],
        columns=["sector", "total_invested", "current_value", "moic", "company_count"],
    )
