"""Tests for portfolio_analytics.sectors — allocation and comparison."""
from __future__ import annotations

import datetime
from decimal import Decimal

import pytest

from portfolio_analytics.records import InvestmentRecord
from portfolio_analytics.sectors import get_sector_allocation, get_sector_comparison


def _record(name: str, sector: str, invested: str, value: str) -> InvestmentRecord:
    return InvestmentRecord(
        name=name,
        sector=sector,
        amount_invested=Decimal(invested),
        current_valuation=Decimal(value),
        invested_at=datetime.date(2023, 1, 1),
    )


class TestSectorAllocation:
    def test_grouped_and_sorted(self, sample_records):
        allocations = get_sector_allocation(sample_records)
        assert [a.sector for a in allocations] == ["AI", "Fintech", "SaaS"]
        assert [a.value for a in allocations] == [
            Decimal("5000000"),
            Decimal("3500000"),
            Decimal("4500000"),
        ]

    def test_percentages_sum_to_hundred(self, sample_records):
        allocations = get_sector_allocation(sample_records)
        assert sum(a.percentage for a in allocations) == pytest.approx(100.0)
        assert allocations[0].percentage == pytest.approx(5 / 13 * 100)

    def test_zero_total_gives_zero_percentages(self):
        allocations = get_sector_allocation(
            [_record("A", "AI", "100", "0"), _record("B", "SaaS", "100", "0")]
        )
        assert [a.percentage for a in allocations] == [0.0, 0.0]
        assert all(a.value == 0 for a in allocations)

    def test_empty(self):
        assert get_sector_allocation([]) == []


class TestSectorComparison:
    def test_totals_moic_and_counts(self, sample_records):
        comparison = {c.sector: c for c in get_sector_comparison(sample_records)}
        assert set(comparison) == {"AI", "Fintech", "SaaS"}

        fintech = comparison["Fintech"]
        assert fintech.total_invested == Decimal("4000000")
        assert fintech.current_value == Decimal("3500000")
        assert fintech.moic == Decimal("0.875")
        assert fintech.company_count == 2

        assert comparison["SaaS"].moic == Decimal(3)

    def test_sorted_by_sector(self, sample_records):
        assert [c.sector for c in get_sector_comparison(sample_records)] == ["AI", "Fintech", "SaaS"]

    def test_zero_invested_sector_has_zero_moic(self):
        comparison = get_sector_comparison([_record("Grant", "Climate", "0", "500")])
        assert comparison[0].moic == Decimal(0)
        assert comparison[0].company_count == 1
