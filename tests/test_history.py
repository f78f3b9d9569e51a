"""Tests for portfolio_analytics.history — synthetic quarterly series."""
from __future__ import annotations

import datetime
from decimal import Decimal

import pytest

from portfolio_analytics.history import (
    estimate_value,
    get_portfolio_history,
    history_frame,
    months_between,
)
from portfolio_analytics.records import InvestmentRecord


def _record(invested_at: datetime.date, invested: str, value: str, name: str = "Acme") -> InvestmentRecord:
    return InvestmentRecord(
        name=name,
        sector="SaaS",
        amount_invested=Decimal(invested),
        current_valuation=Decimal(value),
        invested_at=invested_at,
    )


class TestMonthsBetween:
    def test_calendar_months(self):
        assert months_between(datetime.date(2023, 1, 31), datetime.date(2023, 2, 1)) == 1
        assert months_between(datetime.date(2022, 11, 15), datetime.date(2024, 1, 1)) == 14
        assert months_between(datetime.date(2024, 1, 1), datetime.date(2024, 1, 31)) == 0


class TestEstimateValue:
    def test_interpolates_linearly(self):
        record = _record(datetime.date(2023, 1, 1), "100", "200")
        as_of = datetime.date(2024, 1, 1)
        assert estimate_value(record, datetime.date(2023, 1, 1), as_of) == Decimal(100)
        assert estimate_value(record, datetime.date(2023, 7, 1), as_of) == Decimal(150)
        assert estimate_value(record, as_of, as_of) == Decimal(200)

    def test_markdown_interpolates_downwards(self):
        record = _record(datetime.date(2023, 1, 1), "100", "40")
        assert estimate_value(record, datetime.date(2023, 7, 1), datetime.date(2024, 1, 1)) == Decimal(70)

    def test_no_elapsed_months_is_cost(self):
        record = _record(datetime.date(2024, 3, 5), "100", "300")
        assert estimate_value(record, datetime.date(2024, 3, 5), datetime.date(2024, 3, 28)) == Decimal(100)


class TestPortfolioHistory:
    def test_empty(self):
        assert get_portfolio_history([], datetime.date(2024, 1, 1)) == []

    def test_investment_made_today_has_no_growth(self):
        today = datetime.date(2024, 4, 1)
        points = get_portfolio_history([_record(today, "1000000", "1000000")], today)
        assert len(points) == 1
        point = points[0]
        assert point.date == "2024-04-01"
        assert point.quarter == "Q2 2024"
        assert point.total_invested == Decimal("1000000")
        assert point.current_value == Decimal("1000000")
        assert point.company_count == 1

    def test_single_company_quarterly_growth(self):
        """Values are taken at each quarter end, and at as_of for the last quarter."""
        record = _record(datetime.date(2023, 1, 1), "100", "220")
        points = get_portfolio_history([record], datetime.date(2024, 1, 1))
        assert [p.quarter for p in points] == ["Q1 2023", "Q2 2023", "Q3 2023", "Q4 2023", "Q1 2024"]
        assert [p.current_value for p in points] == [
            Decimal(120), Decimal(150), Decimal(180), Decimal(210), Decimal(220),
        ]
        assert all(p.total_invested == Decimal(100) for p in points)

    def test_starts_at_quarter_of_earliest_investment(self):
        records = [
            _record(datetime.date(2023, 2, 15), "100", "100", name="Late"),
            _record(datetime.date(2022, 11, 20), "50", "50", name="Early"),
        ]
        points = get_portfolio_history(records, datetime.date(2023, 5, 10))
        assert [p.date for p in points] == ["2022-10-01", "2023-01-01", "2023-04-01"]

    def test_company_counted_in_quarter_containing_investment(self):
        records = [
            _record(datetime.date(2023, 1, 1), "100", "100", name="First"),
            _record(datetime.date(2023, 4, 15), "300", "300", name="Second"),
        ]
        points = get_portfolio_history(records, datetime.date(2023, 7, 1))
        assert [p.company_count for p in points] == [1, 2, 2]
        assert [p.total_invested for p in points] == [Decimal(100), Decimal(400), Decimal(400)]

    def test_investment_made_today_mid_quarter(self):
        today = datetime.date(2024, 5, 15)
        points = get_portfolio_history([_record(today, "1000000", "1000000")], today)
        assert len(points) == 1
        point = points[0]
        assert point.date == "2024-04-01"
        assert point.quarter == "Q2 2024"
        assert point.total_invested == Decimal("1000000")
        assert point.current_value == Decimal("1000000")
        assert point.company_count == 1

    def test_latest_point_includes_current_quarter_investments(self):
        records = [
            _record(datetime.date(2024, 1, 10), "100", "160", name="Earlier"),
            _record(datetime.date(2024, 7, 2), "50", "50", name="ThisQuarter"),
        ]
        points = get_portfolio_history(records, datetime.date(2024, 9, 30))
        assert [p.company_count for p in points] == [1, 1, 2]
        assert points[-1].total_invested == Decimal(150)
        assert points[-1].current_value == Decimal(210)

    def test_includes_quarter_containing_as_of(self):
        points = get_portfolio_history(
            [_record(datetime.date(2023, 12, 1), "100", "100")], datetime.date(2024, 2, 10)
        )
        assert points[-1].quarter == "Q1 2024"

    def test_latest_point_approaches_current_marks(self, sample_records, as_of):
        points = get_portfolio_history(sample_records, as_of)
        last = points[-1]
        assert last.date == as_of.isoformat()
        assert last.company_count == 4
        assert last.current_value == sum(r.current_valuation for r in sample_records)

    def test_frame(self, sample_records, as_of):
        df = history_frame(get_portfolio_history(sample_records, as_of))
        assert list(df.columns) == ["date", "quarter", "total_invested", "current_value", "company_count"]
        assert df["date"].is_monotonic_increasing
        assert df["company_count"].is_monotonic_increasing
