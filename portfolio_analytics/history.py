"""
history.py — Synthetic quarterly history of portfolio cost and value.

Depends only on: records.py

No historical marks are stored, so each company's value path is
reconstructed from two known points: cost basis on the investment date and
the current valuation on ``as_of``. Between them value is interpolated
linearly by whole calendar months held. The resulting series approximates
the growth trajectory; it is not an audit trail of past valuations.
"""
from __future__ import annotations

import datetime
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

import pandas as pd

from portfolio_analytics.records import InvestmentRecord


@dataclass(frozen=True)
class HistoryPoint:
    """Portfolio totals for a calendar quarter, labelled by its first day."""

    date: str  # ISO date of the quarter start
    quarter: str  # e.g. "Q1 2024"
    total_invested: Decimal
    current_value: Decimal
    company_count: int


def months_between(start: datetime.date, end: datetime.date) -> int:
    """Whole calendar months from ``start`` to ``end`` (day of month ignored)."""
    return (end.year - start.year) * 12 + (end.month - start.month)


def estimate_value(record: InvestmentRecord, on: datetime.date, as_of: datetime.date) -> Decimal:
    """
    Linearly interpolated value of one holding on ``on``.

    Starts at cost on the investment month and reaches the current
    valuation on the ``as_of`` month. Holdings with no elapsed months
    are carried at cost.
    """
    total_months = months_between(record.invested_at, as_of)
    if total_months <= 0:
        return record.amount_invested

    months_held = months_between(record.invested_at, on)
    growth = record.current_valuation - record.amount_invested
    return record.amount_invested + growth * Decimal(months_held) / Decimal(total_months)


def get_portfolio_history(
    records: Iterable[InvestmentRecord],
    as_of: datetime.date,
) -> list[HistoryPoint]:
    """
    Project invested capital and estimated value for every quarter.

    The series starts at the quarter containing the earliest investment and
    runs through the quarter containing ``as_of``. Each point is measured at
    its cut-off: the last day of the quarter, or ``as_of`` for the current
    quarter. A company counts towards every quarter whose cut-off is on or
    after its investment date, so the last point equals the current marks.
    """
    records = list(records)
    if not records:
        return []

    earliest = min(r.invested_at for r in records)
    period = pd.Period(earliest, freq="Q")

    points: list[HistoryPoint] = []
    while True:
        current = period.start_time.date()
        if current > as_of:
            break
        cutoff = min(period.end_time.date(), as_of)

        invested = Decimal(0)
        value = Decimal(0)
        count = 0
        for record in records:
            if record.invested_at > cutoff:
                continue
            invested += record.amount_invested
            value += estimate_value(record, cutoff, as_of)
            count += 1

        points.append(
            HistoryPoint(
                date=current.isoformat(),
                quarter=f"Q{period.quarter} {period.year}",
                total_invested=invested,
                current_value=value,
                company_count=count,
            )
        )
        period += 1

    return points


def history_frame(points: Iterable[HistoryPoint]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "date": p.date,
                "quarter": p.quarter,
                "total_invested": p.total_invested,
                "current_value": p.current_value,
                "company_count": p.company_count,
            }
            for p in points
        ],
        columns=["date", "quarter", "total_invested", "current_value", "company_count"],
    )
