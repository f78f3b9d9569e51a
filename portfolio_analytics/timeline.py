"""
timeline.py — Investment events in reverse chronological order.

Depends only on: records.py
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

import pandas as pd

from portfolio_analytics.records import InvestmentRecord


@dataclass(frozen=True)
class InvestmentEvent:
    date: str  # YYYY-MM-DD
    company_name: str
    sector: str
    amount: Decimal
    round_stage: str


def get_investment_timeline(records: Iterable[InvestmentRecord]) -> list[InvestmentEvent]:
    """
    One event per record, newest first.

    Dates are fixed-width ISO strings, so ordering the strings orders the
    dates. Events on the same day keep their input order.
    """
    events = [
        InvestmentEvent(
            date=r.invested_at.isoformat(),
            company_name=r.name,
            sector=r.sector,
            amount=r.amount_invested,
            round_stage=r.round_stage,
        )
        for r in records
    ]
    return sorted(events, key=lambda e: e.date, reverse=True)


def timeline_frame(events: Iterable[InvestmentEvent]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "date": e.date,
                "company_name": e.company_name,
                "sector": e.sector,
                "amount": e.amount,
                "round_stage": e.round_stage,
            }
            for e in events
        ],
        columns=["date", "company_name", "sector", "amount", "round_stage"],
    )
