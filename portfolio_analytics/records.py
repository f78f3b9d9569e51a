"""
records.py — Investment records and the cash flows derived from them.

Depends only on: nothing within this library.
"""
from __future__ import annotations

import datetime
import numbers
from dataclasses import dataclass, fields
from decimal import Decimal, InvalidOperation
from typing import Iterable, Union

import pandas as pd

Amount = Union[Decimal, int, float, str]

_ZERO = Decimal(0)


def to_decimal(value: Amount) -> Decimal:
    """
    Coerce a currency amount to Decimal.

    Floats (numpy floats included) go through str() so 0.1 becomes Decimal("0.1")
    rather than the binary expansion. Raises ValueError for anything that
    is not a finite number.
    """
    try:
        if isinstance(value, Decimal):
            amount = value
        elif isinstance(value, float):
            amount = Decimal(str(value))
        elif isinstance(value, numbers.Integral):
            amount = Decimal(int(value))
        else:
            amount = Decimal(value)
    except (InvalidOperation, TypeError) as exc:
        raise ValueError(f"Not a currency amount: {value!r}") from exc

    if not amount.is_finite():
        raise ValueError(f"Currency amount must be finite, got {value!r}")
    return amount


def _to_date(value: Union[datetime.date, str, pd.Timestamp]) -> datetime.date:
    if isinstance(value, pd.Timestamp):
        return value.date()
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    return datetime.date.fromisoformat(str(value)[:10])


@dataclass(frozen=True)
class InvestmentRecord:
    """A single portfolio company position as supplied by the portfolio store."""

    name: str
    sector: str
    amount_invested: Decimal
    current_valuation: Decimal
    invested_at: datetime.date
    round_stage: str = ""
    cash_remaining: Decimal = _ZERO
    monthly_burn_rate: Decimal = _ZERO
    monthly_revenue: Decimal = _ZERO

    def __post_init__(self) -> None:
        # Frozen: normalise through object.__setattr__
        for name in (
            "amount_invested",
            "current_valuation",
            "cash_remaining",
            "monthly_burn_rate",
            "monthly_revenue",
        ):
            object.__setattr__(self, name, to_decimal(getattr(self, name)))
        object.__setattr__(self, "invested_at", _to_date(self.invested_at))

        if not self.name:
            raise ValueError("Company name must be non-empty")
        if self.amount_invested < 0:
            raise ValueError(f"{self.name}: amount_invested must be non-negative")
        if self.current_valuation < 0:
            raise ValueError(f"{self.name}: current_valuation must be non-negative")
        if self.monthly_burn_rate < 0:
            raise ValueError(f"{self.name}: monthly_burn_rate must be non-negative")
        if self.monthly_revenue < 0:
            raise ValueError(f"{self.name}: monthly_revenue must be non-negative")

    @property
    def unrealized_gain(self) -> Decimal:
        return self.current_valuation - self.amount_invested


@dataclass(frozen=True)
class CashFlowEvent:
    """A dated, signed capital movement. Negative = deployed, positive = returned/valued."""

    date: datetime.date
    amount: Decimal


def build_cashflows(
    records: Iterable[InvestmentRecord],
    as_of: datetime.date,
) -> list[CashFlowEvent]:
    """
    Convert a snapshot of records into the cash flow sequence for XIRR.

    Each record contributes an outflow of its invested amount on its
    investment date. The portfolio's combined current valuation is booked
    as a single inflow on ``as_of``, and omitted when it is zero.
    """
    events: list[CashFlowEvent] = []
    total_value = _ZERO

    for record in records:
        events.append(CashFlowEvent(record.invested_at, -record.amount_invested))
        total_value += record.current_valuation

    if total_value != 0:
        events.append(CashFlowEvent(as_of, total_value))

    return events


# ---------------------------------------------------------------------------
# DataFrame ingestion
# ---------------------------------------------------------------------------

_REQUIRED_COLUMNS = ("name", "sector", "amount_invested", "current_valuation", "invested_at")


def records_from_frame(df: pd.DataFrame) -> list[InvestmentRecord]:
    """
    Build records from a DataFrame whose columns are InvestmentRecord fields.

    Optional columns (round_stage, cash_remaining, monthly_burn_rate,
    monthly_revenue) fall back to the record defaults when absent or NaN.
    """
    missing = [c for c in _REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {', '.join(missing)}")

    known = {f.name for f in fields(InvestmentRecord)}
    records = []
    for row in df.to_dict(orient="records"):
        kwargs = {k: v for k, v in row.items() if k in known and not _is_missing(v)}
        records.append(InvestmentRecord(**kwargs))
    return records


def records_to_frame(records: Iterable[InvestmentRecord]) -> pd.DataFrame:
    """Return one row per record, currency columns kept as Decimal objects."""
    columns = [f.name for f in fields(InvestmentRecord)]
    rows = [{c: getattr(r, c) for c in columns} for r in records]
    return pd.DataFrame(rows, columns=columns)


def _is_missing(value: object) -> bool:
    if isinstance(value, (str, Decimal, datetime.date)):
        return False
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False
