"""
metrics.py — Pure mathematical functions for fund-level return analysis.

Depends only on: records.py. All functions are stateless and have no side
effects. Currency stays in Decimal throughout; binary floats appear only
inside the rate solver, where the convergence tolerance already bounds
precision.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Literal, Sequence

import numpy as np
import numpy.typing as npt
from scipy import optimize

from portfolio_analytics.records import CashFlowEvent, InvestmentRecord

logger = logging.getLogger(__name__)

DAYS_PER_YEAR = 365.25

XIRRStatus = Literal[
    "converged",
    "insufficient_data",
    "zero_derivative",
    "max_iterations",
    "tolerance_not_met",
    "out_of_domain",
]


# ---------------------------------------------------------------------------
# XIRR
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class XIRRResult:
    """
    Outcome of the XIRR solver.

    ``rate`` is annualized and decimal (0.10 = 10%). When ``converged`` is
    False the rate is either the last Newton iterate (max_iterations,
    out_of_domain) or 0.0 (insufficient_data, zero_derivative); read
    ``status`` to tell a genuine 0% return from a solver that gave up.
    """

    rate: float
    converged: bool
    iterations: int
    status: XIRRStatus
    method: Literal["newton", "brent"] = "newton"

    @property
    def percentage(self) -> float:
        return self.rate * 100.0


def _year_fractions(
    events: Sequence[CashFlowEvent],
) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    """Return (amounts, years since earliest event) as float arrays."""
    base = min(e.date for e in events)
    amounts = np.array([float(e.amount) for e in events], dtype=np.float64)
    years = np.array(
        [(e.date - base).days / DAYS_PER_YEAR for e in events], dtype=np.float64
    )
    return amounts, years


def calc_xnpv(events: Sequence[CashFlowEvent], rate: float) -> float:
    """Net Present Value of irregular cash flows at ``rate``, discounted to the earliest date."""
    if not events:
        return 0.0
    amounts, years = _year_fractions(events)
    return float(np.sum(amounts * (1.0 + rate) ** -years))


def calc_xirr(
    events: Sequence[CashFlowEvent],
    guess: float = 0.10,
    epsilon: float = 1e-4,
    max_iterations: int = 100,
    fallback: Literal["none", "brent"] = "none",
) -> XIRRResult:
    """
    Compute the Internal Rate of Return for irregularly spaced cash flows.

    Newton-Raphson on NPV(r) = sum(a_i * (1 + r) ** -y_i), where y_i is the
    number of 365.25-day years between event i and the earliest event. Order
    of ``events`` does not matter.

    Parameters
    ----------
    events:
        Cash flow events. Negative = capital deployed, positive = value.
    guess:
        Initial rate for Newton-Raphson.
    epsilon:
        Converged once |NPV| < epsilon.
    max_iterations:
        Hard cap on Newton iterations.
    fallback:
        'brent' retries with Brent's method on [-0.999, 100] when Newton
        fails and the flows contain both signs; 'none' reports the Newton
        outcome as is.

    Returns
    -------
    XIRRResult
    """
    if len(events) < 2:
        return XIRRResult(rate=0.0, converged=False, iterations=0, status="insufficient_data")

    amounts, years = _year_fractions(events)
    result = _newton(amounts, years, guess, epsilon, max_iterations)

    if not result.converged:
        logger.debug(
            "XIRR Newton did not converge: status=%s rate=%r iterations=%d",
            result.status,
            result.rate,
            result.iterations,
        )
        if fallback == "brent" and np.any(amounts > 0) and np.any(amounts < 0):
            return _brent(amounts, years, epsilon) or result

    return result


def _newton(
    amounts: npt.NDArray[np.float64],
    years: npt.NDArray[np.float64],
    guess: float,
    epsilon: float,
    max_iterations: int,
) -> XIRRResult:
    rate = guess

    for i in range(max_iterations):
        base = 1.0 + rate
        if base <= 0 or not np.isfinite(rate):
            return XIRRResult(rate=rate, converged=False, iterations=i, status="out_of_domain")

        factors = base ** -years
        npv = float(np.sum(amounts * factors))
        if abs(npv) < epsilon:
            return XIRRResult(rate=rate, converged=True, iterations=i, status="converged")

        # d/dr (1 + r) ** -y = -y * (1 + r) ** (-y - 1)
        dnpv = float(np.sum(-years * amounts * factors / base))
        if dnpv == 0:
            return XIRRResult(rate=0.0, converged=False, iterations=i, status="zero_derivative")

        step = rate - npv / dnpv
        if not np.isfinite(step):
            return XIRRResult(rate=rate, converged=False, iterations=i + 1, status="out_of_domain")
        rate = step

    return XIRRResult(
        rate=rate, converged=False, iterations=max_iterations, status="max_iterations"
    )


def _brent(
    amounts: npt.NDArray[np.float64],
    years: npt.NDArray[np.float64],
    epsilon: float,
) -> XIRRResult | None:
    """Bracketed retry; None when [-0.999, 100] holds no sign change."""

    def npv_func(r: float) -> float:
        return float(np.sum(amounts * (1.0 + r) ** -years))

    lo, hi = -0.999, 100.0
    try:
        rate, info = optimize.brentq(
            npv_func, lo, hi, xtol=1e-12, maxiter=1000, full_output=True, disp=False
        )
    except ValueError:
        logger.debug("XIRR Brent fallback: no sign change on [%s, %s]", lo, hi)
        return None

    if not info.converged:
        status = "max_iterations"
    elif abs(npv_func(rate)) < epsilon:
        status = "converged"
    else:
        status = "tolerance_not_met"
    converged = status == "converged"
    return XIRRResult(
        rate=float(rate),
        converged=converged,
        iterations=int(info.iterations),
        status=status,
        method="brent",
    )


# ---------------------------------------------------------------------------
# Valuation metrics
# ---------------------------------------------------------------------------

def calc_total_deployed(records: Iterable[InvestmentRecord]) -> Decimal:
    """Sum of capital invested across records."""
    return sum((r.amount_invested for r in records), Decimal(0))


def calc_current_valuation(records: Iterable[InvestmentRecord]) -> Decimal:
    """Sum of latest marks across records."""
    return sum((r.current_valuation for r in records), Decimal(0))


def calc_unrealized_gains(total_deployed: Decimal, current_valuation: Decimal) -> Decimal:
    return current_valuation - total_deployed


def calc_moic(
    total_invested: Decimal,
    current_value: Decimal,
    distributions: Decimal = Decimal(0),
) -> Decimal:
    """
    Multiple on Invested Capital.

    MOIC = (current value + distributions) / total invested, or 0 when
    nothing has been invested.
    """
    if total_invested == 0:
        return Decimal(0)
    return (current_value + distributions) / total_invested
