"""
dashboard.py — Composes every component into one set of dashboard metrics.

Depends on: config.py, records.py, metrics.py, health.py, sectors.py,
history.py, timeline.py
"""
from __future__ import annotations

import datetime
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Iterable, Optional

import pandas as pd

from portfolio_analytics.config import SolverConfig
from portfolio_analytics.health import PortfolioHealth, get_portfolio_health
from portfolio_analytics.history import HistoryPoint, get_portfolio_history, history_frame
from portfolio_analytics.metrics import (
    XIRRResult,
    calc_current_valuation,
    calc_moic,
    calc_total_deployed,
    calc_unrealized_gains,
    calc_xirr,
)
from portfolio_analytics.records import InvestmentRecord, build_cashflows
from portfolio_analytics.sectors import (
    SectorAllocation,
    SectorComparison,
    get_sector_allocation,
    get_sector_comparison,
    sector_allocation_frame,
    sector_comparison_frame,
)
from portfolio_analytics.timeline import InvestmentEvent, get_investment_timeline, timeline_frame

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardMetrics:
    """Everything the fund dashboard displays, derived from one snapshot."""

    as_of: datetime.date
    total_deployed: Decimal
    current_valuation: Decimal
    unrealized_gains: Decimal
    distributions: Decimal
    moic: Decimal
    irr: float  # percent, e.g. 10.0 = 10%
    irr_result: XIRRResult
    sector_allocation: tuple[SectorAllocation, ...]
    portfolio_health: PortfolioHealth
    portfolio_history: tuple[HistoryPoint, ...]
    investment_timeline: tuple[InvestmentEvent, ...]
    sector_comparison: tuple[SectorComparison, ...]

    @property
    def irr_converged(self) -> bool:
        return self.irr_result.converged

    def summary(self) -> dict[str, object]:
        """Return a flat dict of the headline numbers."""
        return {
            "as_of": self.as_of.isoformat(),
            "total_deployed": self.total_deployed,
            "current_valuation": self.current_valuation,
            "unrealized_gains": self.unrealized_gains,
            "distributions": self.distributions,
            "moic": self.moic,
            "irr": self.irr,
            "irr_converged": self.irr_converged,
            "irr_status": self.irr_result.status,
            "n_companies": len(self.portfolio_health),
            "health": self.portfolio_health.counts(),
        }

    def history_frame(self) -> pd.DataFrame:
        return history_frame(self.portfolio_history)

    def timeline_frame(self) -> pd.DataFrame:
        return timeline_frame(self.investment_timeline)

    def sector_allocation_frame(self) -> pd.DataFrame:
        return sector_allocation_frame(self.sector_allocation)

    def sector_comparison_frame(self) -> pd.DataFrame:
        return sector_comparison_frame(self.sector_comparison)

    def health_frame(self) -> pd.DataFrame:
        return self.portfolio_health.to_frame()

    def __repr__(self) -> str:
        return (
            f"DashboardMetrics(as_of={self.as_of.isoformat()}, "
            f"n_companies={len(self.portfolio_health)}, "
            f"deployed=${self.total_deployed:,.0f}, "
            f"moic={self.moic:.2f}x, irr={self.irr:.1f}%)"
        )


def compute_dashboard_metrics(
    records: Iterable[InvestmentRecord],
    as_of: Optional[datetime.date] = None,
    config: Optional[SolverConfig] = None,
    max_workers: Optional[int] = None,
) -> DashboardMetrics:
    """
    Compute all dashboard metrics for a snapshot of investment records.

    Parameters
    ----------
    records:
        Investment records, already filtered by the caller. Must not be
        mutated while this runs.
    as_of:
        Valuation date ("now"). Defaults to today.
    config:
        XIRR solver settings. Defaults to SolverConfig().
    max_workers:
        If greater than 1, the independent components run on a thread pool.

    Returns
    -------
    DashboardMetrics
    """
    snapshot = tuple(records)
    as_of = as_of or datetime.date.today()
    config = config or SolverConfig()

    for record in snapshot:
        if record.invested_at > as_of:
            raise ValueError(
                f"{record.name}: invested_at {record.invested_at.isoformat()} "
                f"is after as_of {as_of.isoformat()}"
            )

    logger.debug("Computing dashboard metrics for %d records as of %s", len(snapshot), as_of)

    def _irr() -> XIRRResult:
        return calc_xirr(
            build_cashflows(snapshot, as_of),
            guess=config.initial_guess,
            epsilon=config.epsilon,
            max_iterations=config.max_iterations,
            fallback=config.fallback,
        )

    tasks: dict[str, Callable[[], object]] = {
        "total_deployed": lambda: calc_total_deployed(snapshot),
        "current_valuation": lambda: calc_current_valuation(snapshot),
        "irr_result": _irr,
        "sector_allocation": lambda: tuple(get_sector_allocation(snapshot)),
        "portfolio_health": lambda: get_portfolio_health(snapshot),
        "portfolio_history": lambda: tuple(get_portfolio_history(snapshot, as_of)),
        "investment_timeline": lambda: tuple(get_investment_timeline(snapshot)),
        "sector_comparison": lambda: tuple(get_sector_comparison(snapshot)),
    }
    results = _run_tasks(tasks, max_workers)

    total_deployed = results["total_deployed"]
    current_valuation = results["current_valuation"]
    irr_result = results["irr_result"]
    distributions = Decimal(0)  # no distribution tracking yet

    metrics = DashboardMetrics(
        as_of=as_of,
        total_deployed=total_deployed,
        current_valuation=current_valuation,
        unrealized_gains=calc_unrealized_gains(total_deployed, current_valuation),
        distributions=distributions,
        moic=calc_moic(total_deployed, current_valuation, distributions),
        irr=irr_result.percentage,
        irr_result=irr_result,
        sector_allocation=results["sector_allocation"],
        portfolio_health=results["portfolio_health"],
        portfolio_history=results["portfolio_history"],
        investment_timeline=results["investment_timeline"],
        sector_comparison=results["sector_comparison"],
    )
    logger.debug("Dashboard metrics computed: irr_status=%s", irr_result.status)
    return metrics


def _run_tasks(
    tasks: dict[str, Callable[[], object]],
    max_workers: Optional[int],
) -> dict[str, object]:
    """Run named zero-argument tasks, sequentially or on a thread pool."""
    if not max_workers or max_workers <= 1:
        return {name: task() for name, task in tasks.items()}

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {name: executor.submit(task) for name, task in tasks.items()}
        return {name: future.result() for name, future in futures.items()}
