"""
portfolio_analytics — Fund-level performance and health metrics for a VC portfolio.

Public API surface:

    from portfolio_analytics import InvestmentRecord, compute_dashboard_metrics
    from portfolio_analytics import SolverConfig, XIRRResult, calc_xirr
    from portfolio_analytics import metrics
    from portfolio_analytics import visualization as viz
"""
from __future__ import annotations

# Core data classes and engines
from portfolio_analytics.config import SolverConfig
from portfolio_analytics.dashboard import DashboardMetrics, compute_dashboard_metrics
from portfolio_analytics.health import (
    RUNWAY_UNBOUNDED,
    CompanyHealth,
    PortfolioHealth,
    assess_company,
    calc_runway,
    classify_runway,
    get_portfolio_health,
)
from portfolio_analytics.history import HistoryPoint, get_portfolio_history
from portfolio_analytics.metrics import XIRRResult, calc_moic, calc_xirr, calc_xnpv
from portfolio_analytics.records import (
    CashFlowEvent,
    InvestmentRecord,
    build_cashflows,
    records_from_frame,
    records_to_frame,
)
from portfolio_analytics.sectors import (
    SectorAllocation,
    SectorComparison,
    get_sector_allocation,
    get_sector_comparison,
)
from portfolio_analytics.timeline import InvestmentEvent, get_investment_timeline

# Submodules available for direct import
from portfolio_analytics import metrics
from portfolio_analytics import visualization

__version__ = "0.1.0"

__all__ = [
    # Records
    "InvestmentRecord",
    "CashFlowEvent",
    "build_cashflows",
    "records_from_frame",
    "records_to_frame",
    # Solver
    "SolverConfig",
    "XIRRResult",
    "calc_xirr",
    "calc_xnpv",
    "calc_moic",
    # Health
    "RUNWAY_UNBOUNDED",
    "CompanyHealth",
    "PortfolioHealth",
    "assess_company",
    "calc_runway",
    "classify_runway",
    "get_portfolio_health",
    # Sectors
    "SectorAllocation",
    "SectorComparison",
    "get_sector_allocation",
    "get_sector_comparison",
    # History / timeline
    "HistoryPoint",
    "get_portfolio_history",
    "InvestmentEvent",
    "get_investment_timeline",
    # Dashboard
    "DashboardMetrics",
    "compute_dashboard_metrics",
    # Submodules
    "metrics",
    "visualization",
    # Version
    "__version__",
]
