"""
fund_dashboard.py — Computes the fund dashboard for a small sample portfolio.

Run:
    python examples/fund_dashboard.py
"""
from __future__ import annotations

import datetime
import logging

import pandas as pd

from portfolio_analytics import SolverConfig, compute_dashboard_metrics, records_from_frame
from portfolio_analytics import visualization as viz


def main() -> None:
    logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s %(message)s")

    # -------------------------------------------------------------------
    # 1. Snapshot as the portfolio store would hand it over
    # -------------------------------------------------------------------
    df = pd.DataFrame(
        {
            "name": ["Lumen AI", "Harbor Pay", "Northwind", "Quill Health", "Orbit Ledger"],
            "sector": ["AI", "Fintech", "SaaS", "BioTech", "Fintech"],
            "round_stage": ["Seed", "Series A", "Series A", "Seed", "Pre-Seed"],
            "amount_invested": ["2000000", "3000000", "1500000", "750000", "500000"],
            "current_valuation": ["6400000", "2800000", "4100000", "750000", "650000"],
            "invested_at": pd.to_datetime(
                ["2021-04-12", "2022-09-01", "2021-11-30", "2023-06-15", "2024-02-20"]
            ),
            "cash_remaining": ["3100000", "420000", "950000", "180000", "600000"],
            "monthly_burn_rate": ["210000", "115000", "0", "95000", "40000"],
            "monthly_revenue": ["85000", "160000", "310000", "0", "12000"],
        }
    )
    records = records_from_frame(df)

    # -------------------------------------------------------------------
    # 2. Compute
    # -------------------------------------------------------------------
    metrics = compute_dashboard_metrics(
        records,
        as_of=datetime.date(2024, 9, 30),
        config=SolverConfig(fallback="brent"),
    )

    # -------------------------------------------------------------------
    # 3. Print summary
    # -------------------------------------------------------------------
    print(metrics)
    for key, value in metrics.summary().items():
        print(f"  {key:>18}: {value}")

    print("\nSector allocation:")
    print(metrics.sector_allocation_frame().to_string(index=False))

    print("\nHealth:")
    print(metrics.health_frame().to_string(index=False))

    print("\nHistory (linear reconstruction, not recorded marks):")
    print(metrics.history_frame().to_string(index=False))

    # -------------------------------------------------------------------
    # 4. Charts
    # -------------------------------------------------------------------
    viz.plot_sector_allocation(metrics).show()
    viz.plot_portfolio_history(metrics).show()
    viz.plot_sector_comparison(metrics).show()
    viz.plot_portfolio_health(metrics).show()


if __name__ == "__main__":
    main()
