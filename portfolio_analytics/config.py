"""
config.py — Tunables for the portfolio analytics engine.

No imports from within this library.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class SolverConfig:
    """Configuration for the XIRR root-finder."""

    epsilon: float = 1e-4  # |NPV| below this counts as converged
    max_iterations: int = 100
    initial_guess: float = 0.10
    fallback: Literal["none", "brent"] = "none"

    def __post_init__(self) -> None:
        if self.epsilon <= 0:
            raise ValueError("epsilon must be positive")
        if self.max_iterations <= 0:
            raise ValueError("max_iterations must be positive")
        if self.fallback not in ("none", "brent"):
            raise ValueError(f"Unknown fallback {self.fallback!r}")
