"""Subscription analytics core.

Generates a deterministic synthetic dataset of daily subscription metrics
and turns it into the KPI cards, trend series and breakdowns shown on the
subscription dashboard.
"""

__version__ = "0.1.0"
