from __future__ import annotations

from .daily import DailyCaptionStrategy


class WeeklyCaptionStrategy(DailyCaptionStrategy):
    """Daily layout over the Monday-start week."""

    title = "LAPORAN MINGGUAN"
