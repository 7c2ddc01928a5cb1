from __future__ import annotations

from dataclasses import dataclass

from ...core.enums import ReportCadence
from .base import CaptionStrategy
from .daily import DailyCaptionStrategy
from .monthly import MonthlyCaptionStrategy
from .weekly import WeeklyCaptionStrategy


@dataclass
class CaptionStrategyFactory:
    """Factory Pattern: pick the caption layout for a report cadence."""

    def for_cadence(self, cadence: ReportCadence) -> CaptionStrategy:
        cadence = ReportCadence(cadence)
        if cadence == ReportCadence.WEEKLY:
            return WeeklyCaptionStrategy()
        if cadence == ReportCadence.MONTHLY:
            return MonthlyCaptionStrategy()
        return DailyCaptionStrategy()
