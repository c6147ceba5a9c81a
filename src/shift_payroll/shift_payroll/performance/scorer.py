from __future__ import annotations

from typing import Optional

from .model import DailyTelemetry, PerformanceScore, PerformanceTargets, PerformanceWeights


class PerformanceScorer:
    """Weighted, capped daily score in [0, 1].

    Each sub-score caps at its own weight, so beating one target never makes
    up for a shortfall on another.
    """

    def __init__(self, weights: Optional[PerformanceWeights] = None):
        self._weights = weights or PerformanceWeights()

    @property
    def weights(self) -> PerformanceWeights:
        return self._weights

    def breakdown(self, telemetry: DailyTelemetry, targets: PerformanceTargets) -> PerformanceScore:
        w = self._weights
        return PerformanceScore(
            calls_score=min(telemetry.calls / targets.calls, 1.0) * w.calls,
            talk_time_score=min(telemetry.talk_time_seconds / targets.talk_time_seconds, 1.0) * w.talk_time,
            leads_score=min(telemetry.leads_approved / targets.leads, 1.0) * w.leads,
        )

    def score(self, telemetry: DailyTelemetry, targets: PerformanceTargets) -> float:
        # Weights sum to 1.0 within float tolerance; the cap absorbs the rounding excess.
        return min(self.breakdown(telemetry, targets).total, 1.0)
