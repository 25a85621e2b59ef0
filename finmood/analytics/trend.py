from __future__ import annotations

import math
from typing import Dict, List, Optional, Sequence

from finmood.analytics.config import TrendConfig
from finmood.analytics.models import (
    MoodRecord,
    MoodTrend,
    PeriodMood,
    PeriodTrend,
    PeriodTrendReport,
    ScorePoint,
)
from finmood.utils.validation import validate_group_by


class TrendAnalyzer:
    """Compare the most recent window of mood scores against the window before it."""

    def __init__(self, config: Optional[TrendConfig] = None):
        self.config = config or TrendConfig()

    def analyze_mood_trend(self, history: Sequence[ScorePoint]) -> MoodTrend:
        """``history`` is ordered oldest to newest; windows are taken from the end."""
        if not history or len(history) < 2:
            return MoodTrend(trend="stable", direction=0, confidence=0)

        w = self.config.window_size
        recent = [p.score for p in history[-w:]]
        older = [p.score for p in history[-2 * w:-w]]

        recent_avg = sum(recent) / len(recent)
        older_avg = sum(older) / len(older) if older else recent_avg

        difference = recent_avg - older_avg
        magnitude = abs(difference)

        trend = "stable"
        if magnitude > self.config.strong_threshold:
            trend = "improving" if difference > 0 else "declining"
        elif magnitude > self.config.mild_threshold:
            trend = "slightly improving" if difference > 0 else "slightly declining"

        return MoodTrend(
            trend=trend,
            direction=difference,
            confidence=min(100.0, magnitude * self.config.confidence_multiplier),
        )

    def group_by_period(self, moods: Sequence[MoodRecord], group_by: str = "week") -> PeriodTrendReport:
        """Bucket moods by week-of-month or calendar month of ``created_at``.

        Week keys are ``YYYY-Www`` with ``ww = ceil(day / 7)``; month keys are ``YYYY-MM``.
        """
        group_by = validate_group_by(group_by)
        trends: Dict[str, PeriodTrend] = {}

        for record in sorted(moods, key=lambda m: m.created_at):
            ts = record.created_at
            if group_by == "week":
                key = f"{ts.year}-W{math.ceil(ts.day / 7):02d}"
            else:
                key = f"{ts.year}-{ts.month:02d}"

            period = trends.setdefault(key, PeriodTrend())
            period.moods[record.mood] = period.moods.get(record.mood, 0) + 1
            tx = record.transaction
            if tx is not None and tx.amount < 0:
                period.total_spent += abs(tx.amount)
            period.count += 1

        most_common: List[PeriodMood] = []
        for key, period in trends.items():
            mood, count = ("none", 0) if not period.moods else ("", 0)
            for label, n in period.moods.items():
                if not count > n:
                    mood, count = label, n
            most_common.append(PeriodMood(period=key, mood=mood, count=count))

        return PeriodTrendReport(
            group_by=group_by,
            trends=trends,
            total_periods=len(trends),
            most_common_moods=most_common,
        )
