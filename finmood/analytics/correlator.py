from __future__ import annotations

from typing import Callable, Dict, List, Optional, Sequence

from finmood.analytics.config import CorrelationConfig
from finmood.analytics.models import (
    Insight,
    MoodImpact,
    MoodRecord,
    SpendingCorrelation,
    SpendingStats,
    TransactionRecord,
)
from finmood.utils.logging import get_logger

logger = get_logger(__name__)

InsightRule = Callable[[SpendingCorrelation, CorrelationConfig], Optional[Insight]]


def emotional_dominance_rule(analysis: SpendingCorrelation, cfg: CorrelationConfig) -> Optional[Insight]:
    if analysis.emotional_spending <= analysis.planned_spending * cfg.emotional_dominance_ratio:
        return None
    return Insight(
        type="behavioral",
        title="Emotional Spending Dominance",
        message=(
            f"You spend ${analysis.emotional_spending:.2f} when emotional "
            f"vs ${analysis.planned_spending:.2f} on planned purchases"
        ),
        severity="medium",
        recommendation="Practice mindful spending by waiting 24 hours before emotional purchases",
    )


def highest_spending_mood_rule(analysis: SpendingCorrelation, cfg: CorrelationConfig) -> Optional[Insight]:
    # Replaced only on a strictly greater average, so ties keep the earlier mood
    top_mood, top_avg = "", 0.0
    for mood, stats in analysis.correlation.items():
        if stats.average > top_avg:
            top_mood, top_avg = mood, stats.average
    if not top_mood:
        return None
    return Insight(
        type="pattern",
        title="Highest Spending Mood",
        message=f"You spend the most when feeling {top_mood} (${top_avg:.2f} on average)",
        severity="low",
        recommendation="Be particularly mindful of spending when feeling this way",
    )


INSIGHT_RULES: List[InsightRule] = [emotional_dominance_rule, highest_spending_mood_rule]


class SpendingCorrelator:
    """Join mood records to transaction amounts and derive spending insights."""

    def __init__(self, config: Optional[CorrelationConfig] = None, rules: Optional[List[InsightRule]] = None):
        self.config = config or CorrelationConfig()
        self.rules = rules if rules is not None else INSIGHT_RULES

    def analyze(self, moods: Sequence[MoodRecord], transactions: Sequence[TransactionRecord]) -> SpendingCorrelation:
        analysis = SpendingCorrelation()
        tx_by_id = self._index(transactions)
        emotional = set(self.config.emotional_moods)
        planned = set(self.config.planned_moods)

        for record in moods:
            tx = tx_by_id.get(record.transaction_id)
            if tx is None:
                continue
            amount = abs(tx.amount)

            if record.mood in emotional:
                analysis.emotional_spending += amount
            elif record.mood in planned:
                analysis.planned_spending += amount

            stats = analysis.correlation.setdefault(record.mood, SpendingStats())
            stats.total += amount
            stats.count += 1
            stats.average = stats.total / stats.count

        for rule in self.rules:
            insight = rule(analysis, self.config)
            if insight is not None:
                analysis.insights.append(insight)

        return analysis

    def predict_mood_impact(self, moods: Sequence[MoodRecord], current_mood: str) -> Optional[MoodImpact]:
        """Predict spend in ``current_mood`` from transactions previously annotated with it."""
        similar = [m.transaction for m in moods if m.mood == current_mood and m.transaction is not None]
        if not similar:
            logger.debug(f"Insufficient data for mood impact prediction: {current_mood}")
            return None

        avg_amount = sum(abs(t.amount) for t in similar) / len(similar)

        categories: Dict[str, int] = {}
        for t in similar:
            key = t.category or ""
            categories[key] = categories.get(key, 0) + 1
        likely, likely_count = "", 0
        for category, count in categories.items():
            if count > likely_count:
                likely, likely_count = category, count

        return MoodImpact(
            predicted_spending=avg_amount,
            likely_category=likely,
            confidence="high" if len(similar) > self.config.impact_high_confidence_samples else "medium",
            warning=(
                "High spending predicted in this mood state"
                if avg_amount > self.config.impact_warning_amount
                else None
            ),
        )

    @staticmethod
    def _index(transactions: Sequence[TransactionRecord]) -> Dict[int, TransactionRecord]:
        # First transaction wins on duplicate ids
        index: Dict[int, TransactionRecord] = {}
        for tx in transactions:
            index.setdefault(tx.id, tx)
        return index
