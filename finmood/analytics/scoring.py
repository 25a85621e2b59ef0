from __future__ import annotations

import math
from typing import Any, Dict, List, Optional

from finmood.analytics.config import CategoryImpact, ScoringConfig
from finmood.analytics.models import MoodScore, TransactionRecord


class MoodScorer:
    """Heuristic 0-100 favorability score for a single transaction.

    score = base
          + amount band (income or expense, first matching band only)
          + category impact
          + budget_status / savings_trend context adjustments
    clamped to [0, 100] and rounded.
    """

    def __init__(self, config: Optional[ScoringConfig] = None):
        self.config = config or ScoringConfig()

    def calculate_mood_score(
        self, transaction: TransactionRecord, context: Optional[Dict[str, Any]] = None
    ) -> MoodScore:
        context = context or {}
        score = float(self.config.base_score)
        factors: List[str] = []

        amount = abs(transaction.amount)
        is_income = transaction.amount > 0

        # Amount bands
        if is_income:
            for band in self.config.income_bands:
                if amount > band.threshold:
                    score += band.points
                    factors.append(band.factor)
                    break
        else:
            matched = False
            for band in self.config.expense_bands:
                if amount > band.threshold:
                    score += band.points
                    factors.append(band.factor)
                    matched = True
                    break
            micro = self.config.micro_expense
            if not matched and amount < micro.threshold:
                score += micro.points
                factors.append(micro.factor)

        # Category
        impact = self.get_category_impact(transaction.category)
        score += impact.score
        if impact.factor:
            factors.append(impact.factor)

        # Context
        budget = self.config.budget_status.get(context.get("budget_status"))
        if budget is not None:
            score += budget.score
            factors.append(budget.factor)

        savings = self.config.savings_trend.get(context.get("savings_trend"))
        if savings is not None:
            score += savings.score
            factors.append(savings.factor)

        score = max(0.0, min(100.0, score))
        return MoodScore(score=round_half_up(score), factors=factors)

    def get_category_impact(self, category: Optional[str]) -> CategoryImpact:
        if category is None:
            return self.config.unknown_category
        return self.config.category_impacts.get(category, self.config.unknown_category)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (72.5 -> 73)."""
    return int(math.floor(value + 0.5))
