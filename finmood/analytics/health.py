from __future__ import annotations

import statistics
from datetime import date, datetime, timedelta, timezone
from typing import Dict, List, Optional, Sequence, Union

from finmood.analytics.config import HealthConfig
from finmood.analytics.models import TransactionRecord
from finmood.analytics.scoring import round_half_up
from finmood.utils.logging import get_logger

logger = get_logger(__name__)


class FinancialHealthScorer:
    """Composite 0-100 score over a trailing window of transactions.

    score = savings_weight     * min(100, savings_rate * savings_multiplier)
          + diversity_weight   * expense_diversity * 100
          + consistency_weight * spending_consistency * 100
    """

    def __init__(self, config: Optional[HealthConfig] = None):
        self.config = config or HealthConfig()

    def calculate(
        self,
        transactions: Sequence[TransactionRecord],
        period: str = "month",
        now: Optional[datetime] = None,
    ) -> int:
        if not transactions:
            return self.config.neutral_score

        if period != "month":
            logger.debug(f"Health period '{period}' requested; window stays {self.config.window_days} days")

        cutoff = _as_datetime(now or datetime.utcnow()) - timedelta(days=self.config.window_days)
        recent = [t for t in transactions if _as_datetime(t.date) >= cutoff]

        income = sum(t.amount for t in recent if t.amount > 0)
        expenses = sum(abs(t.amount) for t in recent if t.amount < 0)

        savings_rate = (income - expenses) / income if income > 0 else 0.0
        savings_score = min(100.0, savings_rate * self.config.savings_multiplier)
        diversity_score = self.calculate_expense_diversity(recent) * 100
        consistency_score = self.calculate_spending_consistency(recent) * 100

        total = (
            savings_score * self.config.savings_weight
            + diversity_score * self.config.diversity_weight
            + consistency_score * self.config.consistency_weight
        )
        return round_half_up(max(0.0, min(100.0, total)))

    def calculate_expense_diversity(self, transactions: Sequence[TransactionRecord]) -> float:
        """Distinct expense categories relative to one category per ``expenses_per_category`` expenses."""
        expenses = [t for t in transactions if t.amount < 0]
        if not expenses:
            return self.config.neutral_component

        categories = {t.category or "Other" for t in expenses}
        expected = max(1.0, len(expenses) / self.config.expenses_per_category)
        return min(1.0, len(categories) / expected)

    def calculate_spending_consistency(self, transactions: Sequence[TransactionRecord]) -> float:
        """1 - coefficient of variation of daily expense totals, floored at 0."""
        daily: Dict[date, float] = {}
        for t in transactions:
            if t.amount < 0:
                day = _as_datetime(t.date).date()
                daily[day] = daily.get(day, 0.0) + abs(t.amount)

        amounts: List[float] = list(daily.values())
        if len(amounts) < 2:
            return self.config.neutral_component

        mean = statistics.fmean(amounts)
        cv = statistics.pstdev(amounts, mu=mean) / mean
        return max(0.0, 1.0 - cv)


def _as_datetime(value: Union[datetime, date]) -> datetime:
    """Naive UTC datetime for comparisons; plain dates map to midnight."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    return datetime(value.year, value.month, value.day)
