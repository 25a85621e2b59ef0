from __future__ import annotations

from typing import Callable, List, Optional, Sequence

from finmood.analytics.config import RecommendationConfig
from finmood.analytics.models import MoodRecord, Recommendation, SpendingCorrelation

RecommendationRule = Callable[
    [Sequence[MoodRecord], SpendingCorrelation, int, RecommendationConfig], Optional[Recommendation]
]

GENERAL_ADVICE = "Track your moods with transactions to get personalized insights!"


def emotional_spending_rule(
    moods: Sequence[MoodRecord], analysis: SpendingCorrelation, health_score: int, cfg: RecommendationConfig
) -> Optional[Recommendation]:
    if analysis.emotional_spending <= 0:
        return None
    return Recommendation(
        type="emotional_spending",
        title="Manage Emotional Spending",
        description=f"You've spent ${analysis.emotional_spending:.2f} during emotional states",
        actions=[
            "Implement a 24-hour waiting rule for emotional purchases",
            'Create a "fun money" budget for spontaneous spending',
            "Practice mindfulness before making purchases",
        ],
    )


def stress_management_rule(
    moods: Sequence[MoodRecord], analysis: SpendingCorrelation, health_score: int, cfg: RecommendationConfig
) -> Optional[Recommendation]:
    stressed = sum(1 for m in moods if m.mood == cfg.stress_mood)
    if stressed <= cfg.stress_count_threshold:
        return None
    return Recommendation(
        type="stress_management",
        title="Stress-Related Spending",
        description=f"You've recorded {stressed} {cfg.stress_mood} moods with transactions",
        actions=[
            "Identify stress triggers that lead to spending",
            "Develop alternative stress-relief activities",
            "Set up budget alerts for high-stress periods",
        ],
    )


def financial_health_rule(
    moods: Sequence[MoodRecord], analysis: SpendingCorrelation, health_score: int, cfg: RecommendationConfig
) -> Optional[Recommendation]:
    if health_score >= cfg.health_score_threshold:
        return None
    return Recommendation(
        type="financial_health",
        title="Improve Financial Health",
        description=f"Your financial health score is {health_score}/100",
        actions=[
            "Increase savings rate by 5%",
            "Review and categorize all transactions",
            "Set specific financial goals",
        ],
    )


RECOMMENDATION_RULES: List[RecommendationRule] = [
    emotional_spending_rule,
    stress_management_rule,
    financial_health_rule,
]


class RecommendationGenerator:
    """Apply the ordered recommendation rules to an analysis."""

    def __init__(
        self,
        config: Optional[RecommendationConfig] = None,
        rules: Optional[List[RecommendationRule]] = None,
    ):
        self.config = config or RecommendationConfig()
        self.rules = rules if rules is not None else RECOMMENDATION_RULES

    def generate(
        self, moods: Sequence[MoodRecord], analysis: SpendingCorrelation, health_score: int
    ) -> List[Recommendation]:
        recommendations: List[Recommendation] = []
        for rule in self.rules:
            rec = rule(moods, analysis, health_score, self.config)
            if rec is not None:
                recommendations.append(rec)
        return recommendations
