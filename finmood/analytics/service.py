from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from finmood.analytics.config import AnalyticsConfig
from finmood.analytics.correlator import SpendingCorrelator
from finmood.analytics.health import FinancialHealthScorer
from finmood.analytics.models import (
    MoodAnalytics,
    MoodImpact,
    MoodInput,
    MoodRecord,
    MoodScore,
    MoodTrend,
    PeriodTrendReport,
    RecommendationReport,
    RecommendationSummary,
    ScorePoint,
    TransactionRecord,
)
from finmood.analytics.patterns import PatternAggregator
from finmood.analytics.recommendations import GENERAL_ADVICE, RecommendationGenerator
from finmood.analytics.recorder import MoodRecorder
from finmood.analytics.scoring import MoodScorer
from finmood.analytics.store import MoodStore
from finmood.analytics.trend import TrendAnalyzer
from finmood.utils.decorators import log_execution
from finmood.utils.errors import ConfigurationError, OwnershipError
from finmood.utils.logging import get_logger
from finmood.utils.validation import validate_mood, validate_timeframe

logger = get_logger(__name__)


class TransactionMoodService:
    """Orchestrates mood recording and the mood/spending analytics.

    Holds no per-user state; every operation reads what it needs from the
    injected store and computes its result fresh.
    """

    def __init__(self, store: MoodStore, config: Optional[AnalyticsConfig] = None):
        self.store = store
        self.config = config or _default_analytics_config()
        self.recorder = MoodRecorder(store)
        self.aggregator = PatternAggregator()
        self.correlator = SpendingCorrelator(self.config.correlation)
        self.scorer = MoodScorer(self.config.scoring)
        self.trend_analyzer = TrendAnalyzer(self.config.trend)
        self.health_scorer = FinancialHealthScorer(self.config.health)
        self.recommender = RecommendationGenerator(self.config.recommendations)

    # ---- Recording ----
    def create_transaction_mood(self, data: Union[MoodInput, Mapping[str, Any]]) -> MoodRecord:
        return self.recorder.create_transaction_mood(data)

    def upsert_transaction_mood(self, data: Union[MoodInput, Mapping[str, Any]]) -> MoodRecord:
        return self.recorder.upsert_transaction_mood(data)

    def get_transaction_mood(self, transaction_id: int, user_id: int) -> Optional[MoodRecord]:
        if self.store.find_owned_transaction(transaction_id, user_id) is None:
            raise OwnershipError("Transaction not found or does not belong to user")
        return self.store.get_mood(transaction_id, user_id)

    def list_user_moods(self, user_id: int) -> List[MoodRecord]:
        return self.store.list_moods(user_id)

    # ---- Analytics ----
    @log_execution(log_args=True)
    def get_user_mood_analytics(
        self, user_id: int, timeframe: str = "monthly", now: Optional[datetime] = None
    ) -> MoodAnalytics:
        timeframe = validate_timeframe(timeframe)
        since = self._since(self.config.timeframe_days.get(timeframe), now)

        moods = self.store.list_moods(user_id, since=since)
        # Timeframe bounds the moods only; each mood brings its own transaction
        transactions = [m.transaction for m in moods if m.transaction is not None]

        patterns = self.aggregator.analyze_mood_patterns(moods)
        spending = self.correlator.analyze(moods, transactions)
        trends = self.trend_analyzer.analyze_mood_trend(self._score_history(moods))

        logger.info(
            f"Mood analytics generated: {len(moods)} moods, {len(transactions)} transactions",
            extra={"user_id": user_id},
        )

        return MoodAnalytics(
            summary=patterns.summary,
            by_mood=patterns.by_mood,
            by_category=patterns.by_category,
            emotional_spending=spending.emotional_spending,
            planned_spending=spending.planned_spending,
            mood_correlation=spending.correlation,
            trends=trends,
            insights=spending.insights,
            timeframe=timeframe,
        )

    @log_execution(log_args=True)
    def get_mood_recommendations(self, user_id: int, now: Optional[datetime] = None) -> RecommendationReport:
        cfg = self.config.recommendations
        moods = self.store.list_moods(user_id, limit=cfg.history_limit)

        if not moods:
            logger.debug("No mood data for recommendations", extra={"user_id": user_id})
            return RecommendationReport(recommendations=[], general_advice=GENERAL_ADVICE)

        transactions = self.store.list_transactions(
            user_id, since=self._since(cfg.transaction_window_days, now)
        )

        analysis = self.correlator.analyze(moods, transactions)
        health = self.health_scorer.calculate(transactions, now=now)
        recommendations = self.recommender.generate(moods, analysis, health)

        return RecommendationReport(
            summary=RecommendationSummary(
                total_moods_tracked=len(moods),
                emotional_spending=analysis.emotional_spending,
                planned_spending=analysis.planned_spending,
                financial_health_score=health,
            ),
            recommendations=recommendations,
            analysis=analysis,
        )

    def get_mood_trends(self, user_id: int, group_by: str = "week") -> PeriodTrendReport:
        return self.trend_analyzer.group_by_period(self.store.list_moods(user_id), group_by)

    def predict_mood_impact(self, user_id: int, current_mood: str) -> Optional[MoodImpact]:
        validate_mood(current_mood)
        return self.correlator.predict_mood_impact(self.store.list_moods(user_id), current_mood)

    # ---- Direct calculations ----
    def calculate_mood_score(
        self, transaction: TransactionRecord, context: Optional[Dict[str, Any]] = None
    ) -> MoodScore:
        return self.scorer.calculate_mood_score(transaction, context)

    def analyze_mood_trend(self, history: Sequence[ScorePoint]) -> MoodTrend:
        return self.trend_analyzer.analyze_mood_trend(history)

    def calculate_financial_health_score(
        self, transactions: Sequence[TransactionRecord], period: str = "month", now: Optional[datetime] = None
    ) -> int:
        return self.health_scorer.calculate(transactions, period=period, now=now)

    # ---- Helpers ----
    def _score_history(self, moods: Sequence[MoodRecord]) -> List[ScorePoint]:
        # Store returns newest first; trend windows expect oldest first
        ordered = sorted((m for m in moods if m.transaction is not None), key=lambda m: m.created_at)
        return [
            ScorePoint(score=self.scorer.calculate_mood_score(m.transaction).score, date=m.created_at)
            for m in ordered
        ]

    @staticmethod
    def _since(days: Optional[int], now: Optional[datetime]) -> Optional[datetime]:
        if days is None:
            return None
        return (now or datetime.utcnow()) - timedelta(days=days)


def _default_analytics_config() -> AnalyticsConfig:
    """Analytics section of the loaded application Config, else config.yaml."""
    # Imported here: finmood.config imports this package
    from finmood.config import get_config

    try:
        return get_config().analytics
    except ConfigurationError:
        return AnalyticsConfig.from_yaml()
