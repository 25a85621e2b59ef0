"""Mood-correlation and financial-scoring public API."""

from .models import (
    MOOD_LABELS,
    MoodAnalytics,
    MoodImpact,
    MoodInput,
    MoodPatterns,
    MoodRecord,
    MoodScore,
    MoodTrend,
    PeriodTrendReport,
    Recommendation,
    RecommendationReport,
    ScorePoint,
    SpendingCorrelation,
    TransactionRecord,
    ValidatedMood,
)
from .config import AnalyticsConfig
from .service import TransactionMoodService

__all__ = [
    "MOOD_LABELS",
    "MoodAnalytics",
    "MoodImpact",
    "MoodInput",
    "MoodPatterns",
    "MoodRecord",
    "MoodScore",
    "MoodTrend",
    "PeriodTrendReport",
    "Recommendation",
    "RecommendationReport",
    "ScorePoint",
    "SpendingCorrelation",
    "TransactionRecord",
    "ValidatedMood",
    "AnalyticsConfig",
    "TransactionMoodService",
]
