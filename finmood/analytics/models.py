from dataclasses import asdict, dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Union

from finmood.utils.validation import MOOD_LABELS

DEFAULT_INTENSITY = 5


@dataclass
class TransactionRecord:
    """Read-only view of a transaction.

    ``amount`` is signed: positive is income, zero or negative is an expense.
    """

    id: int
    amount: float
    date: Union[datetime, date]
    category: Optional[str] = None
    account_id: Optional[int] = None
    user_id: Optional[int] = None
    description: Optional[str] = None


@dataclass
class MoodRecord:
    id: int
    transaction_id: int
    user_id: int
    mood: str
    intensity: int = DEFAULT_INTENSITY
    notes: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)
    transaction: Optional[TransactionRecord] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-ready dictionary (ISO-8601 timestamps)."""
        data = asdict(self)
        data["created_at"] = self.created_at.isoformat() if self.created_at else None
        data["updated_at"] = self.updated_at.isoformat() if self.updated_at else None
        if self.transaction is not None and self.transaction.date is not None:
            data["transaction"]["date"] = self.transaction.date.isoformat()
        return data


@dataclass
class MoodInput:
    """A proposed annotation as supplied by the caller."""

    transaction_id: int
    user_id: int
    mood: str
    notes: Optional[str] = None
    intensity: Optional[int] = None


@dataclass(frozen=True)
class ValidatedMood:
    transaction_id: int
    user_id: int
    mood: str
    intensity: int
    notes: Optional[str] = None


# ---- Pattern aggregation ----
@dataclass
class MoodStats:
    count: int = 0
    total_intensity: int = 0
    average_intensity: float = 0.0


@dataclass
class CategoryStats:
    count: int = 0
    moods: Dict[str, int] = field(default_factory=dict)


@dataclass
class PatternSummary:
    total_moods: int = 0
    average_intensity: float = 0.0
    most_common_mood: str = "none"


@dataclass
class MoodPatterns:
    summary: PatternSummary = field(default_factory=PatternSummary)
    by_mood: Dict[str, MoodStats] = field(default_factory=dict)
    by_category: Dict[str, CategoryStats] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---- Spending correlation ----
@dataclass
class SpendingStats:
    total: float = 0.0
    count: int = 0
    average: float = 0.0


@dataclass
class Insight:
    type: str  # behavioral | pattern
    title: str
    message: str
    severity: str  # low | medium | high
    recommendation: str


@dataclass
class SpendingCorrelation:
    emotional_spending: float = 0.0
    planned_spending: float = 0.0
    correlation: Dict[str, SpendingStats] = field(default_factory=dict)
    insights: List[Insight] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class MoodImpact:
    predicted_spending: float
    likely_category: str
    confidence: str  # high | medium
    warning: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---- Scoring and trends ----
@dataclass
class MoodScore:
    score: int
    factors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ScorePoint:
    score: float
    date: Optional[datetime] = None


@dataclass
class MoodTrend:
    trend: str = "stable"  # improving | slightly improving | stable | slightly declining | declining
    direction: float = 0.0
    confidence: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class PeriodTrend:
    moods: Dict[str, int] = field(default_factory=dict)
    total_spent: float = 0.0
    count: int = 0


@dataclass
class PeriodMood:
    period: str
    mood: str
    count: int


@dataclass
class PeriodTrendReport:
    group_by: str
    trends: Dict[str, PeriodTrend] = field(default_factory=dict)
    total_periods: int = 0
    most_common_moods: List[PeriodMood] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---- Recommendations ----
@dataclass
class Recommendation:
    type: str  # emotional_spending | stress_management | financial_health
    title: str
    description: str
    actions: List[str] = field(default_factory=list)


@dataclass
class RecommendationSummary:
    total_moods_tracked: int
    emotional_spending: float
    planned_spending: float
    financial_health_score: int


@dataclass
class RecommendationReport:
    recommendations: List[Recommendation] = field(default_factory=list)
    summary: Optional[RecommendationSummary] = None
    analysis: Optional[SpendingCorrelation] = None
    general_advice: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---- Combined analytics ----
@dataclass
class MoodAnalytics:
    summary: PatternSummary
    by_mood: Dict[str, MoodStats]
    by_category: Dict[str, CategoryStats]
    emotional_spending: float
    planned_spending: float
    mood_correlation: Dict[str, SpendingStats]
    trends: MoodTrend
    insights: List[Insight] = field(default_factory=list)
    timeframe: str = "monthly"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
