from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import logging
import yaml

from finmood.utils.paths import resolve_config_path

logger = logging.getLogger(__name__)


@dataclass
class ScoreBand:
    threshold: float
    points: int
    factor: str


@dataclass
class CategoryImpact:
    score: int
    factor: str


@dataclass
class ScoringConfig:
    base_score: int = 50
    # Checked in order; first band whose threshold is exceeded applies
    income_bands: List[ScoreBand] = field(
        default_factory=lambda: [
            ScoreBand(1000, 25, "large-income"),
            ScoreBand(500, 15, "medium-income"),
            ScoreBand(100, 8, "small-income"),
        ]
    )
    expense_bands: List[ScoreBand] = field(
        default_factory=lambda: [
            ScoreBand(500, -30, "large-expense"),
            ScoreBand(200, -20, "medium-expense"),
            ScoreBand(50, -10, "small-expense"),
        ]
    )
    micro_expense: ScoreBand = field(default_factory=lambda: ScoreBand(10, 5, "micro-expense"))
    category_impacts: Dict[str, CategoryImpact] = field(
        default_factory=lambda: {
            "Savings": CategoryImpact(15, "savings"),
            "Investment": CategoryImpact(12, "investment"),
            "Education": CategoryImpact(8, "education"),
            "Healthcare": CategoryImpact(5, "healthcare"),
            "Groceries": CategoryImpact(0, "groceries"),
            "Utilities": CategoryImpact(-2, "utilities"),
            "Transportation": CategoryImpact(-3, "transportation"),
            "Dining": CategoryImpact(-8, "dining"),
            "Entertainment": CategoryImpact(-10, "entertainment"),
            "Shopping": CategoryImpact(-12, "shopping"),
            "Travel": CategoryImpact(-15, "travel"),
        }
    )
    unknown_category: CategoryImpact = field(default_factory=lambda: CategoryImpact(0, "other"))
    budget_status: Dict[str, CategoryImpact] = field(
        default_factory=lambda: {
            "under_budget": CategoryImpact(10, "under-budget"),
            "over_budget": CategoryImpact(-15, "over-budget"),
        }
    )
    savings_trend: Dict[str, CategoryImpact] = field(
        default_factory=lambda: {
            "increasing": CategoryImpact(8, "savings-increasing"),
            "decreasing": CategoryImpact(-12, "savings-decreasing"),
        }
    )


@dataclass
class CorrelationConfig:
    emotional_moods: List[str] = field(default_factory=lambda: ["stressed", "anxious", "bored", "impulsive"])
    planned_moods: List[str] = field(default_factory=lambda: ["planned"])
    emotional_dominance_ratio: float = 1.5
    impact_high_confidence_samples: int = 5
    impact_warning_amount: float = 100.0


@dataclass
class TrendConfig:
    window_size: int = 7
    strong_threshold: float = 10.0
    mild_threshold: float = 5.0
    confidence_multiplier: float = 2.0


@dataclass
class HealthConfig:
    window_days: int = 30
    neutral_score: int = 50
    savings_multiplier: float = 200.0
    savings_weight: float = 0.5
    diversity_weight: float = 0.3
    consistency_weight: float = 0.2
    expenses_per_category: float = 3.0
    neutral_component: float = 0.5


@dataclass
class RecommendationConfig:
    history_limit: int = 50
    transaction_window_days: int = 30
    stress_mood: str = "stressed"
    stress_count_threshold: int = 5
    health_score_threshold: int = 60


@dataclass
class AnalyticsConfig:
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    correlation: CorrelationConfig = field(default_factory=CorrelationConfig)
    trend: TrendConfig = field(default_factory=TrendConfig)
    health: HealthConfig = field(default_factory=HealthConfig)
    recommendations: RecommendationConfig = field(default_factory=RecommendationConfig)
    # None means no look-back limit
    timeframe_days: Dict[str, Optional[int]] = field(
        default_factory=lambda: {"weekly": 7, "monthly": 30, "yearly": 365, "all": None}
    )

    @classmethod
    def from_yaml(cls, config_path: str = "config.yaml") -> "AnalyticsConfig":
        cfg_path = resolve_config_path(config_path)
        if not cfg_path.exists():
            logger.warning(f"Analytics config not found at {cfg_path}; using defaults")
            return cls()
        with open(cfg_path, "r") as f:
            data = yaml.safe_load(f) or {}
        return cls.from_dict(data.get("analytics") or {})

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "AnalyticsConfig":
        defaults = cls()

        s_src = d.get("scoring", {})
        def_s = defaults.scoring
        scoring = ScoringConfig(
            base_score=int(s_src.get("base_score", def_s.base_score)),
            income_bands=_bands(s_src.get("income_bands"), def_s.income_bands),
            expense_bands=_bands(s_src.get("expense_bands"), def_s.expense_bands),
            micro_expense=_band(s_src.get("micro_expense"), def_s.micro_expense),
            category_impacts=_impacts(s_src.get("category_impacts"), def_s.category_impacts),
            unknown_category=def_s.unknown_category,
            budget_status=_impacts(s_src.get("budget_status"), def_s.budget_status),
            savings_trend=_impacts(s_src.get("savings_trend"), def_s.savings_trend),
        )

        c_src = d.get("correlation", {})
        def_c = defaults.correlation
        correlation = CorrelationConfig(
            emotional_moods=list(c_src.get("emotional_moods", def_c.emotional_moods)),
            planned_moods=list(c_src.get("planned_moods", def_c.planned_moods)),
            emotional_dominance_ratio=float(c_src.get("emotional_dominance_ratio", def_c.emotional_dominance_ratio)),
            impact_high_confidence_samples=int(
                c_src.get("impact_high_confidence_samples", def_c.impact_high_confidence_samples)
            ),
            impact_warning_amount=float(c_src.get("impact_warning_amount", def_c.impact_warning_amount)),
        )

        t_src = d.get("trend", {})
        def_t = defaults.trend
        trend = TrendConfig(
            window_size=int(t_src.get("window_size", def_t.window_size)),
            strong_threshold=float(t_src.get("strong_threshold", def_t.strong_threshold)),
            mild_threshold=float(t_src.get("mild_threshold", def_t.mild_threshold)),
            confidence_multiplier=float(t_src.get("confidence_multiplier", def_t.confidence_multiplier)),
        )

        h_src = d.get("health", {})
        def_h = defaults.health
        health = HealthConfig(
            window_days=int(h_src.get("window_days", def_h.window_days)),
            neutral_score=int(h_src.get("neutral_score", def_h.neutral_score)),
            savings_multiplier=float(h_src.get("savings_multiplier", def_h.savings_multiplier)),
            savings_weight=float(h_src.get("savings_weight", def_h.savings_weight)),
            diversity_weight=float(h_src.get("diversity_weight", def_h.diversity_weight)),
            consistency_weight=float(h_src.get("consistency_weight", def_h.consistency_weight)),
            expenses_per_category=float(h_src.get("expenses_per_category", def_h.expenses_per_category)),
            neutral_component=float(h_src.get("neutral_component", def_h.neutral_component)),
        )

        r_src = d.get("recommendations", {})
        def_r = defaults.recommendations
        recommendations = RecommendationConfig(
            history_limit=int(r_src.get("history_limit", def_r.history_limit)),
            transaction_window_days=int(r_src.get("transaction_window_days", def_r.transaction_window_days)),
            stress_mood=str(r_src.get("stress_mood", def_r.stress_mood)),
            stress_count_threshold=int(r_src.get("stress_count_threshold", def_r.stress_count_threshold)),
            health_score_threshold=int(r_src.get("health_score_threshold", def_r.health_score_threshold)),
        )

        timeframe_days = dict(defaults.timeframe_days)
        for key, val in (d.get("timeframe_days") or {}).items():
            timeframe_days[str(key)] = None if val is None else int(val)

        return cls(
            scoring=scoring,
            correlation=correlation,
            trend=trend,
            health=health,
            recommendations=recommendations,
            timeframe_days=timeframe_days,
        )


def _band(src: Optional[Dict[str, Any]], default: ScoreBand) -> ScoreBand:
    if not src:
        return default
    return ScoreBand(
        threshold=float(src.get("threshold", default.threshold)),
        points=int(src.get("points", default.points)),
        factor=str(src.get("factor", default.factor)),
    )


def _bands(src: Optional[List[Dict[str, Any]]], default: List[ScoreBand]) -> List[ScoreBand]:
    if not src:
        return list(default)
    return [ScoreBand(float(b["threshold"]), int(b["points"]), str(b["factor"])) for b in src]


def _impacts(src: Optional[Dict[str, Any]], default: Dict[str, CategoryImpact]) -> Dict[str, CategoryImpact]:
    if not src:
        return dict(default)
    return {str(k): CategoryImpact(int(v["score"]), str(v["factor"])) for k, v in src.items()}
