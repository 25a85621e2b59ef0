from datetime import datetime, timedelta

import pytest
from sqlalchemy.exc import IntegrityError

from finmood.analytics import AnalyticsConfig, TransactionMoodService
from finmood.analytics.config import RecommendationConfig
from finmood.analytics.models import TransactionRecord
from finmood.analytics.recommendations import GENERAL_ADVICE
from finmood.config import load_config
from finmood.database.models import Transaction
from finmood.utils.errors import OwnershipError, ValidationError


def _service(store, **kw):
    return TransactionMoodService(store, AnalyticsConfig(**kw))


def _record(service, transaction_id, mood, user_id=1, **kw):
    return service.create_transaction_mood({"transaction_id": transaction_id, "user_id": user_id, "mood": mood, **kw})


def test_create_and_fetch(store):
    service = _service(store)
    created = _record(service, 1, "stressed", intensity=8, notes="after a long day")

    assert created.transaction.category == "Dining"
    fetched = service.get_transaction_mood(1, 1)
    assert fetched.id == created.id
    assert fetched.intensity == 8
    assert fetched.notes == "after a long day"


def test_get_transaction_mood_without_annotation(store):
    assert _service(store).get_transaction_mood(2, 1) is None


def test_get_transaction_mood_other_user(store):
    service = _service(store)
    _record(service, 1, "happy")
    with pytest.raises(OwnershipError):
        service.get_transaction_mood(1, 2)


def test_create_duplicate_raises(store):
    service = _service(store)
    _record(service, 1, "stressed")
    with pytest.raises(IntegrityError):
        _record(service, 1, "happy")
    assert len(service.list_user_moods(1)) == 1


def test_create_for_foreign_transaction(store):
    service = _service(store)
    with pytest.raises(OwnershipError):
        _record(service, 5, "stressed", user_id=1)
    assert service.list_user_moods(1) == []


def test_upsert_is_idempotent(store):
    service = _service(store)
    data = {"transaction_id": 1, "user_id": 1, "mood": "planned", "intensity": 4}
    first = service.upsert_transaction_mood(data)
    second = service.upsert_transaction_mood(data)
    assert first.id == second.id
    assert len(service.list_user_moods(1)) == 1

    third = service.upsert_transaction_mood({"transaction_id": 1, "user_id": 1, "mood": "regretful"})
    assert third.id == first.id
    assert third.mood == "regretful"
    assert third.intensity == 5


def test_user_mood_analytics(store):
    service = _service(store)
    _record(service, 1, "stressed")
    _record(service, 2, "planned")

    analytics = service.get_user_mood_analytics(1)

    assert analytics.timeframe == "monthly"
    assert analytics.summary.total_moods == 2
    assert analytics.emotional_spending == pytest.approx(80)
    assert analytics.planned_spending == pytest.approx(200)
    assert [i.type for i in analytics.insights] == ["pattern"]
    assert "feeling planned ($200.00" in analytics.insights[0].message
    assert analytics.trends.trend == "stable"
    assert set(analytics.by_category) == {"Dining", "Savings"}
    assert analytics.to_dict()["summary"]["total_moods"] == 2


def test_user_mood_analytics_empty(store):
    analytics = _service(store).get_user_mood_analytics(1, "all")
    assert analytics.summary.most_common_mood == "none"
    assert analytics.mood_correlation == {}
    assert analytics.insights == []
    assert analytics.trends.trend == "stable"


def test_user_mood_analytics_timeframe_window(store):
    service = _service(store)
    _record(service, 1, "stressed")

    later = datetime.utcnow() + timedelta(days=60)
    assert service.get_user_mood_analytics(1, "weekly", now=later).summary.total_moods == 0
    assert service.get_user_mood_analytics(1, "yearly", now=later).summary.total_moods == 1


def test_user_mood_analytics_counts_old_transactions(store, seeded_db):
    # mood recorded today on a purchase from before the window
    with seeded_db() as session:
        session.add(Transaction(id=6, account_id=1, amount=-500.0, category="Shopping",
                                date=datetime.utcnow() - timedelta(days=40)))
        session.commit()
    service = _service(store)
    _record(service, 6, "stressed")

    analytics = service.get_user_mood_analytics(1, "monthly")

    assert analytics.summary.total_moods == 1
    assert analytics.emotional_spending == pytest.approx(500)
    assert analytics.mood_correlation["stressed"].total == pytest.approx(500)
    assert [i.type for i in analytics.insights] == ["behavioral", "pattern"]


def test_user_mood_analytics_invalid_timeframe(store):
    with pytest.raises(ValidationError):
        _service(store).get_user_mood_analytics(1, "fortnightly")


def test_users_are_isolated(store):
    service = _service(store)
    _record(service, 5, "impulsive", user_id=2)

    assert service.get_user_mood_analytics(1).summary.total_moods == 0
    assert service.get_user_mood_analytics(2).emotional_spending == pytest.approx(60)


def test_recommendations_without_moods(store):
    report = _service(store).get_mood_recommendations(1)
    assert report.recommendations == []
    assert report.general_advice == GENERAL_ADVICE
    assert report.summary is None


def test_recommendations(store):
    service = _service(store, recommendations=RecommendationConfig(stress_count_threshold=1))
    _record(service, 1, "stressed")
    _record(service, 4, "stressed")
    _record(service, 2, "planned")

    report = service.get_mood_recommendations(1)

    assert [r.type for r in report.recommendations] == ["emotional_spending", "stress_management"]
    assert report.summary.total_moods_tracked == 3
    assert report.summary.emotional_spending == pytest.approx(125)
    assert report.summary.planned_spending == pytest.approx(200)
    assert report.summary.financial_health_score == 88
    assert report.general_advice is None


def test_mood_trends(store):
    service = _service(store)
    _record(service, 1, "stressed")
    _record(service, 2, "planned")
    _record(service, 3, "happy")

    report = service.get_mood_trends(1, "month")
    assert report.total_periods == 1
    period = next(iter(report.trends.values()))
    assert period.count == 3
    assert period.total_spent == pytest.approx(280)

    with pytest.raises(ValidationError):
        service.get_mood_trends(1, "day")


def test_predict_mood_impact(store):
    service = _service(store)
    _record(service, 1, "stressed")
    _record(service, 4, "stressed")

    impact = service.predict_mood_impact(1, "stressed")
    assert impact.predicted_spending == pytest.approx(62.5)
    assert impact.confidence == "medium"
    assert impact.warning is None

    assert service.predict_mood_impact(1, "happy") is None
    with pytest.raises(ValidationError):
        service.predict_mood_impact(1, "curious")


def test_direct_calculations(store):
    service = _service(store)
    tx = TransactionRecord(id=1, amount=-120, date=datetime.utcnow(), category="Dining")
    assert service.calculate_mood_score(tx).score == 32
    assert service.calculate_financial_health_score([]) == 50
    assert service.analyze_mood_trend([]).trend == "stable"


def test_default_config_from_project_file(store, monkeypatch):
    monkeypatch.delenv("FINMOOD_CONFIG", raising=False)
    assert TransactionMoodService(store).config == AnalyticsConfig()


def test_default_config_from_loaded_app_config(store, temp_config_file, monkeypatch):
    monkeypatch.delenv("FINMOOD_CONFIG", raising=False)
    load_config(temp_config_file)

    service = TransactionMoodService(store)

    assert service.config.health.window_days == 14
    assert service.health_scorer.config.window_days == 14
    assert service.recommender.config.stress_count_threshold == 2
