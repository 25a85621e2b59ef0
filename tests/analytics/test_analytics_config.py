from pathlib import Path

from finmood.analytics.config import AnalyticsConfig


def test_defaults():
    cfg = AnalyticsConfig()
    assert cfg.scoring.base_score == 50
    assert [b.factor for b in cfg.scoring.expense_bands] == ["large-expense", "medium-expense", "small-expense"]
    assert cfg.scoring.category_impacts["Travel"].score == -15
    assert cfg.correlation.emotional_moods == ["stressed", "anxious", "bored", "impulsive"]
    assert cfg.trend.window_size == 7
    assert cfg.health.window_days == 30
    assert cfg.recommendations.history_limit == 50
    assert cfg.timeframe_days == {"weekly": 7, "monthly": 30, "yearly": 365, "all": None}


def test_from_yaml_project_file_matches_defaults(monkeypatch):
    monkeypatch.delenv("FINMOOD_CONFIG", raising=False)
    root = Path(__file__).resolve().parents[2]
    assert AnalyticsConfig.from_yaml(str(root / "config.yaml")) == AnalyticsConfig()


def test_from_yaml_overrides(temp_config_file, monkeypatch):
    monkeypatch.delenv("FINMOOD_CONFIG", raising=False)
    cfg = AnalyticsConfig.from_yaml(temp_config_file)
    assert cfg.health.window_days == 14
    assert cfg.recommendations.stress_count_threshold == 2
    # untouched sections keep their defaults
    assert cfg.health.savings_weight == 0.5
    assert cfg.scoring == AnalyticsConfig().scoring


def test_from_yaml_missing_file_uses_defaults(tmp_path, monkeypatch):
    monkeypatch.setenv("FINMOOD_CONFIG", str(tmp_path / "absent-analytics.yaml"))
    assert AnalyticsConfig.from_yaml() == AnalyticsConfig()


def test_from_dict_bands_and_impacts():
    cfg = AnalyticsConfig.from_dict({
        "scoring": {
            "income_bands": [{"threshold": 10, "points": 1, "factor": "any-income"}],
            "category_impacts": {"Pets": {"score": 3, "factor": "pets"}},
        },
        "timeframe_days": {"weekly": 14},
    })
    assert len(cfg.scoring.income_bands) == 1
    assert cfg.scoring.income_bands[0].factor == "any-income"
    assert list(cfg.scoring.category_impacts) == ["Pets"]
    assert cfg.timeframe_days["weekly"] == 14
    assert cfg.timeframe_days["all"] is None
