from receipt_points.core.config import Settings
from receipt_points.models.enums import PointsRule, StoreBackend


def test_defaults():
    cfg = Settings(_env_file=None)
    assert cfg.POINTS_STORE_BACKEND is StoreBackend.MEMORY
    assert cfg.POINTS_RULES == list(PointsRule)


def test_rules_from_comma_separated_env(monkeypatch):
    monkeypatch.setenv("POINTS_RULES", "odd_purchase_day, retailer_name")
    cfg = Settings(_env_file=None)
    assert cfg.POINTS_RULES == [PointsRule.ODD_PURCHASE_DAY, PointsRule.RETAILER_NAME]


def test_backend_and_log_level_from_env(monkeypatch):
    monkeypatch.setenv("POINTS_STORE_BACKEND", "redis")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    cfg = Settings(_env_file=None)
    assert cfg.POINTS_STORE_BACKEND is StoreBackend.REDIS
    assert cfg.LOG_LEVEL == "DEBUG"
