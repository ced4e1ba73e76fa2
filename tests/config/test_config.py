import dataclasses

import pytest

from config.config import DashboardConfig, ReorderPolicyConfig, StorageConfig, StrategyRequestConfig


def test_reorder_policy_defaults():
    """Test ReorderPolicyConfig initializes with the standard policy constants."""
    policy = ReorderPolicyConfig()
    assert policy.lead_time_days == 7
    assert policy.safety_stock_days == 3
    assert policy.expiry_lockout_days == 14
    assert policy.reorder_target_days == 21
    assert policy.low_stock_risk_multiplier == 2
    assert policy.demand_window_days == 10


def test_reorder_policy_custom_window():
    policy = ReorderPolicyConfig(lead_time_days=5, safety_stock_days=1)
    assert policy.demand_window_days == 6


def test_reorder_policy_is_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        ReorderPolicyConfig().lead_time_days = 3  # type: ignore[misc]


def test_strategy_request_defaults():
    config = StrategyRequestConfig()
    assert config.model == "gpt-4o-mini"
    assert config.retry_attempts == 1
    assert config.api_key_env == "OPENAI_API_KEY"


def test_storage_defaults():
    assert StorageConfig().storage_key == "retail_products"


def test_dashboard_defaults():
    config = DashboardConfig()
    assert config.low_stock_threshold == 15
    assert config.expiring_soon_days == 15
    assert config.alert_expiry_days == 30
    assert config.alert_low_stock_threshold == 10
    assert config.critical_shelf_days == 10
    assert config.max_priority_alerts == 10
    assert config.top_sellers_count == 6
