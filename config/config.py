"""
Configuration classes for the retail inventory toolkit.
Defines reorder policy constants and service tunables in a type-safe, extensible way.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ReorderPolicyConfig:
    lead_time_days: int = 7
    safety_stock_days: int = 3
    expiry_lockout_days: int = 14
    reorder_target_days: int = 21
    low_stock_risk_multiplier: float = 2

    @property
    def demand_window_days(self) -> int:
        """Days of demand that must be covered before stock is at risk."""
        return self.lead_time_days + self.safety_stock_days


@dataclass
class StrategyRequestConfig:
    model: str = "gpt-4o-mini"
    temperature: float = 0.7
    max_tokens: int = 800
    retry_attempts: int = 1  # No retry policy: a failed call degrades to the fallback
    retry_backoff: float = 1.0
    api_key_env: str = "OPENAI_API_KEY"


@dataclass
class StorageConfig:
    storage_key: str = "retail_products"
    storage_path: str = "local_storage.json"


@dataclass
class DashboardConfig:
    low_stock_threshold: int = 15
    expiring_soon_days: int = 15
    alert_expiry_days: int = 30
    alert_low_stock_threshold: int = 10
    critical_shelf_days: int = 10
    max_priority_alerts: int = 10
    top_sellers_count: int = 6


# Example usage:
# policy = ReorderPolicyConfig(lead_time_days=5)
# policy.demand_window_days  # -> 8
