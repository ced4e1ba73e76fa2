"""
Dashboard analytics over a product snapshot: overview KPIs, per-category
breakdowns, priority alerts, shelf health and top sellers.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime

import pandas as pd

from agents.replenishment import days_to_expiry, fractional_days_to_expiry, round_half_up
from config.config import DashboardConfig
from models.enums import CATEGORIES, ShelfHealth
from models.inventory import Product
from utils.data_generation import products_to_frame

logger = logging.getLogger(__name__)


@dataclass
class PriorityAlert:
    """A product needing attention because of near expiry or very low stock."""

    product: Product
    days_to_expiry: int
    is_low_stock: bool


@dataclass
class InventoryOverview:
    """Headline numbers for the overview page."""

    total_products: int
    low_stock_count: int
    expiring_soon_count: int
    average_margin_pct: float
    capital_by_category: dict[str, int] = field(default_factory=dict)
    priority_alerts: list[PriorityAlert] = field(default_factory=list)


def shelf_health(product: Product, *, now: datetime, config: DashboardConfig | None = None) -> ShelfHealth:
    config = config or DashboardConfig()
    if days_to_expiry(product.expiry_date, now) < config.critical_shelf_days:
        return ShelfHealth.CRITICAL_RISK
    return ShelfHealth.HEALTHY_SHELF


def average_margin_pct(products: Sequence[Product]) -> float:
    """Mean gross margin in percent; an empty snapshot gives 0."""
    return sum(p.margin for p in products) / (len(products) or 1) * 100


def _category_totals(frame: pd.DataFrame, values: pd.Series) -> pd.Series:
    totals = values.groupby(frame["category"]).sum()
    return totals.reindex([c.value for c in CATEGORIES], fill_value=0.0)


def capital_by_category(products: Sequence[Product]) -> dict[str, int]:
    """Capital tied up in stock (stock x cost) per category, all categories present."""
    frame = products_to_frame(list(products))
    totals = _category_totals(frame, frame["current_stock"] * frame["cost_price"])
    return {category: round_half_up(float(value)) for category, value in totals.items()}


def sales_velocity_by_category(products: Sequence[Product]) -> dict[str, float]:
    """Sum of average daily sales per category, all categories present."""
    frame = products_to_frame(list(products))
    totals = _category_totals(frame, frame["avg_daily_sales"])
    return {category: float(value) for category, value in totals.items()}


def priority_alerts(
    products: Sequence[Product], *, now: datetime, config: DashboardConfig | None = None
) -> list[PriorityAlert]:
    """Products expiring soon or nearly out of stock, lowest stock first."""
    config = config or DashboardConfig()
    alerts = []
    for product in products:
        days_left = days_to_expiry(product.expiry_date, now)
        is_low_stock = product.current_stock < config.alert_low_stock_threshold
        if days_left < config.alert_expiry_days or is_low_stock:
            alerts.append(PriorityAlert(product=product, days_to_expiry=days_left, is_low_stock=is_low_stock))
    alerts.sort(key=lambda alert: alert.product.current_stock)
    return alerts[: config.max_priority_alerts]


def top_sellers(products: Sequence[Product], *, config: DashboardConfig | None = None) -> list[Product]:
    config = config or DashboardConfig()
    ranked = sorted(products, key=lambda p: p.avg_daily_sales, reverse=True)
    return ranked[: config.top_sellers_count]


def build_overview(
    products: Sequence[Product], *, now: datetime, config: DashboardConfig | None = None
) -> InventoryOverview:
    """
    Compute the overview page for a product snapshot.

    Args:
        products: Current product collection.
        now: Evaluation time for expiry-based counts.
        config: Dashboard thresholds.
    """
    config = config or DashboardConfig()
    overview = InventoryOverview(
        total_products=len(products),
        low_stock_count=sum(1 for p in products if p.current_stock < config.low_stock_threshold),
        expiring_soon_count=sum(
            1 for p in products if fractional_days_to_expiry(p.expiry_date, now) < config.expiring_soon_days
        ),
        average_margin_pct=average_margin_pct(products),
        capital_by_category=capital_by_category(products),
        priority_alerts=priority_alerts(products, now=now, config=config),
    )
    logger.debug(
        f"Overview: {overview.total_products} products, {overview.low_stock_count} low stock, "
        f"{overview.expiring_soon_count} expiring soon, {len(overview.priority_alerts)} alerts"
    )
    return overview
