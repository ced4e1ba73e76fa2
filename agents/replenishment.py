"""
Replenishment decision engine.

Maps a product (plus the full product collection, for the category sales
fallback) to a reorder verdict using fixed lead-time / safety-stock rules:

1. Expiry lockout: fewer than ``expiry_lockout_days`` to expiry blocks reordering.
2. Demand depletion: stock at or below the lead-time + safety demand window
   triggers a reorder up to ``reorder_target_days`` of demand.
3. Otherwise stock is healthy.

The engine is pure; "now" is always passed in.
"""

import logging
import math
from collections.abc import Iterable, Sequence
from datetime import date, datetime, time, timezone
from decimal import ROUND_HALF_UP, Decimal

from config.config import ReorderPolicyConfig
from models.enums import Category, RiskLevel
from models.inventory import AnalysisResult, InvalidProductError, Product

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 3600
HEALTHY_REASON = "Inventory levels are healthy."

DEFAULT_POLICY = ReorderPolicyConfig()


def round_half_up(value: float) -> int:
    """Round .5 towards +inf, as opposed to round()'s ties-to-even."""
    return math.floor(value + 0.5)


def format_velocity(value: float) -> str:
    """One decimal place, ties away from zero on the exact binary value."""
    return str(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def fractional_days_to_expiry(expiry_date: date, now: datetime) -> float:
    """Days from ``now`` until midnight UTC of the expiry date, possibly negative."""
    expiry = datetime.combine(expiry_date, time.min, tzinfo=timezone.utc)
    return (expiry - as_utc(now)).total_seconds() / SECONDS_PER_DAY


def days_to_expiry(expiry_date: date, now: datetime) -> int:
    """Whole days until expiry, rounded up."""
    return math.ceil(fractional_days_to_expiry(expiry_date, now))


def category_average_sales(category: Category, products: Iterable[Product]) -> float:
    """Mean avg_daily_sales over a category; the denominator floors at 1."""
    peers = [p.avg_daily_sales for p in products if p.category == category]
    return sum(peers) / (len(peers) or 1)


def _check_inputs(target: Product) -> None:
    # Catches records built with model_construct() or otherwise unvalidated
    problems = []
    if not isinstance(target.expiry_date, date):
        problems.append("expiry_date")
    if not isinstance(target.current_stock, int) or target.current_stock < 0:
        problems.append("current_stock")
    sales = target.avg_daily_sales
    if not isinstance(sales, int | float) or not math.isfinite(sales) or sales < 0:
        problems.append("avg_daily_sales")
    if problems:
        raise InvalidProductError(
            f"Product {target.id} cannot be analysed: invalid {', '.join(problems)}",
            fields=problems,
        )


def calculate_decision(
    target: Product,
    all_products: Sequence[Product],
    *,
    now: datetime,
    policy: ReorderPolicyConfig = DEFAULT_POLICY,
) -> AnalysisResult:
    """
    Produce exactly one AnalysisResult for ``target``.

    Args:
        target: The product under evaluation (need not be in ``all_products``).
        all_products: The current collection, used for the category sales fallback.
        now: Evaluation time; naive datetimes are treated as UTC.
        policy: Lead time, safety stock and threshold constants.

    Raises:
        InvalidProductError: If the product carries values that cannot be evaluated.
    """
    _check_inputs(target)

    expiry_days = days_to_expiry(target.expiry_date, now)
    category_avg_sales = category_average_sales(target.category, all_products)
    daily_sales = target.avg_daily_sales or category_avg_sales
    demand_window = daily_sales * policy.demand_window_days

    if expiry_days < policy.expiry_lockout_days:
        result = AnalysisResult(
            product_id=target.id,
            reorder=False,
            suggested_quantity=0,
            reason=f"CRITICAL: Expiry in {expiry_days} days. Reordering blocked to prevent wastage.",
            risk_level=RiskLevel.HIGH,
        )
    elif target.current_stock <= demand_window:
        # Literal arithmetic, not clamped at zero
        quantity = round_half_up(daily_sales * policy.reorder_target_days - target.current_stock)
        depletion_days = round_half_up(target.current_stock / (daily_sales or 1))
        low_stock = target.current_stock < daily_sales * policy.low_stock_risk_multiplier
        result = AnalysisResult(
            product_id=target.id,
            reorder=True,
            suggested_quantity=quantity,
            reason=(
                f"Demand Forecast: Daily velocity of {format_velocity(daily_sales)} units. "
                f"Stock will deplete in {depletion_days} days."
            ),
            risk_level=RiskLevel.HIGH if low_stock else RiskLevel.MEDIUM,
        )
    else:
        result = AnalysisResult(
            product_id=target.id,
            reorder=False,
            suggested_quantity=0,
            reason=HEALTHY_REASON,
            risk_level=RiskLevel.LOW,
        )

    logger.debug(
        "Decision for %s: reorder=%s qty=%s risk=%s (expiry_days=%s, daily_sales=%.2f, window=%.2f)",
        target.id,
        result.reorder,
        result.suggested_quantity,
        result.risk_level.value,
        expiry_days,
        daily_sales,
        demand_window,
    )
    return result


def analyze_inventory(
    products: Sequence[Product],
    *,
    now: datetime,
    policy: ReorderPolicyConfig = DEFAULT_POLICY,
) -> list[AnalysisResult]:
    """Evaluate every product against the same collection, preserving order."""
    return [calculate_decision(p, products, now=now, policy=policy) for p in products]
