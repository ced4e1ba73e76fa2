"""
Inventory agent module for the retail inventory toolkit.
Defines the InventoryAgent, which wires the product store, the replenishment
decision engine and the marketing strategy agent into the dashboard actions:
submitting a product, reviewing one, and refreshing its strategies.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone

from agents.analytics import InventoryOverview, build_overview
from agents.marketing import MarketingStrategyAgent
from agents.replenishment import analyze_inventory, calculate_decision
from config.config import DashboardConfig, ReorderPolicyConfig
from models.enums import StrategyTrigger
from models.inventory import AnalysisResult, Product, ProductDraft
from models.marketing import MarketingStrategy
from models.store import ProductStore

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class SubmissionResult:
    """Outcome of submitting a new product."""

    product: Product
    analysis: AnalysisResult
    strategies: list[MarketingStrategy] = field(default_factory=list)


class InventoryAgent:
    """
    Coordinates inventory decisions for the dashboard.
    - perceive: the product store snapshot at call time
    - decide: the replenishment decision engine
    - act: marketing strategy requests for the product under review
    """

    def __init__(
        self,
        store: ProductStore,
        strategy_agent: MarketingStrategyAgent,
        policy: ReorderPolicyConfig | None = None,
        dashboard_config: DashboardConfig | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.store = store
        self.strategy_agent = strategy_agent
        self.policy = policy or ReorderPolicyConfig()
        self.dashboard_config = dashboard_config or DashboardConfig()
        self.clock = clock

    def analyze(self, product_id: str) -> AnalysisResult | None:
        """Evaluate one product against the current snapshot; None if it is unknown."""
        snapshot = self.store.snapshot()
        product = next((p for p in snapshot if p.id == product_id), None)
        if product is None:
            logger.warning(f"Cannot analyse unknown product {product_id}")
            return None
        return calculate_decision(product, snapshot, now=self.clock(), policy=self.policy)

    def analyze_all(self) -> list[AnalysisResult]:
        return analyze_inventory(self.store.snapshot(), now=self.clock(), policy=self.policy)

    def reorder_recommendations(self) -> list[AnalysisResult]:
        """Results recommending a reorder, highest risk first."""
        rank = {"HIGH": 0, "MEDIUM": 1, "LOW": 2}
        results = [r for r in self.analyze_all() if r.reorder]
        return sorted(results, key=lambda r: rank[r.risk_level.value])

    async def submit_product(self, draft: ProductDraft) -> SubmissionResult:
        """
        Add a new product, analyse it, and request launch strategies.

        Args:
            draft: Validated form input.

        Returns:
            The created product with its verdict and strategies.
        """
        now = self.clock()
        product = self.store.add(draft, now=now)
        analysis = calculate_decision(product, self.store.snapshot(), now=now, policy=self.policy)
        logger.info(
            f"Submitted {product.id}: {'REORDER' if analysis.reorder else 'HOLD'} "
            f"({analysis.risk_level.value}) - {analysis.reason}"
        )
        strategies = await self.strategy_agent.request(product, StrategyTrigger.NEW_ENTRY)
        return SubmissionResult(product=product, analysis=analysis, strategies=strategies)

    async def review_product(self, product_id: str) -> list[MarketingStrategy] | None:
        """Strategies for a product opened from the inventory table; None if unknown."""
        return await self._request_for(product_id, StrategyTrigger.INVENTORY_REVIEW)

    async def refresh_strategies(self, product_id: str) -> list[MarketingStrategy] | None:
        """Fresh strategies for the product currently shown; None if unknown."""
        return await self._request_for(product_id, StrategyTrigger.MANUAL_REFRESH)

    async def _request_for(self, product_id: str, trigger: StrategyTrigger) -> list[MarketingStrategy] | None:
        product = self.store.get(product_id)
        if product is None:
            logger.warning(f"Cannot request strategies for unknown product {product_id}")
            return None
        return await self.strategy_agent.request(product, trigger)

    def overview(self) -> InventoryOverview:
        return build_overview(self.store.snapshot(), now=self.clock(), config=self.dashboard_config)
