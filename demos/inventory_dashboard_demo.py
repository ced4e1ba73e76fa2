"""
Demo script for the inventory dashboard workflow.

Loads the product collection (seed catalog on first run), submits a new
product, prints its reorder verdict and marketing strategies, then prints
the overview KPIs and the current reorder recommendations.

Without OPENAI_API_KEY set, strategy requests return the static fallback.
"""

import asyncio
import sys
from pathlib import Path

# Allow running as `python demos/inventory_dashboard_demo.py` from the repo root
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from agents.inventory import InventoryAgent  # noqa: E402
from agents.marketing import MarketingStrategyAgent  # noqa: E402
from config.config import StorageConfig  # noqa: E402
from connectors.product_repository import LocalStorageProductRepository  # noqa: E402
from models.inventory import ProductDraft  # noqa: E402
from models.store import ProductStore  # noqa: E402
from utils.logger import get_logger  # noqa: E402

logger = get_logger("inventory_dashboard_demo")


async def main(storage_path: str = "demo_local_storage.json") -> None:
    repository = LocalStorageProductRepository.from_config(StorageConfig(storage_path=storage_path))
    store = ProductStore.from_repository(repository)
    agent = InventoryAgent(store=store, strategy_agent=MarketingStrategyAgent())

    draft = ProductDraft.from_form(
        {
            "name": "Greek Yogurt 500g",
            "category": "Food",
            "costPrice": "1.10",
            "sellingPrice": "2.90",
            "expiryDate": "2031-01-01",
            "currentStock": "18",
        }
    )
    submission = await agent.submit_product(draft)
    analysis = submission.analysis
    print(f"\n=== {submission.product.name} ({submission.product.id}) ===")
    print(f"Verdict: {'REORDER' if analysis.reorder else 'HOLD'} | risk {analysis.risk_level.value}")
    if analysis.reorder:
        print(f"Recommended units: {analysis.suggested_quantity}")
    print(analysis.reason)
    for strategy in submission.strategies:
        print(f"  [{strategy.type.value}] {strategy.title}: {strategy.description}")

    overview = agent.overview()
    print("\n=== Overview ===")
    print(f"Total SKUs: {overview.total_products}")
    print(f"Low stock: {overview.low_stock_count}")
    print(f"Expiring soon: {overview.expiring_soon_count}")
    print(f"Average margin: {overview.average_margin_pct:.1f}%")
    for alert in overview.priority_alerts:
        flag = "LOW STOCK" if alert.is_low_stock else f"{alert.days_to_expiry} days left"
        print(f"  ! {alert.product.name}: {alert.product.current_stock} units ({flag})")

    print("\n=== Reorder recommendations ===")
    for result in agent.reorder_recommendations():
        product = store.get(result.product_id)
        print(f"  {product.name}: {result.suggested_quantity} units ({result.risk_level.value})")


if __name__ == "__main__":
    asyncio.run(main())
