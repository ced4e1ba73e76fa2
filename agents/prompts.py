"""Prompt builder utilities for the marketing strategy agent.

Builders return **plain strings** without role metadata so the caller decides
which role each part goes into.
"""

from models.inventory import Product

__all__ = [
    "MARKETING_SYSTEM_PROMPT",
    "build_marketing_strategy_prompt",
]


MARKETING_SYSTEM_PROMPT = (
    "You are a world-class retail analytics expert. "
    'Respond ONLY with a JSON object of the form {"strategies": [...]}.'
)


def build_marketing_strategy_prompt(product: Product, reason: str) -> str:
    """Return the user prompt asking for four marketing strategies for ``product``."""
    return f"""
        Provide 4 distinct, high-impact marketing strategies to maximize sales and minimize waste for this product.

        Context:
        - Product: {product.name}
        - Category: {product.category.value}
        - Price: ${product.selling_price}
        - Stock: {product.current_stock} units
        - Current Situation: {reason}

        Specific Strategic Requirements:
        1. SELL FAST STRATEGY: A plan focused purely on increasing transaction volume immediately (e.g. volume discounts, high-visibility positioning).
        2. WASTE PREVENTION STRATEGY: If close to expiry, suggest aggressive clearance or alternative usage (e.g. donation for tax credit, bundling with non-perishables).
        3. STRATEGIC BUNDLING: Suggest a specific pairing with another item in the store to increase basket size.
        4. LOYALTY ENGAGEMENT: A way to use this product to drive repeat store visits.

        Response Format: Return a JSON object with a "strategies" array of objects with keys "type" (one of DISCOUNT, BUNDLE, FLASH_SALE, LOYALTY, BOGO), "title", and "description".
        Ensure strategies are concrete and actionable. Do not use generic filler text.
        """
