"""
Data models for AI-generated marketing strategies.
"""

from pydantic import BaseModel, Field

from .enums import StrategyType


class MarketingStrategy(BaseModel):
    """A single actionable marketing idea returned by the generative model."""

    type: StrategyType
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)


def fallback_strategies() -> list[MarketingStrategy]:
    """Return the static one-item list used when the generative service is unavailable."""
    return [
        MarketingStrategy(
            type=StrategyType.DISCOUNT,
            title="Manual Clearance Push",
            description="System reached API limit. Recommended action: 25% shelf-edge discount applied immediately.",
        )
    ]
