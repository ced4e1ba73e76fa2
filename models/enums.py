"""
Centralized Enum definitions for the project.
"""

from enum import Enum


class Category(str, Enum):
    """Closed set of product categories, in display order."""

    FOOD = "Food"
    BEVERAGES = "Beverages"
    HOME_ESSENTIALS = "Home Essentials"
    FURNITURE = "Furniture"
    APPLIANCES = "Appliances"
    CLOTHES = "Clothes"
    TOYS = "Toys"
    ELECTRONICS = "Electronics"
    COSMETICS = "Cosmetics"
    STATIONERY = "Stationery"


CATEGORIES: list[Category] = list(Category)


class RiskLevel(str, Enum):
    """Risk attached to a reorder verdict"""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class StrategyType(str, Enum):
    """Kinds of marketing strategy the generative model may propose"""

    DISCOUNT = "DISCOUNT"
    BUNDLE = "BUNDLE"
    FLASH_SALE = "FLASH_SALE"
    LOYALTY = "LOYALTY"
    BOGO = "BOGO"


class StrategyTrigger(str, Enum):
    """Situations that prompt a strategy request (passed to the model as context)"""

    NEW_ENTRY = "New Inventory Entry"  # Product just submitted
    INVENTORY_REVIEW = "Specific Inventory Review"  # Opened from the inventory table
    MANUAL_REFRESH = "Manual Overwrite"  # User asked for fresh ideas


class ShelfHealth(str, Enum):
    """Shelf status shown in the inventory table"""

    CRITICAL_RISK = "CRITICAL RISK"
    HEALTHY_SHELF = "HEALTHY SHELF"
