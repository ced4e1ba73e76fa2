from datetime import date, datetime, timedelta, timezone

import numpy as np
import pandas as pd

from models.enums import CATEGORIES, Category
from models.inventory import Product

SEED_UPDATED_AT = datetime(2025, 5, 1, tzinfo=timezone.utc)

# id, name, category, cost, price, expiry, stock, avg daily sales
_INITIAL_CATALOG: list[tuple[str, str, Category, float, float, str, int, float]] = [
    ("1", "Fresh Milk 1L", Category.FOOD, 1.2, 2.5, "2025-05-15", 45, 12),
    ("2", "Smart Toaster X1", Category.APPLIANCES, 25, 55, "2030-01-01", 12, 1),
    ("3", "L-Shape Velvet Sofa", Category.FURNITURE, 450, 899, "2040-01-01", 3, 0.1),
    ("4", "Wireless Gaming Mouse", Category.ELECTRONICS, 15, 45, "2030-01-01", 25, 3),
    ("5", "Hydrating Moisturizer", Category.COSMETICS, 8, 22, "2026-06-01", 40, 4),
    ("6", "Hardcover Notebook", Category.STATIONERY, 1, 3.5, "2030-01-01", 100, 10),
    ("7", "Roasted Coffee Beans", Category.BEVERAGES, 12, 28, "2025-08-01", 30, 5),
    ("8", "Premium Cotton Tee", Category.CLOTHES, 4, 15, "2035-01-01", 60, 8),
    ("9", "Super Hero Action Figure", Category.TOYS, 5, 18, "2035-01-01", 20, 2),
    ("10", "Eco Laundry Pods", Category.HOME_ESSENTIALS, 6, 14, "2026-01-01", 50, 15),
    ("11", "Whole Wheat Bread", Category.FOOD, 0.8, 1.5, "2025-05-10", 30, 20),
    ("12", "Bluetooth Headphones", Category.ELECTRONICS, 35, 79, "2028-12-01", 15, 2),
    ("13", "Mineral Water 500ml", Category.BEVERAGES, 0.2, 1.0, "2026-01-01", 200, 50),
    ("14", "Multivitamin Gummies", Category.COSMETICS, 10, 25, "2025-11-15", 25, 3),
    ("15", "Mechanical Pencil Set", Category.STATIONERY, 2, 5.5, "2032-01-01", 45, 5),
]

# Typical shelf life in days per category, used by the synthetic generator
_SHELF_LIFE_DAYS: dict[Category, int] = {
    Category.FOOD: 21,
    Category.BEVERAGES: 180,
    Category.HOME_ESSENTIALS: 540,
    Category.FURNITURE: 5000,
    Category.APPLIANCES: 1800,
    Category.CLOTHES: 3000,
    Category.TOYS: 3000,
    Category.ELECTRONICS: 1800,
    Category.COSMETICS: 365,
    Category.STATIONERY: 2500,
}


def initial_products() -> list[Product]:
    """Return a fresh copy of the seed catalog used when no products have been saved."""
    return [
        Product(
            id=pid,
            name=name,
            category=category,
            cost_price=cost,
            selling_price=price,
            expiry_date=date.fromisoformat(expiry),
            current_stock=stock,
            avg_daily_sales=sales,
            last_updated=SEED_UPDATED_AT,
        )
        for pid, name, category, cost, price, expiry, stock, sales in _INITIAL_CATALOG
    ]


def generate_synthetic_catalog(
    num_products: int = 30,
    seed: int = 42,
    as_of: datetime | None = None,
    base_sales_lambda: float = 6.0,
    stock_days_mean: float = 12.0,
    min_markup: float = 1.2,
    max_markup: float = 3.0,
) -> list[Product]:
    """
    Generates a reproducible synthetic product catalog.

    Args:
        num_products: Number of products to create.
        seed: Random seed for reproducibility.
        as_of: Reference time for expiry dates and last_updated (defaults to now, UTC).
        base_sales_lambda: Poisson mean for daily sales.
        stock_days_mean: Mean days of stock on hand (exponential).
        min_markup: Lowest selling/cost ratio.
        max_markup: Highest selling/cost ratio.

    Returns:
        A list of validated Product records, categories assigned round-robin.
    """
    rng = np.random.default_rng(seed)
    as_of = as_of or datetime.now(timezone.utc)
    products = []
    for i in range(num_products):
        category = CATEGORIES[i % len(CATEGORIES)]
        # Some products have no sales history yet
        daily_sales = float(rng.poisson(base_sales_lambda)) if rng.random() > 0.1 else 0.0
        stock_days = rng.exponential(stock_days_mean)
        current_stock = int(round(max(daily_sales, 1.0) * stock_days))
        cost = round(float(rng.uniform(0.5, 200.0)), 2)
        price = round(cost * float(rng.uniform(min_markup, max_markup)), 2)
        shelf_life = _SHELF_LIFE_DAYS[category]
        expiry_offset = int(rng.integers(-3, shelf_life + 1))
        products.append(
            Product(
                id=f"SYN{i + 1:03d}",
                name=f"Synthetic {category.value} Item {i + 1}",
                category=category,
                cost_price=cost,
                selling_price=price,
                expiry_date=as_of.date() + timedelta(days=expiry_offset),
                current_stock=current_stock,
                avg_daily_sales=daily_sales,
                last_updated=as_of,
            )
        )
    return products


def products_to_frame(products: list[Product]) -> pd.DataFrame:
    """Return a DataFrame view of a product snapshot (one row per product, snake_case columns)."""
    columns = list(Product.model_fields)
    if not products:
        return pd.DataFrame(columns=columns)
    frame = pd.DataFrame([p.model_dump() for p in products], columns=columns)
    frame["category"] = frame["category"].map(lambda c: c.value)
    return frame
