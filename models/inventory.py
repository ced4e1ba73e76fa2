"""
Inventory-related data models for the retail inventory toolkit.
Includes the Product record, the ProductDraft form input, and the AnalysisResult verdict.
"""

import uuid
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from .enums import Category, RiskLevel


class InvalidProductError(ValueError):
    """Raised when a product record cannot be turned into a valid Product."""

    def __init__(self, message: str, fields: list[str] | None = None):
        super().__init__(message)
        self.fields = fields or []

    @classmethod
    def from_validation_error(cls, exc: ValidationError, record_id: str | None = None) -> "InvalidProductError":
        fields = [".".join(str(part) for part in err["loc"]) for err in exc.errors()]
        label = f"Product {record_id}" if record_id else "Product record"
        return cls(f"{label} is invalid: {', '.join(fields) or 'unknown field'}", fields=fields)


def _midnight_if_date_only(value: Any) -> Any:
    # Stored records may carry "YYYY-MM-DD" in lastUpdated
    if isinstance(value, str) and len(value) == 10:
        return f"{value}T00:00:00"
    return value


class Product(BaseModel):
    """
    One inventory line item. Serialised with the camelCase keys used by the
    persisted product collection (``costPrice``, ``expiryDate``, ...).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        allow_inf_nan=False,
    )

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    category: Category
    cost_price: float = Field(ge=0)
    selling_price: float = Field(ge=0)
    expiry_date: date
    current_stock: int = Field(ge=0)
    avg_daily_sales: float = Field(default=0.0, ge=0)
    last_updated: datetime

    @field_validator("last_updated", mode="before")
    @classmethod
    def normalize_last_updated(cls, value: Any) -> Any:
        return _midnight_if_date_only(value)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Product":
        """Validate a stored or user-supplied record, raising InvalidProductError on failure."""
        try:
            return cls.model_validate(record)
        except ValidationError as exc:
            record_id = record.get("id") if isinstance(record, Mapping) else None
            raise InvalidProductError.from_validation_error(exc, record_id=record_id) from exc

    def to_record(self) -> dict[str, Any]:
        """Return the JSON-compatible camelCase record."""
        return self.model_dump(mode="json", by_alias=True)

    @property
    def margin(self) -> float:
        """Gross margin as a fraction of the selling price (0 when unpriced)."""
        if not self.selling_price:
            return 0.0
        return (self.selling_price - self.cost_price) / self.selling_price


class ProductDraft(BaseModel):
    """User-entered fields of a new product, before the store assigns id and sales."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, allow_inf_nan=False)

    name: str = Field(min_length=1)
    category: Category = Category.FOOD
    cost_price: float = Field(ge=0)
    selling_price: float = Field(ge=0)
    expiry_date: date
    current_stock: int = Field(ge=0)

    @classmethod
    def from_form(cls, form: Mapping[str, Any]) -> "ProductDraft":
        """Build a draft from raw form values (strings are coerced)."""
        try:
            return cls.model_validate(form)
        except ValidationError as exc:
            raise InvalidProductError.from_validation_error(exc) from exc

    def to_product(self, *, avg_daily_sales: float, now: datetime, product_id: str | None = None) -> Product:
        return Product(
            id=product_id or uuid.uuid4().hex,
            name=self.name,
            category=self.category,
            cost_price=self.cost_price,
            selling_price=self.selling_price,
            expiry_date=self.expiry_date,
            current_stock=self.current_stock,
            avg_daily_sales=avg_daily_sales,
            last_updated=now,
        )


@dataclass(frozen=True)
class AnalysisResult:
    """
    Reorder verdict computed for a single product. Derived on demand, never persisted.
    """

    product_id: str
    reorder: bool
    suggested_quantity: int
    reason: str
    risk_level: RiskLevel

    def to_dict(self) -> dict[str, Any]:
        return {
            "productId": self.product_id,
            "reorder": self.reorder,
            "suggestedQuantity": self.suggested_quantity,
            "reason": self.reason,
            "riskLevel": self.risk_level.value,
        }
