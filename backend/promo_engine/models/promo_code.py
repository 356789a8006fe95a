from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional
from datetime import datetime, timezone
from decimal import Decimal
import enum


class DiscountTypeEnum(str, enum.Enum):
    PERCENTAGE = "percentage"        # value is 0-100
    FIXED = "fixed"                  # value is an amount in the base currency
    BOGO = "bogo"                    # buy one, get one: value unused
    FREE_SHIPPING = "free_shipping"  # waiver applied by the caller; value unused


class PromoStatusEnum(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    EXPIRED = "expired"
    SCHEDULED = "scheduled"


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so they compare with aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class PromoCode(BaseModel):
    """A discount rule as loaded from the promo-code store. Read-only for the engine."""
    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    code: str
    description: Optional[str] = None
    discount_type: DiscountTypeEnum
    discount_value: Decimal = Decimal("0")
    min_purchase_amount: Optional[Decimal] = None  # None or 0 = no minimum
    max_discount_amount: Optional[Decimal] = None  # None or 0 = no cap
    usage_limit: Optional[int] = None  # None or 0 = unlimited
    usage_count: int = 0  # incremented by the order workflow, never here
    usage_per_customer: Optional[int] = None  # None or 0 = unlimited
    start_date: datetime
    end_date: datetime
    status: PromoStatusEnum = PromoStatusEnum.ACTIVE
    applicable_categories: List[str] = Field(default_factory=list)  # empty = all
    applicable_products: List[str] = Field(default_factory=list)  # empty = all
    excluded_products: List[str] = Field(default_factory=list)

    @field_validator("code")
    @classmethod
    def code_trim_upper(cls, v: str) -> str:
        return v.strip().upper() if v else ""

    @field_validator("start_date", "end_date")
    @classmethod
    def dates_as_utc(cls, v: datetime) -> datetime:
        return as_utc(v)

    @field_validator("applicable_categories", "applicable_products", "excluded_products", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return [] if v is None else v


class CartLine(BaseModel):
    """One cart line at the moment the discount is evaluated."""
    model_config = ConfigDict(frozen=True)

    id: str
    price: Decimal = Field(..., ge=0)
    quantity: int = Field(1, ge=1)
    category: Optional[str] = None
