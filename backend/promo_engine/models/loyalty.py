from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from typing import Optional
from datetime import datetime
from decimal import Decimal
import enum

from promo_engine.core.loyalty_tiers import TierEnum, get_tier, get_tier_progress
from promo_engine.models.promo_code import as_utc


class LoyaltyTransactionTypeEnum(str, enum.Enum):
    EARN = "earn"
    REDEEM = "redeem"
    EXPIRE = "expire"
    BONUS = "bonus"


class LoyaltyProgram(BaseModel):
    """Loyalty settings as loaded from the settings store."""
    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    points_per_unit: Decimal = Field(..., ge=0)  # points per currency unit spent
    points_value: Decimal = Field(Decimal("0"), ge=0)  # currency value of one point
    min_points_to_redeem: int = Field(0, ge=0)
    is_active: bool = True
    bonus_multiplier: Optional[Decimal] = None
    bonus_start_date: Optional[datetime] = None
    bonus_end_date: Optional[datetime] = None

    @field_validator("bonus_start_date", "bonus_end_date")
    @classmethod
    def dates_as_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return as_utc(v) if v is not None else None


class CustomerLoyalty(BaseModel):
    """
    Per-customer loyalty state.

    tier and tier_progress are computed from total_spent on every access and
    on serialization, so a stored copy can never drift from the spend.
    """
    model_config = ConfigDict(frozen=True)

    customer_id: str
    customer_name: Optional[str] = None
    points_earned: int = Field(0, ge=0)
    points_redeemed: int = Field(0, ge=0)
    total_spent: Decimal = Decimal("0")
    joined_at: Optional[datetime] = None
    last_activity_at: Optional[datetime] = None

    @computed_field
    @property
    def total_points(self) -> int:
        return self.points_earned

    @computed_field
    @property
    def available_points(self) -> int:
        return self.points_earned - self.points_redeemed

    @computed_field
    @property
    def tier(self) -> TierEnum:
        return get_tier(self.total_spent)

    @computed_field
    @property
    def tier_progress(self) -> Decimal:
        return get_tier_progress(self.total_spent)


class LoyaltyTransaction(BaseModel):
    """Append-only audit record. Redemptions carry negative points."""
    model_config = ConfigDict(frozen=True)

    id: str
    customer_id: str
    type: LoyaltyTransactionTypeEnum
    points: int
    description: str
    related_sale_id: Optional[str] = None
    created_at: datetime
