from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime
from decimal import Decimal
import enum

from promo_engine.core.loyalty_tiers import TierEnum
from promo_engine.models.loyalty import LoyaltyProgram, CustomerLoyalty, LoyaltyTransaction


class RedemptionRejectionReasonEnum(str, enum.Enum):
    PROGRAM_INACTIVE = "program_inactive"
    INVALID_POINTS = "invalid_points"
    BELOW_MINIMUM = "below_minimum"
    INSUFFICIENT_POINTS = "insufficient_points"


class RedemptionCheck(BaseModel):
    is_valid: bool
    reason: Optional[RedemptionRejectionReasonEnum] = None
    error: Optional[str] = None
    value: Decimal = Decimal("0")  # currency value of the requested points


class RedemptionResult(RedemptionCheck):
    loyalty: CustomerLoyalty
    transaction: Optional[LoyaltyTransaction] = None


class EarnPointsRequest(BaseModel):
    amount: Decimal
    program: LoyaltyProgram
    now: Optional[datetime] = None


class EarnPointsResponse(BaseModel):
    points: int
    bonus_applied: bool


class TierResponse(BaseModel):
    tier: TierEnum
    name: str
    min_spent: Decimal
    next_min_spent: Optional[Decimal] = None
    benefits: List[str]

    class Config:
        from_attributes = True


class TierStatusResponse(BaseModel):
    total_spent: Decimal
    tier: TierEnum
    tier_progress: Decimal
    next_tier: Optional[TierEnum] = None
    amount_to_next_tier: Optional[Decimal] = None
    benefits: List[str]


class RecordSaleRequest(BaseModel):
    loyalty: CustomerLoyalty
    amount: Decimal
    program: LoyaltyProgram
    sale_id: Optional[str] = None
    now: Optional[datetime] = None


class RecordSaleResponse(BaseModel):
    loyalty: CustomerLoyalty
    transaction: Optional[LoyaltyTransaction] = None


class RedeemPointsRequest(BaseModel):
    loyalty: CustomerLoyalty
    points: int
    program: LoyaltyProgram
    now: Optional[datetime] = None
