from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from decimal import Decimal
import enum

from promo_engine.models.promo_code import PromoCode, CartLine


class PromoRejectionReasonEnum(str, enum.Enum):
    INVALID_CODE = "invalid_code"
    INACTIVE = "inactive"
    NOT_YET_VALID = "not_yet_valid"
    EXPIRED = "expired"
    USAGE_LIMIT_REACHED = "usage_limit_reached"
    CUSTOMER_LIMIT_REACHED = "customer_limit_reached"
    MINIMUM_NOT_MET = "minimum_not_met"


class PromoValidationResult(BaseModel):
    is_valid: bool
    reason: Optional[PromoRejectionReasonEnum] = None  # set only when invalid
    error: Optional[str] = None
    message: Optional[str] = None


class PromoApplicationResult(PromoValidationResult):
    subtotal: Decimal
    discount_amount: Decimal = Decimal("0")
    final_total: Decimal
    free_shipping: bool = False
    discount_code: Optional[str] = None  # echo back the code if valid
    label: Optional[str] = None


class PromoValidateRequest(BaseModel):
    promo: Optional[PromoCode] = None  # None when the lookup found nothing
    subtotal: Decimal
    customer_usage_count: int = Field(0, ge=0)
    lines: List[CartLine] = Field(default_factory=list)
    now: Optional[datetime] = None


class DiscountComputeRequest(BaseModel):
    promo: PromoCode
    subtotal: Decimal
    lines: List[CartLine] = Field(default_factory=list)


class DiscountComputeResponse(BaseModel):
    code: str
    discount_type: str
    discount_amount: Decimal
    free_shipping: bool
    label: str
