from promo_engine.core.loyalty_tiers import TierEnum
from promo_engine.models.promo_code import PromoCode, CartLine, DiscountTypeEnum, PromoStatusEnum
from promo_engine.models.loyalty import (
    LoyaltyProgram,
    CustomerLoyalty,
    LoyaltyTransaction,
    LoyaltyTransactionTypeEnum,
)

__all__ = [
    "PromoCode",
    "CartLine",
    "DiscountTypeEnum",
    "PromoStatusEnum",
    "LoyaltyProgram",
    "CustomerLoyalty",
    "LoyaltyTransaction",
    "LoyaltyTransactionTypeEnum",
    "TierEnum",
]
