"""
Promo code validation: decides whether a code may be applied to a cart.

Checks run in a fixed order and stop at the first failure, so the same
inputs always produce the same user-facing error:
status, start date, end date, global usage, per-customer usage, minimum purchase.
"""
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional, Sequence
from promo_engine.core.config import settings
from promo_engine.core.logging_config import get_logger
from promo_engine.models.promo_code import PromoCode, CartLine, DiscountTypeEnum, PromoStatusEnum, as_utc
from promo_engine.schemas.promo_code import (
    PromoRejectionReasonEnum,
    PromoValidationResult,
    PromoApplicationResult,
)
from promo_engine.services.discount_service import compute_discount, describe_discount, has_limit

logger = get_logger("promo_validation_service")


def _reject(promo: Optional[PromoCode], reason: PromoRejectionReasonEnum, error: str) -> PromoValidationResult:
    logger.info(
        f"Promo code rejected: {reason.value}",
        extra={"code": promo.code if promo else None, "reason": reason.value}
    )
    return PromoValidationResult(is_valid=False, reason=reason, error=error)


def validate_promo_code(
    promo: Optional[PromoCode],
    subtotal: Decimal,
    customer_usage_count: int = 0,
    now: Optional[datetime] = None,
) -> PromoValidationResult:
    """
    Validate a promo code against the cart subtotal and the customer's usage.

    Does not touch promo.usage_count; the order workflow increments it once
    the sale is confirmed.
    """
    if promo is None:
        return _reject(None, PromoRejectionReasonEnum.INVALID_CODE, "Invalid promo code.")

    now = as_utc(now) if now is not None else datetime.now(timezone.utc)

    if promo.status != PromoStatusEnum.ACTIVE:
        return _reject(promo, PromoRejectionReasonEnum.INACTIVE, "This promo code is not active.")

    if now < promo.start_date:
        return _reject(promo, PromoRejectionReasonEnum.NOT_YET_VALID, "This promo code is not yet valid.")

    if now > promo.end_date:
        return _reject(promo, PromoRejectionReasonEnum.EXPIRED, "This promo code has expired.")

    if has_limit(promo.usage_limit) and promo.usage_count >= promo.usage_limit:
        return _reject(
            promo,
            PromoRejectionReasonEnum.USAGE_LIMIT_REACHED,
            "This promo code has reached its usage limit.",
        )

    if has_limit(promo.usage_per_customer) and customer_usage_count >= promo.usage_per_customer:
        return _reject(
            promo,
            PromoRejectionReasonEnum.CUSTOMER_LIMIT_REACHED,
            "You have already used this promo code the maximum number of times.",
        )

    if has_limit(promo.min_purchase_amount) and Decimal(subtotal) < promo.min_purchase_amount:
        return _reject(
            promo,
            PromoRejectionReasonEnum.MINIMUM_NOT_MET,
            f"A minimum purchase of {promo.min_purchase_amount:,f} {settings.CURRENCY} is required.",
        )

    return PromoValidationResult(is_valid=True, message="Promo code is valid.")


def apply_promo_code(
    promo: Optional[PromoCode],
    subtotal: Decimal,
    lines: Sequence[CartLine] = (),
    customer_usage_count: int = 0,
    now: Optional[datetime] = None,
) -> PromoApplicationResult:
    """
    Validate a promo code and, when admitted, compute its discount.

    Returns original subtotal, discount, and final total. A rejected code
    leaves the total unchanged.
    """
    subtotal = Decimal(subtotal)
    result = validate_promo_code(promo, subtotal, customer_usage_count, now=now)
    if not result.is_valid:
        return PromoApplicationResult(
            **result.model_dump(),
            subtotal=subtotal,
            discount_amount=Decimal("0"),
            final_total=subtotal,
        )

    discount = compute_discount(promo, subtotal, lines)
    final = max(Decimal("0"), subtotal - discount)
    return PromoApplicationResult(
        is_valid=True,
        message="Discount applied.",
        subtotal=subtotal,
        discount_amount=discount,
        final_total=final,
        free_shipping=promo.discount_type == DiscountTypeEnum.FREE_SHIPPING,
        discount_code=promo.code,
        label=describe_discount(promo),
    )
