"""
Promo codes: validate at checkout and compute discounts.

Stateless: the caller sends the promo record it looked up, the cart and the
customer's usage count. Nothing is read from or written to storage here.
"""
from fastapi import APIRouter

from promo_engine.schemas.promo_code import (
    PromoValidateRequest,
    PromoApplicationResult,
    DiscountComputeRequest,
    DiscountComputeResponse,
)
from promo_engine.models.promo_code import DiscountTypeEnum
from promo_engine.services.discount_service import compute_discount, describe_discount
from promo_engine.services.promo_validation_service import apply_promo_code

router = APIRouter()


@router.post("/validate", response_model=PromoApplicationResult)
def validate_promo_code(body: PromoValidateRequest):
    """
    Validate a promo code and return subtotal, discount, and final total.
    Call this when the customer enters a code at checkout.
    A rejected code still returns 200 with is_valid=false and the reason.

    Example body:
      { "promo": {...}, "subtotal": "100000", "customer_usage_count": 0,
        "lines": [{"id": "p1", "price": "1000", "quantity": 2}] }
    """
    return apply_promo_code(
        body.promo,
        body.subtotal,
        body.lines,
        customer_usage_count=body.customer_usage_count,
        now=body.now,
    )


@router.post("/discount", response_model=DiscountComputeResponse)
def compute_promo_discount(body: DiscountComputeRequest):
    """Compute the discount for a promo without admissibility checks (e.g. for previews)."""
    promo = body.promo
    return DiscountComputeResponse(
        code=promo.code,
        discount_type=promo.discount_type.value,
        discount_amount=compute_discount(promo, body.subtotal, body.lines),
        free_shipping=promo.discount_type == DiscountTypeEnum.FREE_SHIPPING,
        label=describe_discount(promo),
    )
