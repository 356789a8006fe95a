"""
Loyalty endpoints: points earned, tiers, sales and redemptions.
"""
from decimal import Decimal
from typing import List
from fastapi import APIRouter, Query

from promo_engine.core.loyalty_tiers import get_tiers
from promo_engine.schemas.loyalty import (
    EarnPointsRequest,
    EarnPointsResponse,
    TierResponse,
    TierStatusResponse,
    RecordSaleRequest,
    RecordSaleResponse,
    RedeemPointsRequest,
    RedemptionResult,
)
from promo_engine.services.loyalty_service import (
    resolve_now,
    earn_points,
    is_bonus_active,
    get_tier_status,
    record_sale,
    redeem_points,
)

router = APIRouter()


@router.post("/points", response_model=EarnPointsResponse)
def compute_points(body: EarnPointsRequest):
    """Points a purchase of `amount` would earn under the program. An inactive program earns none."""
    now = resolve_now(body.now)
    if not body.program.is_active:
        return EarnPointsResponse(points=0, bonus_applied=False)
    return EarnPointsResponse(
        points=earn_points(body.amount, body.program, now=now),
        bonus_applied=is_bonus_active(body.program, now=now),
    )


@router.get("/tiers", response_model=List[TierResponse])
def list_tiers():
    """Return all loyalty tiers with thresholds and benefits."""
    return [TierResponse.model_validate(row) for row in get_tiers()]


@router.get("/tier", response_model=TierStatusResponse)
def get_tier_for_spend(total_spent: Decimal = Query(..., description="Lifetime spend")):
    return get_tier_status(total_spent)


@router.post("/sales", response_model=RecordSaleResponse)
def record_loyalty_sale(body: RecordSaleRequest):
    """Account a finalized sale. The caller persists the returned record and transaction."""
    loyalty, transaction = record_sale(
        body.loyalty,
        body.amount,
        body.program,
        sale_id=body.sale_id,
        now=body.now,
    )
    return RecordSaleResponse(loyalty=loyalty, transaction=transaction)


@router.post("/redeem", response_model=RedemptionResult)
def redeem_loyalty_points(body: RedeemPointsRequest):
    return redeem_points(body.loyalty, body.points, body.program, now=body.now)
