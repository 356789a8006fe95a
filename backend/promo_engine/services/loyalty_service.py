"""
Loyalty Service

Points and tier bookkeeping for a finalized sale:
- Points earned per sale (with bonus-window multiplier)
- Tier and progress from lifetime spend (see core.loyalty_tiers)
- Point redemption checks and transaction records
"""
import uuid
from datetime import datetime, timezone
from decimal import Decimal, ROUND_FLOOR
from typing import Optional, Tuple
from promo_engine.core.logging_config import get_logger
from promo_engine.core.loyalty_tiers import (
    get_tier,
    get_tier_progress,
    get_tier_benefits,
    get_next_tier,
    amount_to_next_tier,
)
from promo_engine.models.loyalty import (
    LoyaltyProgram,
    CustomerLoyalty,
    LoyaltyTransaction,
    LoyaltyTransactionTypeEnum,
)
from promo_engine.models.promo_code import as_utc
from promo_engine.schemas.loyalty import (
    RedemptionCheck,
    RedemptionResult,
    RedemptionRejectionReasonEnum,
    TierStatusResponse,
)

logger = get_logger("loyalty_service")


def resolve_now(now: Optional[datetime]) -> datetime:
    return as_utc(now) if now is not None else datetime.now(timezone.utc)


def is_bonus_active(program: LoyaltyProgram, now: Optional[datetime] = None) -> bool:
    """True when the program has a multiplier and now is inside the bonus window (inclusive)."""
    if not program.bonus_multiplier or not program.bonus_start_date or not program.bonus_end_date:
        return False
    now = resolve_now(now)
    return program.bonus_start_date <= now <= program.bonus_end_date


def earn_points(amount: Decimal, program: LoyaltyProgram, now: Optional[datetime] = None) -> int:
    """
    Points earned for spending `amount`.

    amount * points_per_unit, times the bonus multiplier inside the bonus
    window, floored. The fractional remainder is dropped, not carried over.
    Whether the program is active is up to the caller.
    """
    amount = Decimal(amount)
    if amount <= 0:
        return 0

    points = amount * program.points_per_unit
    if is_bonus_active(program, now):
        points *= program.bonus_multiplier

    return max(0, int(points.to_integral_value(rounding=ROUND_FLOOR)))


def get_tier_status(total_spent: Decimal) -> TierStatusResponse:
    """Tier, progress and what is left to reach the next tier."""
    tier = get_tier(total_spent)
    return TierStatusResponse(
        total_spent=Decimal(total_spent),
        tier=tier,
        tier_progress=get_tier_progress(total_spent),
        next_tier=get_next_tier(tier),
        amount_to_next_tier=amount_to_next_tier(total_spent),
        benefits=get_tier_benefits(tier),
    )


def points_to_currency(points: int, program: LoyaltyProgram) -> Decimal:
    return Decimal(points) * program.points_value


def check_redemption(loyalty: CustomerLoyalty, points: int, program: LoyaltyProgram) -> RedemptionCheck:
    """Whether `points` may be redeemed now. First failing rule wins."""
    if not program.is_active:
        return RedemptionCheck(
            is_valid=False,
            reason=RedemptionRejectionReasonEnum.PROGRAM_INACTIVE,
            error="The loyalty program is not active.",
        )
    if points <= 0:
        return RedemptionCheck(
            is_valid=False,
            reason=RedemptionRejectionReasonEnum.INVALID_POINTS,
            error="Points to redeem must be greater than zero.",
        )
    if points < program.min_points_to_redeem:
        return RedemptionCheck(
            is_valid=False,
            reason=RedemptionRejectionReasonEnum.BELOW_MINIMUM,
            error=f"At least {program.min_points_to_redeem} points are required to redeem.",
        )
    if points > loyalty.available_points:
        return RedemptionCheck(
            is_valid=False,
            reason=RedemptionRejectionReasonEnum.INSUFFICIENT_POINTS,
            error=f"Only {loyalty.available_points} points are available.",
        )
    return RedemptionCheck(is_valid=True, value=points_to_currency(points, program))


def record_sale(
    loyalty: CustomerLoyalty,
    amount: Decimal,
    program: LoyaltyProgram,
    sale_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Tuple[CustomerLoyalty, Optional[LoyaltyTransaction]]:
    """
    Account a finalized sale: add spend and earned points.

    Returns a new CustomerLoyalty (the input is left untouched) and the earn
    transaction, or None when the sale earned no points.
    """
    now = resolve_now(now)
    amount = Decimal(amount)
    bonus = program.is_active and is_bonus_active(program, now)
    points = earn_points(amount, program, now) if program.is_active else 0

    updated = loyalty.model_copy(update={
        "total_spent": loyalty.total_spent + max(Decimal("0"), amount),
        "points_earned": loyalty.points_earned + points,
        "last_activity_at": now,
    })

    previous_tier = loyalty.tier
    if updated.tier != previous_tier:
        logger.info(
            f"Customer {loyalty.customer_id} moved from {previous_tier.value} to {updated.tier.value}",
            extra={"customer_id": loyalty.customer_id, "total_spent": str(updated.total_spent)}
        )

    if points == 0:
        return updated, None

    if bonus:
        description = f"Bonus points (x{program.bonus_multiplier.normalize():f}) on purchase"
    else:
        description = "Points earned on purchase"
    if sale_id:
        description = f"{description} {sale_id}"

    transaction = LoyaltyTransaction(
        id=str(uuid.uuid4()),
        customer_id=loyalty.customer_id,
        type=LoyaltyTransactionTypeEnum.BONUS if bonus else LoyaltyTransactionTypeEnum.EARN,
        points=points,
        description=description,
        related_sale_id=sale_id,
        created_at=now,
    )
    logger.info(
        f"Recorded {points} points for customer {loyalty.customer_id}",
        extra={"customer_id": loyalty.customer_id, "points": points, "sale_id": sale_id}
    )
    return updated, transaction


def redeem_points(
    loyalty: CustomerLoyalty,
    points: int,
    program: LoyaltyProgram,
    now: Optional[datetime] = None,
) -> RedemptionResult:
    """Redeem points; on rejection the loyalty record comes back unchanged."""
    check = check_redemption(loyalty, points, program)
    if not check.is_valid:
        logger.info(
            f"Redemption rejected for customer {loyalty.customer_id}: {check.reason.value}",
            extra={"customer_id": loyalty.customer_id, "points": points}
        )
        return RedemptionResult(**check.model_dump(), loyalty=loyalty)

    now = resolve_now(now)
    updated = loyalty.model_copy(update={
        "points_redeemed": loyalty.points_redeemed + points,
        "last_activity_at": now,
    })
    transaction = LoyaltyTransaction(
        id=str(uuid.uuid4()),
        customer_id=loyalty.customer_id,
        type=LoyaltyTransactionTypeEnum.REDEEM,
        points=-points,
        description=f"Redeemed {points} points",
        created_at=now,
    )
    return RedemptionResult(**check.model_dump(), loyalty=updated, transaction=transaction)
