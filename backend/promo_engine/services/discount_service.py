"""
Discount Service

Computes the monetary discount a promo code grants on a cart:
- Percentage, fixed, buy-one-get-one and free-shipping strategies
- Max-discount cap and subtotal cap
- Display label for a promo's discount
"""
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import List, Sequence
from promo_engine.core.config import settings
from promo_engine.core.logging_config import get_logger
from promo_engine.models.promo_code import PromoCode, CartLine, DiscountTypeEnum

logger = get_logger("discount_service")

MONEY_QUANTUM = Decimal("0.01")
ZERO = Decimal("0")


def has_limit(value) -> bool:
    """Optional numeric gates: None and 0 both mean 'no constraint'."""
    return value is not None and value != 0


def quantize_money(amount: Decimal) -> Decimal:
    amount = Decimal(amount)
    # quantize needs room for every integer digit plus the two decimals
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, amount.adjusted() + 3)
        return amount.quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)


def is_bogo_eligible(promo: PromoCode, line: CartLine) -> bool:
    """
    Whether a cart line takes part in a BOGO pairing.

    Product inclusion wins over exclusion; categories are only consulted
    when no product list is set, and lines without a category pass.
    """
    if line.id in promo.excluded_products and line.id not in promo.applicable_products:
        return False
    if promo.applicable_products:
        return line.id in promo.applicable_products
    if promo.applicable_categories and line.category:
        return line.category in promo.applicable_categories
    return True


def calculate_bogo_discount(promo: PromoCode, lines: Sequence[CartLine]) -> Decimal:
    """
    Pair eligible lines from most to least expensive (0 with 1, 2 with 3, ...).

    Each pair discounts the cheaper unit price times the smaller quantity.
    An odd line out gets nothing.
    """
    eligible: List[CartLine] = [line for line in lines if is_bogo_eligible(promo, line)]
    # sorted() is stable: equal prices keep cart order
    eligible = sorted(eligible, key=lambda line: line.price, reverse=True)

    discount = ZERO
    for i in range(0, len(eligible) - 1, 2):
        first, second = eligible[i], eligible[i + 1]
        discount += min(first.price, second.price) * min(first.quantity, second.quantity)
    return discount


def compute_discount(promo: PromoCode, subtotal: Decimal, lines: Sequence[CartLine] = ()) -> Decimal:
    """
    Compute the discount amount for a cart.

    Args:
        promo: Promo code record
        subtotal: Pre-discount cart total
        lines: Cart line snapshot (only used by BOGO)

    Returns:
        Decimal in [0, subtotal], rounded to 2 places. Free shipping is 0 here;
        the caller waives shipping separately.
    """
    subtotal = Decimal(subtotal)
    if subtotal <= 0:
        return ZERO

    # Same gate as the validator, so a direct call cannot discount a small cart
    if has_limit(promo.min_purchase_amount) and subtotal < promo.min_purchase_amount:
        return ZERO

    if promo.discount_type == DiscountTypeEnum.PERCENTAGE:
        discount = subtotal * promo.discount_value / Decimal("100")
    elif promo.discount_type == DiscountTypeEnum.FIXED:
        discount = promo.discount_value
    elif promo.discount_type == DiscountTypeEnum.BOGO:
        discount = calculate_bogo_discount(promo, lines)
    elif promo.discount_type == DiscountTypeEnum.FREE_SHIPPING:
        discount = ZERO
    else:
        logger.warning(f"Unknown discount type on promo {promo.code}: {promo.discount_type}")
        discount = ZERO

    discount = quantize_money(discount)

    if has_limit(promo.max_discount_amount) and discount > promo.max_discount_amount:
        discount = promo.max_discount_amount

    discount = max(ZERO, min(discount, subtotal))

    logger.debug(
        f"Computed discount {discount} for promo {promo.code}",
        extra={
            "code": promo.code,
            "discount_type": promo.discount_type.value,
            "subtotal": str(subtotal),
            "discount": str(discount),
        }
    )
    return discount


def describe_discount(promo: PromoCode) -> str:
    """Short human-readable label, e.g. '10% off' or '5,000 FCFA off'."""
    if promo.discount_type == DiscountTypeEnum.PERCENTAGE:
        return f"{promo.discount_value.normalize():f}% off"
    if promo.discount_type == DiscountTypeEnum.FIXED:
        return f"{promo.discount_value.normalize():,f} {settings.CURRENCY} off"
    if promo.discount_type == DiscountTypeEnum.BOGO:
        return "Buy one, get one"
    return "Free shipping"
