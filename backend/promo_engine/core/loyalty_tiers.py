"""
Hardcoded loyalty tiers (reference data). Thresholds are lifetime spend in the base currency unit.
"""
import enum
from decimal import Decimal
from typing import List, Optional


class TierEnum(str, enum.Enum):
    BRONZE = "bronze"
    SILVER = "silver"
    GOLD = "gold"
    PLATINUM = "platinum"


# (tier, name, min_spent, benefits) in ascending order
_TIERS: List[tuple] = [
    (TierEnum.BRONZE, "Bronze", Decimal("0"), [
        "Loyalty points on every purchase",
        "Access to private sales",
    ]),
    (TierEnum.SILVER, "Silver", Decimal("500000"), [
        "All Bronze benefits",
        "Extra 5% discount",
        "Free delivery from 50,000 FCFA",
    ]),
    (TierEnum.GOLD, "Gold", Decimal("2000000"), [
        "All Silver benefits",
        "Extra 10% discount",
        "Free delivery with no minimum",
        "Priority support",
    ]),
    (TierEnum.PLATINUM, "Platinum", Decimal("5000000"), [
        "All Gold benefits",
        "Extra 15% discount",
        "Exclusive products",
        "Dedicated advisor",
    ]),
]


class TierRow:
    """Simple value object for a loyalty tier (used for API response serialization)."""
    __slots__ = ("tier", "name", "min_spent", "next_min_spent", "benefits")

    def __init__(
        self,
        tier: TierEnum,
        name: str,
        min_spent: Decimal,
        next_min_spent: Optional[Decimal],
        benefits: List[str],
    ):
        self.tier = tier
        self.name = name
        self.min_spent = min_spent
        self.next_min_spent = next_min_spent
        self.benefits = benefits


def _row(index: int) -> TierRow:
    tier, name, min_spent, benefits = _TIERS[index]
    next_min = _TIERS[index + 1][2] if index + 1 < len(_TIERS) else None
    return TierRow(tier=tier, name=name, min_spent=min_spent, next_min_spent=next_min, benefits=list(benefits))


def get_tiers() -> List[TierRow]:
    """Return all tiers, lowest first."""
    return [_row(i) for i in range(len(_TIERS))]


def get_tier_row(tier: TierEnum) -> TierRow:
    for i, r in enumerate(_TIERS):
        if r[0] == tier:
            return _row(i)
    raise ValueError(f"Unknown tier: {tier}")


def get_tier(total_spent: Decimal) -> TierEnum:
    """Return the tier for a lifetime spend. Anything below the silver threshold is bronze."""
    total_spent = Decimal(total_spent)
    for tier, _, min_spent, _ in reversed(_TIERS):
        if total_spent >= min_spent:
            return tier
    return TierEnum.BRONZE


def get_tier_progress(total_spent: Decimal) -> Decimal:
    """
    Percentage of the way from the current tier's threshold to the next one.

    Linear inside each band, 100 at the top tier. The value is not clamped:
    a negative spend yields a negative percentage.
    """
    total_spent = Decimal(total_spent)
    row = get_tier_row(get_tier(total_spent))
    if row.next_min_spent is None:
        return Decimal("100")
    span = row.next_min_spent - row.min_spent
    return (total_spent - row.min_spent) / span * Decimal("100")


def get_tier_benefits(tier: TierEnum) -> List[str]:
    """Return the benefit descriptions for a tier (fresh list, safe to mutate)."""
    return get_tier_row(TierEnum(tier)).benefits


def get_next_tier(tier: TierEnum) -> Optional[TierEnum]:
    """Return the tier above, or None at the top."""
    tiers = [r[0] for r in _TIERS]
    index = tiers.index(TierEnum(tier))
    return tiers[index + 1] if index + 1 < len(tiers) else None


def amount_to_next_tier(total_spent: Decimal) -> Optional[Decimal]:
    """Spend still missing to reach the next tier, or None at the top."""
    total_spent = Decimal(total_spent)
    row = get_tier_row(get_tier(total_spent))
    if row.next_min_spent is None:
        return None
    return row.next_min_spent - total_spent
