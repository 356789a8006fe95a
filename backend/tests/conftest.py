from datetime import datetime, timezone
from decimal import Decimal

import pytest

from promo_engine.models import PromoCode, LoyaltyProgram, CustomerLoyalty, CartLine


NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def make_promo():
    def _make(**overrides) -> PromoCode:
        data = {
            "id": "promo-1",
            "code": "SAVE10",
            "discount_type": "percentage",
            "discount_value": Decimal("10"),
            "start_date": datetime(2024, 1, 1, tzinfo=timezone.utc),
            "end_date": datetime(2024, 12, 31, tzinfo=timezone.utc),
            "status": "active",
        }
        data.update(overrides)
        return PromoCode(**data)
    return _make


@pytest.fixture
def program():
    return LoyaltyProgram(
        id="prog-1",
        name="Fidelity",
        points_per_unit=Decimal("0.01"),
        points_value=Decimal("5"),
        min_points_to_redeem=1000,
    )


@pytest.fixture
def bonus_program():
    return LoyaltyProgram(
        points_per_unit=Decimal("0.01"),
        points_value=Decimal("5"),
        min_points_to_redeem=1000,
        bonus_multiplier=Decimal("2"),
        bonus_start_date=datetime(2024, 6, 1, tzinfo=timezone.utc),
        bonus_end_date=datetime(2024, 6, 30, tzinfo=timezone.utc),
    )


@pytest.fixture
def loyalty():
    return CustomerLoyalty(
        customer_id="cust-1",
        customer_name="Awa",
        points_earned=15000,
        points_redeemed=3000,
        total_spent=Decimal("1625000"),
    )


def line(id: str, price, quantity: int = 1, category=None) -> CartLine:
    return CartLine(id=id, price=Decimal(str(price)), quantity=quantity, category=category)
