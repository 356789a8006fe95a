"""Test promo code admission rules and their fixed check order."""
from datetime import datetime, timezone
from decimal import Decimal

from promo_engine.schemas.promo_code import PromoRejectionReasonEnum
from promo_engine.services.promo_validation_service import validate_promo_code, apply_promo_code
from conftest import line


def test_fully_satisfied_promo_is_valid(make_promo, now):
    promo = make_promo(usage_limit=100, usage_count=5, usage_per_customer=2, min_purchase_amount=10000)
    result = validate_promo_code(promo, Decimal("50000"), customer_usage_count=1, now=now)
    assert result.is_valid
    assert result.error is None
    assert result.reason is None


def test_missing_promo_is_invalid(now):
    result = validate_promo_code(None, Decimal("50000"), now=now)
    assert not result.is_valid
    assert result.reason == PromoRejectionReasonEnum.INVALID_CODE
    assert result.error == "Invalid promo code."


def test_inactive_status_rejected_even_inside_dates(make_promo, now):
    for status in ("inactive", "expired", "scheduled"):
        result = validate_promo_code(make_promo(status=status), Decimal("50000"), now=now)
        assert not result.is_valid
        assert result.reason == PromoRejectionReasonEnum.INACTIVE


def test_not_yet_valid(make_promo, now):
    promo = make_promo(start_date=datetime(2024, 7, 1, tzinfo=timezone.utc))
    result = validate_promo_code(promo, Decimal("50000"), now=now)
    assert result.reason == PromoRejectionReasonEnum.NOT_YET_VALID
    assert "not yet valid" in result.error


def test_expired_regardless_of_other_fields(make_promo, now):
    promo = make_promo(end_date=datetime(2024, 6, 1, tzinfo=timezone.utc), usage_limit=0, min_purchase_amount=None)
    result = validate_promo_code(promo, Decimal("50000"), now=now)
    assert not result.is_valid
    assert result.reason == PromoRejectionReasonEnum.EXPIRED
    assert "expired" in result.error


def test_window_bounds_are_inclusive(make_promo):
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    end = datetime(2024, 12, 31, tzinfo=timezone.utc)
    promo = make_promo(start_date=start, end_date=end)
    assert validate_promo_code(promo, Decimal("1"), now=start).is_valid
    assert validate_promo_code(promo, Decimal("1"), now=end).is_valid


def test_naive_now_treated_as_utc(make_promo):
    promo = make_promo()
    assert validate_promo_code(promo, Decimal("1"), now=datetime(2024, 6, 15, 12, 0)).is_valid


def test_global_usage_limit_reached(make_promo, now):
    promo = make_promo(usage_limit=10, usage_count=10)
    result = validate_promo_code(promo, Decimal("50000"), now=now)
    assert result.reason == PromoRejectionReasonEnum.USAGE_LIMIT_REACHED


def test_zero_usage_limit_means_unlimited(make_promo, now):
    promo = make_promo(usage_limit=0, usage_count=250)
    assert validate_promo_code(promo, Decimal("50000"), now=now).is_valid


def test_per_customer_limit_reached(make_promo, now):
    promo = make_promo(usage_per_customer=1)
    result = validate_promo_code(promo, Decimal("50000"), customer_usage_count=1, now=now)
    assert result.reason == PromoRejectionReasonEnum.CUSTOMER_LIMIT_REACHED
    assert validate_promo_code(promo, Decimal("50000"), customer_usage_count=0, now=now).is_valid


def test_minimum_purchase_message_includes_amount(make_promo, now):
    promo = make_promo(min_purchase_amount=Decimal("50000"))
    result = validate_promo_code(promo, Decimal("49999"), now=now)
    assert result.reason == PromoRejectionReasonEnum.MINIMUM_NOT_MET
    assert result.error == "A minimum purchase of 50,000 FCFA is required."


def test_checks_short_circuit_in_order(make_promo, now):
    # every check fails; status comes first
    promo = make_promo(
        status="inactive",
        start_date=datetime(2025, 1, 1, tzinfo=timezone.utc),
        end_date=datetime(2024, 1, 2, tzinfo=timezone.utc),
        usage_limit=1,
        usage_count=1,
        usage_per_customer=1,
        min_purchase_amount=1000000,
    )
    assert validate_promo_code(promo, Decimal("1"), 5, now=now).reason == PromoRejectionReasonEnum.INACTIVE

    promo = promo.model_copy(update={"status": "active"})
    assert validate_promo_code(promo, Decimal("1"), 5, now=now).reason == PromoRejectionReasonEnum.NOT_YET_VALID

    promo = promo.model_copy(update={"start_date": datetime(2024, 1, 1, tzinfo=timezone.utc)})
    assert validate_promo_code(promo, Decimal("1"), 5, now=now).reason == PromoRejectionReasonEnum.EXPIRED

    promo = promo.model_copy(update={"end_date": datetime(2024, 12, 31, tzinfo=timezone.utc)})
    assert validate_promo_code(promo, Decimal("1"), 5, now=now).reason == PromoRejectionReasonEnum.USAGE_LIMIT_REACHED

    promo = promo.model_copy(update={"usage_limit": None})
    assert validate_promo_code(promo, Decimal("1"), 5, now=now).reason == PromoRejectionReasonEnum.CUSTOMER_LIMIT_REACHED

    assert validate_promo_code(promo, Decimal("1"), 0, now=now).reason == PromoRejectionReasonEnum.MINIMUM_NOT_MET


def test_validation_does_not_touch_usage_count(make_promo, now):
    promo = make_promo(usage_limit=10, usage_count=3)
    validate_promo_code(promo, Decimal("50000"), now=now)
    apply_promo_code(promo, Decimal("50000"), now=now)
    assert promo.usage_count == 3


def test_validate_is_idempotent(make_promo, now):
    promo = make_promo(usage_limit=10, usage_count=9)
    first = validate_promo_code(promo, Decimal("50000"), 0, now=now)
    second = validate_promo_code(promo, Decimal("50000"), 0, now=now)
    assert first == second


def test_apply_valid_promo_returns_totals(make_promo, now):
    promo = make_promo(code=" save10 ")
    result = apply_promo_code(promo, Decimal("100000"), now=now)
    assert result.is_valid
    assert result.discount_amount == Decimal("10000")
    assert result.final_total == Decimal("90000")
    assert result.discount_code == "SAVE10"
    assert result.label == "10% off"
    assert not result.free_shipping


def test_apply_rejected_promo_keeps_subtotal(make_promo, now):
    promo = make_promo(status="inactive")
    result = apply_promo_code(promo, Decimal("100000"), now=now)
    assert not result.is_valid
    assert result.discount_amount == Decimal("0")
    assert result.final_total == Decimal("100000")
    assert result.discount_code is None


def test_apply_free_shipping_flags_waiver(make_promo, now):
    promo = make_promo(discount_type="free_shipping", discount_value=0)
    result = apply_promo_code(promo, Decimal("30000"), now=now)
    assert result.is_valid
    assert result.free_shipping
    assert result.final_total == Decimal("30000")


def test_apply_bogo_uses_cart_lines(make_promo, now):
    promo = make_promo(discount_type="bogo", discount_value=0)
    lines = [line("a", 1000, 2), line("b", 800, 1)]
    result = apply_promo_code(promo, Decimal("2800"), lines, now=now)
    assert result.discount_amount == Decimal("800")
    assert result.final_total == Decimal("2000")
