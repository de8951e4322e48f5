"""Tests for the pricing engine."""

from __future__ import annotations

import datetime
from decimal import Decimal
from types import SimpleNamespace

import pytest

from app.models import DiscountType, RateType
from app.services import pricing_service
from app.services.pricing_service import Discount, LineInput, PricingValidationError

JAN_1 = datetime.date(2025, 1, 1)
JAN_4 = datetime.date(2025, 1, 4)


@pytest.mark.parametrize(
    ("start", "end", "rate_type", "expected"),
    [
        (JAN_1, JAN_4, RateType.DAILY, 3),
        (JAN_1, JAN_4, RateType.HOURLY, 72),
        (JAN_1, datetime.date(2025, 1, 9), RateType.WEEKLY, 2),
        (JAN_1, datetime.date(2025, 2, 1), RateType.MONTHLY, 2),
        (JAN_1, datetime.date(2025, 1, 31), RateType.MONTHLY, 1),
        ("2025-01-01T08:00:00", "2025-01-01T10:30:00", RateType.HOURLY, 3),
        ("2025-01-01T08:00:00+00:00", "2025-01-02T09:00:00+00:00", "daily", 2),
    ],
)
def test_compute_duration_rounds_up(start, end, rate_type, expected) -> None:
    assert pricing_service.compute_duration(start, end, rate_type) == expected


def test_compute_duration_same_day_is_zero() -> None:
    assert pricing_service.compute_duration(JAN_1, JAN_1, RateType.DAILY) == 0


def test_compute_duration_ignores_argument_order() -> None:
    assert pricing_service.compute_duration(JAN_4, JAN_1, RateType.DAILY) == 3


@pytest.mark.parametrize(
    ("start", "end", "rate_type"),
    [
        (None, JAN_4, RateType.DAILY),
        (JAN_1, "", RateType.DAILY),
        ("not-a-date", JAN_4, RateType.DAILY),
        (JAN_1, JAN_4, "yearly"),
    ],
)
def test_compute_duration_invalid_input_is_zero(start, end, rate_type) -> None:
    assert pricing_service.compute_duration(start, end, rate_type) == 0


def test_compute_duration_is_monotonic() -> None:
    previous = 0
    for hours in range(0, 24 * 40, 7):
        end = datetime.datetime(2025, 1, 1) + datetime.timedelta(hours=hours)
        for rate_type in RateType:
            assert pricing_service.compute_duration(
                datetime.datetime(2025, 1, 1), end, rate_type
            ) >= 0
        current = pricing_service.compute_duration(
            datetime.datetime(2025, 1, 1), end, RateType.DAILY
        )
        assert current >= previous
        previous = current


def test_line_subtotal_multiplies_quantity_rate_and_duration() -> None:
    subtotal = pricing_service.compute_line_subtotal(
        2, Decimal("50"), RateType.DAILY, JAN_1, JAN_4
    )
    assert subtotal == Decimal("300")


@pytest.mark.parametrize("rate", [None, Decimal("0"), 0])
def test_line_subtotal_missing_or_zero_rate(rate) -> None:
    assert pricing_service.compute_line_subtotal(
        3, rate, RateType.DAILY, JAN_1, JAN_4
    ) == Decimal("0")


def test_line_subtotal_zero_duration() -> None:
    assert pricing_service.compute_line_subtotal(
        3, Decimal("25"), RateType.DAILY, JAN_1, JAN_1
    ) == Decimal("0")


@pytest.mark.parametrize("quantity", [0, -1, True, 1.5])
def test_line_subtotal_rejects_bad_quantity(quantity) -> None:
    with pytest.raises(PricingValidationError):
        pricing_service.compute_line_subtotal(
            quantity, Decimal("10"), RateType.DAILY, JAN_1, JAN_4
        )


def test_line_subtotal_rejects_negative_rate() -> None:
    with pytest.raises(PricingValidationError):
        pricing_service.compute_line_subtotal(
            1, Decimal("-1"), RateType.DAILY, JAN_1, JAN_4
        )


def test_percentage_discount_applies_to_sum() -> None:
    discount = Discount(kind=DiscountType.PERCENTAGE, amount=Decimal("10"))
    total = pricing_service.compute_order_total(
        [Decimal("100"), Decimal("200")], discount
    )
    assert total == Decimal("270.00")


def test_fixed_discount_is_clamped_at_zero() -> None:
    discount = Discount(kind=DiscountType.FIXED, amount=Decimal("80"))
    assert pricing_service.compute_order_total([Decimal("50")], discount) == Decimal(
        "0.00"
    )


@pytest.mark.parametrize("kind", [DiscountType.PERCENTAGE, DiscountType.FIXED])
def test_zero_discount_leaves_sum_unchanged(kind) -> None:
    discount = Discount(kind=kind, amount=Decimal("0"))
    lines = [Decimal("19.99"), Decimal("0.01"), Decimal("80")]
    assert pricing_service.compute_order_total(lines, discount) == Decimal("100.00")


def test_order_total_accepts_objects_with_subtotal() -> None:
    lines = [SimpleNamespace(subtotal=Decimal("12.345")), SimpleNamespace(subtotal=1)]
    assert pricing_service.compute_order_total(lines) == Decimal("13.35")


def test_order_total_without_lines_is_zero() -> None:
    assert pricing_service.compute_order_total([]) == Decimal("0.00")


@pytest.mark.parametrize(
    ("kind", "amount"),
    [
        (DiscountType.PERCENTAGE, Decimal("100.01")),
        (DiscountType.PERCENTAGE, Decimal("-5")),
        (DiscountType.FIXED, Decimal("-0.01")),
        (DiscountType.FIXED, "abc"),
    ],
)
def test_discount_validation(kind, amount) -> None:
    with pytest.raises(PricingValidationError):
        Discount(kind=kind, amount=amount)


def test_build_discount_requires_both_parts() -> None:
    assert pricing_service.build_discount(None, Decimal("5")) is None
    assert pricing_service.build_discount(DiscountType.FIXED, None) is None
    with pytest.raises(PricingValidationError):
        pricing_service.build_discount("coupon", Decimal("5"))


def test_default_rate_type_prefers_daily() -> None:
    item = SimpleNamespace(
        hourly_rate=Decimal("5"),
        daily_rate=Decimal("30"),
        weekly_rate=None,
        monthly_rate=None,
    )
    assert pricing_service.default_rate_type(item) is RateType.DAILY
    item.daily_rate = None
    assert pricing_service.default_rate_type(item) is RateType.HOURLY
    item.hourly_rate = None
    assert pricing_service.default_rate_type(item) is None
    assert pricing_service.rate_for(item, "weekly") is None


def test_quote_order_breaks_down_lines() -> None:
    outcome = pricing_service.quote_order(
        [
            LineInput(quantity=2, rate_type=RateType.DAILY, rate_amount=Decimal("50")),
            LineInput(
                quantity=1,
                rate_type=RateType.WEEKLY,
                rate_amount=Decimal("120"),
                description="Trailer",
            ),
        ],
        start_date=JAN_1,
        end_date=JAN_4,
        discount=Discount(kind=DiscountType.PERCENTAGE, amount=Decimal("10")),
    )
    assert outcome.ok
    assert outcome.quote is not None
    first, second = outcome.quote.lines
    assert first.duration == 3
    assert first.subtotal == Decimal("300.00")
    assert first.description == "Line 1"
    assert second.duration == 1
    assert second.description == "Trailer"
    assert outcome.quote.subtotal == Decimal("420.00")
    assert outcome.quote.discount_total == Decimal("42.00")
    assert outcome.quote.total == Decimal("378.00")
    assert outcome.quote.to_dict()["total"] == "378.00"


def test_quote_order_rejects_reversed_dates() -> None:
    outcome = pricing_service.quote_order([], start_date=JAN_4, end_date=JAN_1)
    assert not outcome.ok
    assert outcome.quote is None
    assert "End date" in (outcome.error or "")


def test_quote_order_requires_dates() -> None:
    outcome = pricing_service.quote_order([], start_date=None, end_date=JAN_1)
    assert not outcome.ok
    assert outcome.error == "Start and end dates are required"


def test_quote_order_reports_failing_line() -> None:
    outcome = pricing_service.quote_order(
        [
            LineInput(quantity=1, rate_type=RateType.DAILY, rate_amount=Decimal("5")),
            LineInput(quantity=0, rate_type=RateType.DAILY, rate_amount=Decimal("5")),
        ],
        start_date=JAN_1,
        end_date=JAN_4,
    )
    assert not outcome.ok
    assert outcome.details == {"line": 1}


def test_quote_order_rejects_unknown_rate_type() -> None:
    outcome = pricing_service.quote_order(
        [LineInput(quantity=1, rate_type="yearly", rate_amount=Decimal("5"))],  # type: ignore[arg-type]
        start_date=JAN_1,
        end_date=JAN_4,
    )
    assert not outcome.ok
    assert outcome.details == {"line": 0}


def test_quote_order_same_day_prices_zero() -> None:
    outcome = pricing_service.quote_order(
        [LineInput(quantity=4, rate_type=RateType.DAILY, rate_amount=Decimal("25"))],
        start_date=JAN_1,
        end_date=JAN_1,
    )
    assert outcome.ok
    assert outcome.quote is not None
    assert outcome.quote.total == Decimal("0.00")
