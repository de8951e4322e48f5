"""Pricing engine for reservation line items and order totals.

Everything here is a pure function of its inputs. Callers re-invoke the
engine whenever quantities, rate types or the date range change; nothing is
cached between calls.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Iterable, Sequence
from uuid import UUID

from app.models.inventory import InventoryItem, RateType
from app.models.reservation import DiscountType

MONEY_PLACES = Decimal("0.01")
ZERO = Decimal("0.00")
HUNDRED = Decimal("100")

# A month is billed as exactly 30 days, not a calendar month.
_UNIT_LENGTHS: dict[RateType, datetime.timedelta] = {
    RateType.HOURLY: datetime.timedelta(hours=1),
    RateType.DAILY: datetime.timedelta(days=1),
    RateType.WEEKLY: datetime.timedelta(days=7),
    RateType.MONTHLY: datetime.timedelta(days=30),
}

_DEFAULT_RATE_ORDER = (
    RateType.DAILY,
    RateType.HOURLY,
    RateType.WEEKLY,
    RateType.MONTHLY,
)

DateLike = datetime.date | datetime.datetime | str | None


class PricingValidationError(ValueError):
    """Raised when pricing inputs are malformed or out of range."""


@dataclass(slots=True, frozen=True)
class Discount:
    """A single order-level discount."""

    kind: DiscountType
    amount: Decimal

    def __post_init__(self) -> None:
        kind = DiscountType(self.kind)
        amount = _to_decimal(self.amount, field_name="Discount amount")
        if amount < 0:
            raise PricingValidationError("Discount amount must not be negative")
        if kind is DiscountType.PERCENTAGE and amount > HUNDRED:
            raise PricingValidationError("Percentage discount cannot exceed 100")
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "amount", amount)

    def amount_off(self, subtotal: Decimal) -> Decimal:
        """Return how much this discount removes from ``subtotal``."""
        if self.kind is DiscountType.PERCENTAGE:
            return subtotal * self.amount / HUNDRED
        return self.amount


@dataclass(slots=True)
class LineInput:
    """Requested line item prior to pricing."""

    quantity: int
    rate_type: RateType
    rate_amount: Decimal | None
    inventory_item_id: UUID | None = None
    description: str | None = None


@dataclass(slots=True)
class PricingLine:
    """Priced line item contributing to a quote."""

    inventory_item_id: UUID | None
    description: str
    quantity: int
    rate_type: RateType
    rate_amount: Decimal
    duration: int
    subtotal: Decimal


@dataclass(slots=True)
class PricingQuote:
    """Aggregate pricing output for an order."""

    lines: list[PricingLine]
    subtotal: Decimal
    discount_total: Decimal
    total: Decimal

    def to_dict(self) -> dict[str, Any]:
        """Serialize the quote to plain types for responses."""

        def _serialize(line: PricingLine) -> dict[str, Any]:
            return {
                "inventory_item_id": (
                    str(line.inventory_item_id) if line.inventory_item_id else None
                ),
                "description": line.description,
                "quantity": line.quantity,
                "rate_type": line.rate_type.value,
                "rate_amount": _to_str(line.rate_amount),
                "duration": line.duration,
                "subtotal": _to_str(line.subtotal),
            }

        return {
            "lines": [_serialize(line) for line in self.lines],
            "subtotal": _to_str(self.subtotal),
            "discount_total": _to_str(self.discount_total),
            "total": _to_str(self.total),
        }


@dataclass(slots=True)
class PricingOutcome:
    """Typed result returned across the pricing boundary."""

    ok: bool
    quote: PricingQuote | None = None
    error: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def success(cls, quote: PricingQuote) -> PricingOutcome:
        return cls(ok=True, quote=quote)

    @classmethod
    def failure(cls, error: str, **details: Any) -> PricingOutcome:
        return cls(ok=False, error=error, details=details)


def to_money(value: Decimal | int | str) -> Decimal:
    """Quantize a value to two decimal places for storage and display."""
    return _to_decimal(value).quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)


def _to_str(value: Decimal) -> str:
    return f"{value.quantize(MONEY_PLACES, rounding=ROUND_HALF_UP):.2f}"


def _to_decimal(value: Any, *, field_name: str = "Amount") -> Decimal:
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool):
        raise PricingValidationError(f"{field_name} must be numeric")
    elif isinstance(value, float):
        result = Decimal(str(value))
    else:
        try:
            result = Decimal(value)
        except (InvalidOperation, TypeError, ValueError) as exc:
            raise PricingValidationError(f"{field_name} must be numeric") from exc
    if not result.is_finite():
        raise PricingValidationError(f"{field_name} must be finite")
    return result


def _coerce_datetime(value: DateLike) -> datetime.datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime.datetime):
        moment = value
    elif isinstance(value, datetime.date):
        moment = datetime.datetime.combine(value, datetime.time.min)
    elif isinstance(value, str):
        try:
            moment = datetime.datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    else:
        return None
    if moment.tzinfo is None:
        return moment.replace(tzinfo=datetime.UTC)
    return moment.astimezone(datetime.UTC)


def coerce_date(value: DateLike) -> datetime.date | None:
    """Return the calendar date for ``value`` or ``None`` when absent/invalid."""
    if isinstance(value, datetime.date) and not isinstance(value, datetime.datetime):
        return value
    moment = _coerce_datetime(value)
    return moment.date() if moment is not None else None


def compute_duration(
    start_date: DateLike, end_date: DateLike, rate_type: RateType | str
) -> int:
    """Return the number of billed units covering the range, rounded up.

    Missing or unparseable dates, and unknown rate types, yield 0. Identical
    start and end dates also yield 0 rather than a minimum of one unit.
    """
    start_at = _coerce_datetime(start_date)
    end_at = _coerce_datetime(end_date)
    if start_at is None or end_at is None:
        return 0
    try:
        unit = _UNIT_LENGTHS[RateType(rate_type)]
    except ValueError:
        return 0
    elapsed = abs(end_at - start_at)
    return -(-elapsed // unit)


def compute_line_subtotal(
    quantity: int,
    unit_rate: Decimal | int | str | None,
    rate_type: RateType | str,
    start_date: DateLike,
    end_date: DateLike,
) -> Decimal:
    """Return ``quantity * unit_rate * duration`` without rounding."""
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise PricingValidationError("Quantity must be a positive integer")
    if unit_rate is None:
        return ZERO
    rate = _to_decimal(unit_rate, field_name="Rate")
    if rate < 0:
        raise PricingValidationError("Rate must not be negative")
    duration = compute_duration(start_date, end_date, rate_type)
    if rate == 0 or duration == 0:
        return ZERO
    return Decimal(quantity) * rate * duration


def _line_amount(line: Any) -> Decimal:
    return _to_decimal(getattr(line, "subtotal", line), field_name="Subtotal")


def compute_discount_total(subtotal: Decimal, discount: Discount | None) -> Decimal:
    """Return the discount actually applied, never more than ``subtotal``."""
    if discount is None or subtotal <= 0:
        return ZERO
    return min(discount.amount_off(subtotal), subtotal)


def compute_order_total(lines: Iterable[Any], discount: Discount | None = None) -> Decimal:
    """Sum line subtotals and apply at most one discount, clamped at zero.

    ``lines`` may hold plain amounts or objects exposing ``subtotal``.
    """
    subtotal = sum((_line_amount(line) for line in lines), ZERO)
    total = subtotal - compute_discount_total(subtotal, discount)
    return to_money(max(total, ZERO))


def build_discount(
    kind: DiscountType | str | None, amount: Decimal | int | str | None
) -> Discount | None:
    """Return a validated discount, or ``None`` when none was requested."""
    if kind is None or amount is None:
        return None
    try:
        discount_kind = DiscountType(kind)
    except ValueError as exc:
        raise PricingValidationError(f"Unknown discount type: {kind}") from exc
    return Discount(kind=discount_kind, amount=amount)


def rate_for(item: InventoryItem, rate_type: RateType | str) -> Decimal | None:
    """Return the item's unit rate for the given granularity."""
    return getattr(item, f"{RateType(rate_type).value}_rate")


def default_rate_type(item: InventoryItem) -> RateType | None:
    """Pick the first rate the item offers, preferring daily."""
    for rate_type in _DEFAULT_RATE_ORDER:
        if rate_for(item, rate_type):
            return rate_type
    return None


def quote_order(
    lines: Sequence[LineInput],
    *,
    start_date: DateLike,
    end_date: DateLike,
    discount: Discount | None = None,
) -> PricingOutcome:
    """Price a set of lines over a date range.

    Validation problems come back as a failed outcome instead of raising.
    """
    start = _coerce_datetime(start_date)
    end = _coerce_datetime(end_date)
    if start is None or end is None:
        return PricingOutcome.failure("Start and end dates are required")
    if start > end:
        return PricingOutcome.failure("End date must not be before start date")

    priced: list[PricingLine] = []
    for index, line in enumerate(lines):
        try:
            rate_type = RateType(line.rate_type)
        except ValueError:
            return PricingOutcome.failure(
                f"Unknown rate type: {line.rate_type}", line=index
            )
        try:
            subtotal = compute_line_subtotal(
                line.quantity, line.rate_amount, rate_type, start, end
            )
        except PricingValidationError as exc:
            return PricingOutcome.failure(str(exc), line=index)
        priced.append(
            PricingLine(
                inventory_item_id=line.inventory_item_id,
                description=line.description or f"Line {index + 1}",
                quantity=line.quantity,
                rate_type=rate_type,
                rate_amount=to_money(line.rate_amount or ZERO),
                duration=compute_duration(start, end, rate_type),
                subtotal=to_money(subtotal),
            )
        )

    subtotal = sum((line.subtotal for line in priced), ZERO)
    discount_total = to_money(compute_discount_total(subtotal, discount))
    return PricingOutcome.success(
        PricingQuote(
            lines=priced,
            subtotal=to_money(subtotal),
            discount_total=discount_total,
            total=compute_order_total(priced, discount),
        )
    )
