"""
Cart total: subtotal -> coupon (if eligible) -> tax -> rounding.

Amounts are minor currency units. Nothing is rounded until `finalize`.
"""
import logging
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from models import CartItem, Coupon

logger = logging.getLogger(__name__)

TAX_RATE = 0.8

EXPIRED = "expired"
BELOW_MINIMUM = "below_minimum"


def subtotal(items: Iterable[CartItem]) -> int:
    return sum(item.price * item.qty for item in items)


def ineligibility_reason(subtotal: float, coupon: Coupon, now: datetime) -> Optional[str]:
    """Name of the first rule the coupon fails, or None if it can be applied.

    Both bounds are strict: a coupon expiring exactly at `now`, or a subtotal
    exactly at `minAmount`, still qualifies. A naive `now` is read as UTC.
    """
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    if coupon.expiresAt is not None and coupon.expiresAt < now:
        return EXPIRED
    if coupon.minAmount is not None and subtotal < coupon.minAmount:
        return BELOW_MINIMUM
    return None


def is_eligible(subtotal: float, coupon: Coupon, now: datetime) -> bool:
    return ineligibility_reason(subtotal, coupon, now) is None


def apply_discount(subtotal: float, coupon: Coupon) -> float:
    return subtotal * (1 - coupon.value / 100)


def finalize(amount: float) -> int:
    """Add tax and round half away from zero to a whole minor unit."""
    taxed = Decimal(amount * (1 + TAX_RATE))
    return int(taxed.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def calculate_cart_total(items: Iterable[CartItem], coupon: Optional[Coupon] = None,
                         now: Optional[datetime] = None) -> int:
    """
    Final amount due for a cart.

    `now` is the reference time for coupon expiry. When omitted the UTC wall
    clock is read once, and only if a coupon was given.
    """
    amount = subtotal(items)

    if coupon is not None:
        if now is None:
            now = datetime.now(timezone.utc)
        reason = ineligibility_reason(amount, coupon, now)
        if reason is None:
            amount = apply_discount(amount, coupon)
        else:
            logger.debug("Coupon ignored (%s) for subtotal %s", reason, amount)

    return finalize(amount)
