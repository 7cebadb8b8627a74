"""
Input checks for data coming into the service.

The pricing functions trust their input; requests go through here first.
"""
from typing import Iterable, List

from errors import InvalidLineItem, UnsupportedCouponKind, InvalidCouponValue
from models import CartItem, Coupon, CouponIn, PercentCoupon, COUPON_KINDS


def validate_items(items: Iterable[CartItem]) -> List[CartItem]:
    checked = []
    for item in items:
        if item.price < 0:
            raise InvalidLineItem(item.id, "price", item.price)
        if item.qty < 0:
            raise InvalidLineItem(item.id, "quantity", item.qty)
        checked.append(item)
    return checked


def to_coupon(data: CouponIn) -> Coupon:
    if data.type not in COUPON_KINDS:
        raise UnsupportedCouponKind(data.type)
    if not 0 <= data.value <= 100:
        raise InvalidCouponValue("value", data.value, "is outside [0, 100]")
    if data.minAmount is not None and data.minAmount < 0:
        raise InvalidCouponValue("minAmount", data.minAmount, "is negative")

    return PercentCoupon(
        value=data.value,
        minAmount=data.minAmount,
        expiresAt=data.expiresAt,
    )
