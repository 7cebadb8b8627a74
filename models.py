from datetime import datetime, timezone
from typing import Literal, Optional, List
from pydantic import BaseModel, ConfigDict, field_validator

COUPON_KINDS = ("percent",)


class CartItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    price: int  # unit price, minor currency units
    qty: int


class PercentCoupon(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["percent"] = "percent"
    value: float
    minAmount: Optional[int] = None
    expiresAt: Optional[datetime] = None

    @field_validator("expiresAt")
    @classmethod
    def _assume_utc(cls, v):
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


# Only one kind so far; new kinds join here as a Union discriminated on `type`
Coupon = PercentCoupon


class CouponIn(BaseModel):
    type: str = "percent"
    value: float
    minAmount: Optional[int] = None
    expiresAt: Optional[datetime] = None


class CouponCreate(CouponIn):
    code: str


class CouponResponse(BaseModel):
    message: str


class CartTotalRequest(BaseModel):
    items: List[CartItem]
    coupon: Optional[CouponIn] = None
    couponCode: Optional[str] = None


class CartTotalResponse(BaseModel):
    subtotal: int
    couponApplied: bool
    reason: Optional[str] = None
    total: int


class CouponValidateRequest(BaseModel):
    code: str
    cart: List[CartItem]


class CouponValidateResponse(BaseModel):
    valid: bool
    discount: Optional[float] = 0
    newTotal: Optional[int] = 0
    message: str
