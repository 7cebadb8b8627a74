import logging
import os
from datetime import datetime, timezone

import uvicorn
from fastapi.middleware.cors import CORSMiddleware
from fastapi import FastAPI, Header, HTTPException
from dotenv import load_dotenv

from models import (
    CouponCreate, CouponResponse,
    CouponValidateRequest, CouponValidateResponse,
    CartTotalRequest, CartTotalResponse,
)
from cart_calculator import (
    EXPIRED, BELOW_MINIMUM,
    subtotal, ineligibility_reason, apply_discount, calculate_cart_total,
)
from errors import CartPricingError
from firebase_util import get_db_ref, load_coupon, coupon_exists, save_coupon
from validation import validate_items, to_coupon

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI()


def cors_origins():
    raw = os.getenv("CORS_ORIGINS", "http://127.0.0.1:5500")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


# Allow frontend CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

ADMIN_KEY = os.getenv("ADMIN_API_KEY")


# Admin API key check
def check_admin(api_key: str):
    if not ADMIN_KEY or api_key != ADMIN_KEY:
        raise HTTPException(status_code=401, detail="Invalid API key")


def _rejected(err: CartPricingError) -> HTTPException:
    logger.info("Rejected input: %s", err)
    return HTTPException(status_code=400, detail=str(err))


# 1. CREATE COUPON
@app.post("/api/coupons", response_model=CouponResponse)
def create_coupon(coupon: CouponCreate, api_key: str = Header(..., alias="x-api-key")):
    check_admin(api_key)

    try:
        parsed = to_coupon(coupon)
    except CartPricingError as e:
        raise _rejected(e)

    db_ref = get_db_ref()
    code = coupon.code.strip().upper()
    if coupon_exists(db_ref, code):
        raise HTTPException(status_code=409, detail="Coupon code already exists")

    save_coupon(db_ref, code, parsed)
    return {"message": f"✅ Coupon {code} created successfully"}


# 2. VALIDATE COUPON AGAINST A CART
@app.post("/api/coupons/validate", response_model=CouponValidateResponse)
def validate_coupon(body: CouponValidateRequest):
    code = body.code.strip().upper()

    try:
        items = validate_items(body.cart)
    except CartPricingError as e:
        raise _rejected(e)

    coupon = load_coupon(get_db_ref(), code)
    if coupon is None:
        return {
            "valid": False,
            "message": "❌ Invalid coupon"
        }

    now = datetime.now(timezone.utc)
    amount = subtotal(items)
    reason = ineligibility_reason(amount, coupon, now)

    if reason == EXPIRED:
        return {
            "valid": False,
            "message": "❌ Coupon has expired"
        }
    if reason == BELOW_MINIMUM:
        return {
            "valid": False,
            "message": f"❌ Cart subtotal is below the coupon minimum of {coupon.minAmount}"
        }

    return {
        "valid": True,
        "discount": amount - apply_discount(amount, coupon),
        "newTotal": calculate_cart_total(items, coupon, now),
        "message": f"✅ {code} applied – {coupon.value:g}% off"
    }


# 3. CART TOTAL
@app.post("/api/cart/total", response_model=CartTotalResponse)
def cart_total(body: CartTotalRequest):
    if body.coupon is not None and body.couponCode:
        raise HTTPException(status_code=400, detail="Send either coupon or couponCode, not both")

    try:
        items = validate_items(body.items)
        coupon = to_coupon(body.coupon) if body.coupon is not None else None
    except CartPricingError as e:
        raise _rejected(e)

    if body.couponCode:
        coupon = load_coupon(get_db_ref(), body.couponCode)
        if coupon is None:
            raise HTTPException(status_code=404, detail="Coupon not found")

    now = datetime.now(timezone.utc)
    amount = subtotal(items)
    reason = ineligibility_reason(amount, coupon, now) if coupon is not None else None

    return {
        "subtotal": amount,
        "couponApplied": coupon is not None and reason is None,
        "reason": reason,
        "total": calculate_cart_total(items, coupon, now),
    }


def run():
    uvicorn.run(app, host=os.getenv("HOST", "127.0.0.1"), port=int(os.getenv("PORT", "8000")))


if __name__ == "__main__":
    run()
