import logging
import os
from functools import lru_cache
from typing import Optional

import firebase_admin
from firebase_admin import credentials, db
from dotenv import load_dotenv
from pydantic import ValidationError

from errors import CartPricingError
from models import Coupon, CouponIn
from validation import to_coupon

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

# Path to Firebase service account JSON
FIREBASE_CRED_PATH = os.getenv("FIREBASE_CRED_JSON", "./firebase-adminsdk.json")
FIREBASE_DB_URL = os.getenv("FIREBASE_DB_URL")


@lru_cache(maxsize=None)
def get_db_ref():
    """Root reference of the Realtime Database, initialising the app on first use."""
    if not firebase_admin._apps:
        try:
            cred = credentials.Certificate(FIREBASE_CRED_PATH)
            firebase_admin.initialize_app(cred, {
                'databaseURL': FIREBASE_DB_URL
            })
        except Exception as e:
            logger.exception("Firebase initialization failed")
            raise RuntimeError(f"Firebase initialization failed: {e}") from e
    return db.reference("/")


def _coupon_ref(db_ref, code: str):
    return db_ref.child("coupons").child(code.strip().upper())


def coupon_exists(db_ref, code: str) -> bool:
    return bool(_coupon_ref(db_ref, code).get())


def load_coupon(db_ref, code: str) -> Optional[Coupon]:
    """Stored coupon for `code`, or None when missing or unusable."""
    data = _coupon_ref(db_ref, code).get()
    if not data:
        logger.warning("Coupon '%s' not found", code)
        return None

    try:
        return to_coupon(CouponIn(**data))
    except (ValidationError, CartPricingError) as e:
        logger.warning("Stored coupon '%s' is invalid: %s", code, e)
        return None


def save_coupon(db_ref, code: str, coupon: Coupon) -> None:
    _coupon_ref(db_ref, code).set(coupon.model_dump(mode="json", exclude_none=True))
    logger.info("Coupon '%s' saved", code.strip().upper())
