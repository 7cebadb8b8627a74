class CartPricingError(ValueError):
    """Rejected cart or coupon input."""


class InvalidLineItem(CartPricingError):
    def __init__(self, item_id, field, value):
        self.item_id = item_id
        self.field = field
        self.value = value
        super().__init__(f"Line item '{item_id}' has negative {field}: {value}")


class UnsupportedCouponKind(CartPricingError):
    def __init__(self, kind):
        self.kind = kind
        super().__init__(f"Only 'percent' type coupons are allowed, got '{kind}'")


class InvalidCouponValue(CartPricingError):
    def __init__(self, field, value, reason):
        self.field = field
        self.value = value
        super().__init__(f"Coupon {field} {value} {reason}")
