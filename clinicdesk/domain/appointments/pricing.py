"""Appointment pricing"""


def final_price(base_price: float, discount_percentage: float) -> float:
    """
    Price after applying a percentage discount.

    No rounding is applied; currency formatting belongs to the presentation
    layer.
    """
    return base_price * (1 - discount_percentage / 100)
