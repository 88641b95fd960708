from gameprice.engine.pricing import calculate_discounted_price, to_decimal_price

__all__ = [
    "calculate_discounted_price",
    "to_decimal_price",
]
