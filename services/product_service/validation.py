from typing import Any

from shared.errors import ValidationError, field_error
from shared.validation import is_number


def validate_product(name: Any, price: Any, stock: Any) -> None:
    """Checks a complete product record; raises ValidationError listing every bad field."""
    errors = []

    if name is None or not isinstance(name, str) or not name.strip():
        errors.append(field_error("name", "is required"))

    if price is None:
        errors.append(field_error("price", "is required"))
    elif not is_number(price):
        errors.append(field_error("price", "must be a number"))

    if stock is None:
        errors.append(field_error("stock", "is required"))
    elif not isinstance(stock, int) or isinstance(stock, bool):
        errors.append(field_error("stock", "must be an integer"))
    elif stock < 0:
        errors.append(field_error("stock", "must be greater than or equal to 0"))

    if errors:
        raise ValidationError(errors)
