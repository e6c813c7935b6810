from typing import Any, Optional

from shared.errors import ValidationError, field_error
from shared.validation import is_number

from .models import OrderStatus
from .schemas import OrderLineCreate


def validate_order_lines(lines: list[OrderLineCreate]) -> None:
    errors = []
    for index, line in enumerate(lines):
        prefix = f"lines.{index}"
        if line.product is None:
            errors.append(field_error(f"{prefix}.product", "is required"))

        if line.quantity is None:
            errors.append(field_error(f"{prefix}.quantity", "is required"))
        elif line.quantity < 1:
            errors.append(field_error(f"{prefix}.quantity", "must be greater than or equal to 1"))

        if line.price is None:
            errors.append(field_error(f"{prefix}.price", "is required"))
        elif not is_number(line.price):
            errors.append(field_error(f"{prefix}.price", "must be a number"))

    if errors:
        raise ValidationError(errors)

def resolve_status(status: Optional[str]) -> OrderStatus:
    if status is None:
        return OrderStatus.PENDING
    try:
        return OrderStatus(status)
    except ValueError:
        allowed = ", ".join(s.value for s in OrderStatus)
        raise ValidationError([field_error("status", f"must be one of: {allowed}")]) from None

def accept_total_amount(lines: list[OrderLineCreate], total_amount: Any) -> float:
    """
    Decides the persisted order total.

    The client-supplied amount is stored verbatim; ``lines`` is not consulted.
    Recomputing ``sum(price * quantity)`` here is the place to tighten that.
    """
    if total_amount is None:
        raise ValidationError([field_error("totalAmount", "is required")])
    if not is_number(total_amount):
        raise ValidationError([field_error("totalAmount", "must be a number")])
    return float(total_amount)
