from numbers import Real
from typing import Any

# Integer columns are 32-bit on PostgreSQL; bigger values never reach the driver
DB_INT_MAX = 2**31 - 1


def is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)
