"""Field validators.

Every validator takes one raw value as the caller sent it and returns
``Accepted(normalized)`` or ``Rejected(reason)``. ``None`` means the field
was not supplied and is accepted as ``Accepted(None)`` unless the caller
passes ``allow_absent=False`` (used for fields explicitly set to null in a
patch that cannot be cleared). Validators never touch I/O or the clock;
"today" is an argument.
"""

import re
from datetime import date, tzinfo
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, TypeVar

from orderdesk.core.dates import to_calendar_date
from orderdesk.core.result import Accepted, Rejected, Result

E = TypeVar("E", bound=Enum)

_INTEGER = re.compile(r"^[+-]?\d+$")


def parse_integer(value: Any) -> int | None:
    """Parse an integer from an int, an integral float or a digit string."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, Decimal):
        return int(value) if value.is_finite() and value == value.to_integral_value() else None
    if isinstance(value, str) and _INTEGER.match(value.strip()):
        return int(value.strip())
    return None


def parse_amount(value: Any) -> Decimal | None:
    """Parse a finite currency amount without going through binary floats."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float, str)):
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation:
            return None
    else:
        return None
    return amount if amount.is_finite() else None


def check_int_range(
    value: Any,
    *,
    field: str,
    label: str,
    minimum: int,
    maximum: int,
    allow_absent: bool = True,
) -> Result[int | None]:
    """Integer within ``[minimum, maximum]``. Out-of-range values are never clamped."""
    if value is None and allow_absent:
        return Accepted(None)
    parsed = parse_integer(value)
    if parsed is None or parsed < minimum or parsed > maximum:
        return Rejected(f"{label} must be a number between {minimum} and {maximum}", field)
    return Accepted(parsed)


def check_enum(
    value: Any,
    allowed: type[E],
    *,
    field: str,
    label: str,
    allow_absent: bool = True,
) -> Result[E | None]:
    """Exact membership in a closed set of string values."""
    if value is None and allow_absent:
        return Accepted(None)
    if isinstance(value, allowed):
        return Accepted(value)
    for member in allowed:
        if value == member.value:
            return Accepted(member)
    choices = ", ".join(member.value for member in allowed)
    return Rejected(f"Invalid {label}. Must be one of: {choices}", field)


def check_max_length(
    value: str | None,
    *,
    field: str,
    label: str,
    max_length: int,
) -> Result[str | None]:
    """Reject text longer than ``max_length``. Absence is always fine."""
    if value is not None and len(value) > max_length:
        return Rejected(f"{label} cannot exceed {max_length} characters", field)
    return Accepted(value)


def check_not_blank(
    value: str | None,
    *,
    field: str,
    label: str,
) -> Result[str]:
    """Require text with at least one non-space character; returns it trimmed."""
    if value is None or not value.strip():
        return Rejected(f"{label} cannot be empty", field)
    return Accepted(value.strip())


def check_date(
    value: Any,
    *,
    field: str,
    label: str,
    not_before: date | None = None,
    zone: tzinfo | None = None,
) -> Result[date | None]:
    """
    Parse a calendar date.

    ``None`` and the empty string mean "no date". When ``not_before`` is set,
    days strictly before it are rejected; time of day never matters.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return Accepted(None)
    parsed = to_calendar_date(value, zone) if isinstance(value, (date, str)) else None
    if parsed is None:
        return Rejected(f"Invalid {label}", field)
    if not_before is not None and parsed < not_before:
        return Rejected(f"{label.capitalize()} cannot be in the past", field)
    return Accepted(parsed)


def check_non_negative_amount(
    value: Any,
    *,
    field: str,
    label: str,
    allow_absent: bool = True,
) -> Result[Decimal | None]:
    if value is None and allow_absent:
        return Accepted(None)
    amount = parse_amount(value)
    if amount is None or amount < 0:
        return Rejected(f"{label} must be a valid non-negative number", field)
    return Accepted(amount)
