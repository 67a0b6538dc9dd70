"""Normalisation of caller-supplied numbers and dates into column-ready values.

Money columns are ``NUMERIC(12, 2)``; callers may send floats, ints, Decimals
or numeric strings. Dates may arrive as ``date``, ``datetime`` or ISO strings.
"""


from datetime import date, datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from consignment.core.exceptions import ValidationError

_CENTS = Decimal("0.01")

Numeric = int | float | str | Decimal


def _parse_decimal(value: Numeric) -> Decimal:
    try:
        # str() first so floats keep their printed value (0.1 -> "0.1")
        parsed = Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ValidationError(f"Invalid numeric value: {value!r}") from exc
    if not parsed.is_finite():
        raise ValidationError(f"Invalid numeric value: {value!r}")
    return parsed.quantize(_CENTS, rounding=ROUND_HALF_UP)


def to_db_numeric(value: Numeric | None) -> Decimal:
    """Money value, ``0.00`` when missing."""
    if value is None:
        return Decimal("0.00")
    return _parse_decimal(value)


def to_db_numeric_optional(value: Numeric | None) -> Decimal | None:
    if value is None:
        return None
    return _parse_decimal(value)


def _parse_datetime(value: str | date | datetime) -> datetime:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    else:
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError as exc:
            raise ValidationError(f"Invalid date value: {value!r}") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def to_db_date(value: str | date | datetime | None) -> date:
    """Calendar date (UTC), today when missing."""
    if value is None:
        return datetime.now(timezone.utc).date()
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    return _parse_datetime(value).date()


def to_db_date_optional(value: str | date | datetime | None) -> date | None:
    if value is None:
        return None
    return to_db_date(value)


def to_db_timestamp(value: str | date | datetime | None) -> datetime:
    """Timezone-aware UTC timestamp, now when missing."""
    if value is None:
        return datetime.now(timezone.utc)
    return _parse_datetime(value)
