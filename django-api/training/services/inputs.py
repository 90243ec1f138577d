"""Parsing of untyped field maps into validated values.

Each parser takes the raw value and the field name and raises
ValidationError with a user-safe message when the value is unusable.
"""

from collections.abc import Callable, Mapping
from datetime import date, time
from decimal import Decimal
from typing import Any

from training.domain.errors import ValidationError
from training.domain.value_objects import Money

Parser = Callable[[Any, str], Any]

# Money columns are DECIMAL(10, 2): at most 8 integer digits and cents.
MAX_AMOUNT = Decimal(10) ** 8
CENT = Decimal("0.01")

_TRUE = {"true", "1", "yes", "on"}
_FALSE = {"false", "0", "no", "off", ""}


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def require(fields: Mapping[str, Any], key: str) -> Any:
    value = fields.get(key)
    if is_blank(value):
        raise ValidationError(f"{key} is required")
    return value


def text(value: Any, key: str) -> str:
    if is_blank(value):
        raise ValidationError(f"{key} must not be blank")
    if not isinstance(value, (str, int)) or isinstance(value, bool):
        raise ValidationError(f"{key} must be a string")
    return str(value).strip()


def optional_text(value: Any, key: str) -> str | None:
    if is_blank(value):
        return None
    return text(value, key)


def integer(value: Any, key: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{key} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise ValidationError(f"{key} must be an integer")


def positive_integer(value: Any, key: str) -> int:
    number = integer(value, key)
    if number <= 0:
        raise ValidationError(f"{key} must be a positive integer")
    return number


def boolean(value: Any, key: str) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
    raise ValidationError(f"{key} must be a boolean")


def amount(value: Any, key: str) -> Decimal:
    """Parse a money amount that fits a DECIMAL(10, 2) column exactly."""
    try:
        number = Money.from_raw(value).amount
    except ValueError as exc:
        raise ValidationError(f"{key} must be a non-negative amount") from exc
    if number >= MAX_AMOUNT:
        raise ValidationError(f"{key} must be less than {MAX_AMOUNT}")
    if number != number.quantize(CENT):
        raise ValidationError(f"{key} must have at most 2 decimal places")
    return number


def iso_date(value: Any, key: str) -> date:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError as exc:
        raise ValidationError(f"{key} must be a date (YYYY-MM-DD)") from exc


def iso_time(value: Any, key: str) -> time:
    if isinstance(value, time):
        return value
    try:
        return time.fromisoformat(str(value).strip())
    except ValueError as exc:
        raise ValidationError(f"{key} must be a time (HH:MM[:SS])") from exc


def pick(fields: Mapping[str, Any], parsers: Mapping[str, Parser]) -> dict[str, Any]:
    """Parse the keys of ``fields`` that have a parser; other keys are ignored.

    Keys absent from ``fields`` are absent from the result, which is what
    makes partial updates sparse.
    """
    return {key: parse(fields[key], key) for key, parse in parsers.items() if key in fields}
