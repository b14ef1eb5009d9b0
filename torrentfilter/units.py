# Upload Assistant © 2025 Audionut & wastaken7 — Licensed under UAPL v1.0
import math
import re
from datetime import datetime, timezone
from typing import Literal, Optional

from typing_extensions import TypeAlias

SizeUnit: TypeAlias = Literal["B", "KiB", "MiB", "GiB", "TiB"]
SpeedUnit: TypeAlias = Literal["B/s", "KiB/s", "MiB/s", "GiB/s", "TiB/s"]
DurationUnit: TypeAlias = Literal["seconds", "minutes", "hours", "days"]

_K = 1024

UNIT_MULTIPLIERS: dict[str, int] = {
    "B": 1,
    "KiB": _K,
    "MiB": _K ** 2,
    "GiB": _K ** 3,
    "TiB": _K ** 4,
    "B/s": 1,
    "KiB/s": _K,
    "MiB/s": _K ** 2,
    "GiB/s": _K ** 3,
    "TiB/s": _K ** 4,
}

DURATION_MULTIPLIERS: dict[str, int] = {
    "seconds": 1,
    "minutes": 60,
    "hours": 3600,
    "days": 86400,
}

# Decimal literal with optional exponent, nothing else
_NUMBER_RE = re.compile(r'^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$')


def parse_number(value: Optional[str]) -> Optional[float]:
    """Parse a user supplied operand, returning None unless the whole string is a finite number."""
    if value is None:
        return None
    text = str(value).strip()
    if not _NUMBER_RE.match(text):
        return None
    number = float(text)
    if not math.isfinite(number):
        return None
    return number


def format_number(value: float) -> str:
    """
    Shortest round-trip text for `value`, laid out the way the web UI prints numbers.

    Plain decimals from 1e-7 up to 1e21, exponent form outside that range
    ("1e-7", "1.5e+21"), and never a trailing ".0".
    """
    number = float(value)
    if number == 0:
        return "0"

    mantissa, _, exponent = repr(number).partition("e")
    sign = "-" if mantissa.startswith("-") else ""
    int_part, _, frac_part = mantissa.lstrip("-").partition(".")
    raw_digits = str(int(int_part + frac_part))
    digits = raw_digits.rstrip("0")
    # value == int(digits) * 10 ** scale
    scale = int(exponent or 0) - len(frac_part) + len(raw_digits) - len(digits)

    # point == position of the decimal point relative to the first digit
    count = len(digits)
    point = count + scale
    if count <= point <= 21:
        text = digits + "0" * (point - count)
    elif 0 < point <= 21:
        text = f"{digits[:point]}.{digits[point:]}"
    elif -6 < point <= 0:
        text = "0." + "0" * -point + digits
    else:
        power = point - 1
        suffix = f"e{'+' if power >= 0 else '-'}{abs(power)}"
        text = (digits if count == 1 else f"{digits[0]}.{digits[1:]}") + suffix
    return sign + text


def convert_size_to_bytes(value: float, unit: str) -> int:
    return math.floor(value * UNIT_MULTIPLIERS[unit])


def convert_duration_to_seconds(value: float, unit: str) -> int:
    return math.floor(value * DURATION_MULTIPLIERS[unit])


def convert_percentage_to_fraction(value: float) -> float:
    return value / 100


def parse_date(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO 8601 date or date-time string into an aware datetime.

    Date-only strings and naive date-times are taken as UTC. Returns None for
    anything that is not a valid date.
    """
    if not value:
        return None
    text = str(value).strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def convert_date_to_timestamp(value: Optional[str]) -> float:
    """Floored epoch seconds for `value`, NaN when it does not parse."""
    parsed = parse_date(value)
    if parsed is None:
        return math.nan
    return math.floor(parsed.timestamp())
