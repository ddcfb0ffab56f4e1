from __future__ import annotations
import math
import re
from typing import Any, Callable, Optional, Tuple

from pacecalc.core.models import PLACEHOLDER, UNDEFINED

SECONDS_PER_HOUR = 3600.0

_PURE_SECONDS = re.compile(r'^\d+(\.\d+)?$', re.ASCII)
_MIN_SEC = re.compile(r'^(\d{1,2})\s*[:m]\s*(\d{1,2})$', re.ASCII | re.IGNORECASE)
_NON_DIGITS = re.compile(r'[^\d]+', re.ASCII)
# Longest leading decimal literal, the way a browser's parseFloat reads it
_LEADING_FLOAT = re.compile(r'^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?', re.ASCII)
_INFINITY = re.compile(r'^[+-]?Infinity')


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _to_float(value: Any) -> float:
    # Ints too big for a double become +/-inf instead of raising
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


def _round_half_up(x: float) -> int:
    # round() is banker's rounding; paces need 0.5 -> 1
    return int(math.floor(x + 0.5))


def leading_float(text: str) -> float:
    '''
    Parse the leading number of a string, ignoring trailing junk.
    "12.5km" -> 12.5, "1e2" -> 100.0, "abc" -> NaN
    '''
    s = text.strip()
    if _INFINITY.match(s):
        return float('-inf') if s.startswith('-') else float('inf')
    m = _LEADING_FLOAT.match(s)
    if not m:
        return UNDEFINED
    return float(m.group(0))


# --- pace grammar: each matcher returns seconds or None (no match) ---

def _match_pure_seconds(s: str) -> Optional[float]:
    if _PURE_SECONDS.match(s):
        return float(s)
    return None


def _match_min_sec(s: str) -> Optional[float]:
    m = _MIN_SEC.match(s)
    if m is None:
        return None
    return float(m.group(1)) * 60 + float(m.group(2))


def _match_two_numbers(s: str) -> Optional[float]:
    parts = [p for p in _NON_DIGITS.split(s) if p]
    if len(parts) != 2:
        return None
    # float() of a huge digit run is inf, int() would overflow or hit the digit limit
    return float(parts[0]) * 60 + float(parts[1])


PACE_MATCHERS: Tuple[Callable[[str], Optional[float]], ...] = (
    _match_pure_seconds,
    _match_min_sec,
    _match_two_numbers,
)


def parse_pace(value: Any) -> float:
    '''
    Convert a pace to seconds per km. Accepts:
        - a number (already seconds per km, passed through)
        - "330" or "330.5" (raw seconds)
        - "5:30", "5:3", "5m30", "5 m 30"
        - any two numbers split by non-digits, e.g. "5 30" or 5'30"
    Returns NaN when nothing matches. Never raises.
    '''
    if _is_number(value):
        return _to_float(value)

    s = ('' if value is None else str(value)).strip()
    if not s:
        return UNDEFINED

    for matcher in PACE_MATCHERS:
        seconds = matcher(s)
        if seconds is not None:
            return float(seconds)
    return UNDEFINED


def is_valid_pace(seconds: Any) -> bool:
    return _is_number(seconds) and math.isfinite(_to_float(seconds)) and seconds > 0


def format_pace(seconds: Any) -> str:
    '''
    Render seconds per km as "M:SS /km", or the placeholder for anything
    that isn't a finite positive number.
    '''
    if not is_valid_pace(seconds):
        return PLACEHOLDER
    total = _round_half_up(_to_float(seconds))
    return f'{total // 60}:{total % 60:02d} /km'


def format_speed(kph: Any) -> str:
    # One decimal place, e.g. 10.0 / 12.5
    if not _is_number(kph) or not math.isfinite(_to_float(kph) * 10):
        return PLACEHOLDER
    return f'{_round_half_up(_to_float(kph) * 10) / 10:.1f}'


def pace_from_kph(kph: Any) -> float:
    if not _is_number(kph) or not kph > 0:
        return UNDEFINED
    return (60.0 / _to_float(kph)) * 60.0


def kph_from_pace(pace: Any) -> float:
    seconds = parse_pace(pace)
    if not is_valid_pace(seconds):
        return UNDEFINED
    return SECONDS_PER_HOUR / seconds


def parse_speed(value: Any) -> float:
    '''
    Read a treadmill speed field. Numbers pass through; text is read up to the
    first non-numeric character and anything unreadable counts as 0.
    '''
    if _is_number(value):
        kph = _to_float(value)
    else:
        kph = leading_float('' if value is None else str(value))
    return 0.0 if math.isnan(kph) else kph
