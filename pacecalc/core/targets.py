from __future__ import annotations
import math
import re
from decimal import Decimal
from typing import Any, Dict, List, Optional, Union

import pandas as pd
from loguru import logger

from pacecalc.core.models import Mode, TargetRow
from pacecalc.core.pace import format_pace, format_speed, is_valid_pace, leading_float, parse_pace

_PCT_SEPARATORS = re.compile(r'[,\s]+')

TARGET_COLUMNS = ['pct', 'pace_s_per_km', 'pace', 'kph', 'speed']


def _div(a: float, b: float) -> float:
    # x / 0 -> inf, for percentages small enough to underflow
    return a / b if b else math.inf


def _coerce_mode(mode: Union[Mode, str, None]) -> Mode:
    if mode is None:
        return Mode.SPEED
    try:
        return Mode(mode)
    except (TypeError, ValueError):
        logger.debug(f'Unknown target mode {mode!r}, using {Mode.SPEED.value}')
        return Mode.SPEED


def parse_percentages(text: Optional[str]) -> List[float]:
    '''
    "50,, 70 80" -> [50.0, 70.0, 80.0]
    Keeps input order and duplicates; drops blanks, junk and values <= 0.
    '''
    pcts: List[float] = []
    for token in _PCT_SEPARATORS.split(text or ''):
        token = token.strip()
        if not token:
            continue
        value = leading_float(token)
        if not math.isfinite(value) or value <= 0:
            logger.debug(f'Dropping percentage token {token!r}')
            continue
        pcts.append(value)
    return pcts


def compute_targets(
    base_pace: Any,
    percentages: Optional[str],
    mode: Union[Mode, str, None] = Mode.SPEED,
) -> List[TargetRow]:
    '''
    One row per usable percentage of the base pace.

    Mode.SPEED scales the base *speed*: 110% is faster than base, 90% slower.
    Mode.PACE scales the base pace *time*: 80% of 6:00 is 4:48 /km (faster).

    An unusable base pace gives an empty list (nothing typed yet), not an error.
    '''
    base_sec = parse_pace(base_pace)
    if not is_valid_pace(base_sec):
        return []

    mode = _coerce_mode(mode)
    base_speed = 1000.0 / base_sec  # m/s

    rows: List[TargetRow] = []
    for pct in parse_percentages(percentages):
        if mode is Mode.SPEED:
            spd = base_speed * (pct / 100.0)
            pace_sec = _div(1000.0, spd)
            kph = spd * 3.6
        else:
            pace_sec = base_sec * (pct / 100.0)
            kph = _div(3600.0, pace_sec)
        rows.append(TargetRow(percentage=pct, pace_seconds=pace_sec, kph=kph))
    return rows


def format_percentage(pct: float) -> str:
    '''
    Shortest round-trip digits, laid out the way a browser prints numbers:
    110.0 -> "110", 92.5 -> "92.5", 1e21 -> "1e+21", 1e-7 -> "1e-7"
    '''
    x = float(pct)
    if not math.isfinite(x):
        return "Infinity" if x > 0 else "-Infinity" if x < 0 else "NaN"
    if x == 0:
        return "0"
    sign = "-" if x < 0 else ""
    _, digit_tuple, exp = Decimal(repr(abs(x))).normalize().as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    k = len(digits)
    n = k + exp  # decimal point position relative to the first digit

    if k <= n <= 21:
        return sign + digits + "0" * (n - k)
    if 0 < n <= 21:
        return sign + digits[:n] + "." + digits[n:]
    if -6 < n <= 0:
        return sign + "0." + "0" * -n + digits
    e = n - 1
    mantissa = digits if k == 1 else digits[0] + "." + digits[1:]
    return f"{sign}{mantissa}e{'+' if e >= 0 else '-'}{abs(e)}"


def row_to_dict(row: TargetRow) -> Dict[str, Any]:
    return {
        'pct': row.percentage,
        'pace_s_per_km': row.pace_seconds if math.isfinite(row.pace_seconds) else None,
        'pace': format_pace(row.pace_seconds),
        'kph': row.kph if math.isfinite(row.kph) else None,
        'speed': format_speed(row.kph),
    }


def targets_to_frame(rows: List[TargetRow]) -> pd.DataFrame:
    '''
    Target table as a DataFrame (columns: TARGET_COLUMNS), for CSV export and
    terminal display.
    '''
    return pd.DataFrame([row_to_dict(r) for r in rows], columns=TARGET_COLUMNS)
